"""Valuable-resource scanner over a cube of terrain around an agent."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from scoutwatch.core.catalogs import VALUABLE_RESOURCES
from scoutwatch.core.models import ResourceFind

if TYPE_CHECKING:
    from scoutwatch.core.environment import Environment
    from scoutwatch.core.models import Vector3


class ResourceScanner:
    """Exhaustive O(r³) scan with direct terrain queries.

    Only run at the coarse scan interval; results are ranked by rarity.
    """

    __slots__ = ("_env", "_radius")

    def __init__(self, env: Environment, radius: int = 5) -> None:
        self._env = env
        self._radius = radius

    def scan(self, dimension: str, position: Vector3) -> list[ResourceFind]:
        r = self._radius
        finds: list[ResourceFind] = []
        for dx in range(-r, r + 1):
            for dy in range(-r, r + 1):
                for dz in range(-r, r + 1):
                    cell = position.offset(dx, dy, dz).floored()
                    cell_type = self._env.query_terrain_cell(dimension, cell)
                    resource = VALUABLE_RESOURCES.get(cell_type) if cell_type else None
                    if resource is None:
                        continue
                    finds.append(ResourceFind(
                        cell_type=cell_type,
                        rarity=resource.rarity,
                        message=resource.message,
                        distance=math.hypot(dx, dy, dz),
                    ))
        finds.sort(key=lambda f: f.rarity, reverse=True)
        return finds
