"""Simulated host world used by the CLI, the API server and tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from scoutwatch.sim.generator import WorldGenerator
from scoutwatch.sim.world import SimActor, SimAgent, SimulatedWorld
from scoutwatch.systems.rng import DeterministicRNG

if TYPE_CHECKING:
    from scoutwatch.config import MonitorConfig


def build_world(config: MonitorConfig) -> SimulatedWorld:
    """Create and populate a world from the configured seed."""
    rng = DeterministicRNG(config.world_seed)
    generator = WorldGenerator(config, rng)
    world = SimulatedWorld(config.world_seed, rng, generator)
    generator.populate(world)
    return world


__all__ = ["SimActor", "SimAgent", "SimulatedWorld", "WorldGenerator", "build_world"]
