"""Monitor systems: clocks, TTL cache, cooldown registry, deterministic RNG."""

from scoutwatch.systems.cache import ExpiringCache
from scoutwatch.systems.clock import ManualClock, monotonic_ms
from scoutwatch.systems.cooldowns import CooldownRegistry, cooldown_key
from scoutwatch.systems.rng import DeterministicRNG

__all__ = [
    "CooldownRegistry",
    "DeterministicRNG",
    "ExpiringCache",
    "ManualClock",
    "cooldown_key",
    "monotonic_ms",
]
