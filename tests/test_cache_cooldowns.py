"""Tests for the TTL cache and the cooldown registry."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from scoutwatch.systems.cache import ExpiringCache
from scoutwatch.systems.clock import ManualClock
from scoutwatch.systems.cooldowns import CooldownRegistry, cooldown_key


# ---------------------------------------------------------------------------
# ExpiringCache
# ---------------------------------------------------------------------------

class TestExpiringCache:
    def test_get_within_ttl_returns_value(self):
        clock = ManualClock()
        cache = ExpiringCache(200, clock)
        cache.set("k", "plains")
        clock.advance(150)
        assert cache.get("k") == "plains"

    def test_value_still_present_exactly_at_expiry(self):
        clock = ManualClock()
        cache = ExpiringCache(200, clock)
        cache.set("k", 1)
        clock.advance(200)
        assert cache.get("k") == 1

    def test_read_past_expiry_is_absent_and_evicts(self):
        clock = ManualClock()
        cache = ExpiringCache(40, clock)
        cache.set("k", "lava")
        assert len(cache) == 1
        clock.advance(41)
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_missing_key_is_none(self):
        cache = ExpiringCache(100, ManualClock())
        assert cache.get("nope") is None
        assert "nope" not in cache

    def test_set_refreshes_expiry(self):
        clock = ManualClock()
        cache = ExpiringCache(100, clock)
        cache.set("k", "a")
        clock.advance(80)
        cache.set("k", "b")
        clock.advance(80)
        assert cache.get("k") == "b"

    def test_clear_empties(self):
        cache = ExpiringCache(100, ManualClock())
        for i in range(5):
            cache.set(i, i)
        cache.clear()
        assert len(cache) == 0

    def test_expired_entries_linger_until_read(self):
        """No background sweep: size only drops when a stale key is read."""
        clock = ManualClock()
        cache = ExpiringCache(10, clock)
        cache.set("a", 1)
        cache.set("b", 2)
        clock.advance(50)
        assert len(cache) == 2
        cache.get("a")
        assert len(cache) == 1


# ---------------------------------------------------------------------------
# CooldownRegistry
# ---------------------------------------------------------------------------

class TestCooldownKey:
    def test_without_subtype(self):
        assert cooldown_key("ore", "a1") == "ore:a1"

    def test_with_subtype(self):
        assert cooldown_key("threat", "a1", "mob") == "threat:a1:mob"

    def test_deterministic(self):
        assert cooldown_key("quest", "x") == cooldown_key("quest", "x")


class TestCooldownRegistry:
    def test_never_fired_is_not_on_cooldown(self):
        reg = CooldownRegistry(50, ManualClock())
        assert not reg.is_on_cooldown("threat:a1:mob", 100)

    def test_on_cooldown_inside_window(self):
        clock = ManualClock()
        reg = CooldownRegistry(50, clock)
        reg.set_cooldown("k")
        clock.advance(100 * 50 - 1)
        assert reg.is_on_cooldown("k", 100)

    def test_off_cooldown_once_window_elapsed(self):
        clock = ManualClock()
        reg = CooldownRegistry(50, clock)
        reg.set_cooldown("k")
        clock.advance(100 * 50)
        assert not reg.is_on_cooldown("k", 100)

    def test_keys_are_independent(self):
        reg = CooldownRegistry(50, ManualClock())
        reg.set_cooldown(cooldown_key("threat", "a1", "mob"))
        assert not reg.is_on_cooldown(cooldown_key("threat", "a1", "drowning"), 100)
        assert not reg.is_on_cooldown(cooldown_key("threat", "a2", "mob"), 100)

    def test_set_again_restarts_window(self):
        clock = ManualClock()
        reg = CooldownRegistry(50, clock)
        reg.set_cooldown("k")
        clock.advance(4000)
        reg.set_cooldown("k")
        clock.advance(4000)
        assert reg.is_on_cooldown("k", 100)

    def test_forget_agent_drops_only_that_agent(self):
        reg = CooldownRegistry(50, ManualClock())
        reg.set_cooldown(cooldown_key("ore", "a1"))
        reg.set_cooldown(cooldown_key("threat", "a1", "mob"))
        reg.set_cooldown(cooldown_key("ore", "a10"))
        assert reg.forget_agent("a1") == 2
        assert len(reg) == 1
        assert reg.is_on_cooldown(cooldown_key("ore", "a10"), 300)

    def test_forget_agent_with_separator_in_id(self):
        reg = CooldownRegistry(50, ManualClock())
        reg.set_cooldown(cooldown_key("quest", "player:7"))
        reg.set_cooldown(cooldown_key("threat", "player:7", "mob"))
        reg.set_cooldown(cooldown_key("quest", "player:70"))
        assert reg.forget_agent("player:7") == 2
        assert len(reg) == 1
        assert reg.is_on_cooldown(cooldown_key("quest", "player:70"), 180)

    def test_prune_drops_entries_older_than_longest_window(self):
        clock = ManualClock()
        reg = CooldownRegistry(50, clock)
        reg.set_cooldown("old")
        clock.advance(300 * 50)
        reg.set_cooldown("fresh")
        assert reg.prune(300) == 1
        assert len(reg) == 1
        assert reg.is_on_cooldown("fresh", 300)
