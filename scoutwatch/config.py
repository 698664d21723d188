"""Monitor configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MonitorConfig:
    """Immutable policy table for the monitor run.

    Interval and cooldown lengths are in ticks; a tick lasts
    ``tick_duration_ms`` of wall-clock time.
    """

    # World (simulated environment)
    world_seed: int = 42
    agent_count: int = 3
    max_ticks: int = 12000

    # Timing
    tick_duration_ms: int = 50

    # Scheduler intervals (ticks)
    scan_interval: int = 60
    threat_check_interval: int = 30
    quest_update_interval: int = 560
    performance_check_interval: int = 600
    structure_scan_interval: int = 2000
    welcome_delay: int = 40

    # Agent thresholds
    low_health_threshold: float = 10
    critical_health_threshold: float = 6
    low_air_threshold: int = 30
    movement_threshold: float = 30
    stagnant_time: int = 2400

    # Threat distance bands
    max_threat_distance: float = 12
    secondary_threat_distance: float = 8
    critical_threat_distance: float = 4
    danger_report_threshold: int = 50
    environment_scan_radius: int = 2

    # Resources
    resource_scan_radius: int = 5

    # Settlements
    settlement_radius: float = 50
    settlement_actor_threshold: int = 3     # strictly more than this many traders
    structure_village_radius: float = 100
    structure_village_min: int = 3
    structure_outpost_radius: float = 150
    structure_outpost_min: int = 2

    # Cooldown windows (ticks)
    resource_cooldown: int = 300
    threat_cooldown: int = 100
    quest_cooldown: int = 180

    # Caches
    region_cache_ttl_ms: int = 200
    terrain_cache_ttl_ms: int = 40
    region_cache_ceiling: int = 1000
    terrain_cache_ceiling: int = 500

    # Quests
    max_quests: int = 4
    kill_milestone: int = 10
    severe_fall_damage: float = 5

    # Logging
    log_level: str = "INFO"

    @property
    def longest_cooldown(self) -> int:
        return max(self.resource_cooldown, self.threat_cooldown, self.quest_cooldown)
