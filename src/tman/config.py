"""Compiled-in settings for tman.

tman takes no flags and reads no configuration file. The cadences, caps and
layout constants live here so tests can build smaller variants.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DashboardConfig:
    """Immutable dashboard settings."""

    fast_interval: float = 1.0  # CPU + memory, seconds
    slow_interval: float = 3.0  # process list, seconds
    process_cap: int = 50
    visible_rows: int = 15
    drain_interval: float = 0.1  # how often the UI applies queued updates

    def __post_init__(self) -> None:
        for name in ("fast_interval", "slow_interval", "drain_interval"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.process_cap < 0:
            raise ValueError("process_cap must not be negative")
        if self.visible_rows < 1:
            raise ValueError("visible_rows must be at least 1")


DEFAULT_CONFIG = DashboardConfig()
