"""Data models for tman."""

import time
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ProcessRow:
    """Immutable snapshot of one process at sampling time."""

    pid: int
    name: str
    cpu_percent: float  # 0.0 - 100.0 * core_count
    mem_percent: float


@dataclass(slots=True, frozen=True)
class MemoryStats:
    """Virtual memory figures as reported by the metrics provider."""

    used_bytes: int
    total_bytes: int
    used_percent: float


@dataclass(slots=True, frozen=True)
class MetricSample:
    """Host-wide CPU and memory utilization at one instant."""

    cpu_percent: float
    mem_used_percent: float
    mem_used_bytes: int
    mem_total_bytes: int
    timestamp: float

    @classmethod
    def empty(cls) -> "MetricSample":
        """Zero-valued sample shown before the first tick lands."""
        return cls(
            cpu_percent=0.0,
            mem_used_percent=0.0,
            mem_used_bytes=0,
            mem_total_bytes=0,
            timestamp=0.0,
        )

    @classmethod
    def from_readings(
        cls, cpu_percent: float, memory: MemoryStats, timestamp: float | None = None
    ) -> "MetricSample":
        """Combine a CPU reading and memory stats into one sample."""
        return cls(
            cpu_percent=cpu_percent,
            mem_used_percent=memory.used_percent,
            mem_used_bytes=memory.used_bytes,
            mem_total_bytes=memory.total_bytes,
            timestamp=time.time() if timestamp is None else timestamp,
        )


@dataclass(slots=True, frozen=True)
class SampleUpdate:
    """Published by the fast sampler: a new host sample."""

    sample: MetricSample


@dataclass(slots=True, frozen=True)
class ProcessListUpdate:
    """Published by the slow sampler: a freshly ranked process list."""

    ranked: tuple[ProcessRow, ...]


Update = SampleUpdate | ProcessListUpdate
