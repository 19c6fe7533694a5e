"""psutil-backed metrics provider."""

import logging
from typing import Protocol

import psutil

from tman.models import MemoryStats, ProcessRow

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Raised when host-wide CPU, memory or process data cannot be read."""


class MetricsProvider(Protocol):
    """Source of host metrics consumed by the samplers."""

    def sample_cpu_percent(self) -> float: ...

    def sample_memory(self) -> MemoryStats: ...

    def list_processes(self) -> list[ProcessRow]: ...


class PsutilProvider:
    """
    Metrics provider that reads the local host through psutil.

    CPU sampling is non-blocking: psutil compares against the previous call,
    so the counters are primed once at construction.
    """

    def __init__(self) -> None:
        """Initialize the provider and prime CPU counters."""
        try:
            psutil.cpu_percent(interval=None)
        except (psutil.Error, OSError):
            logger.debug("Could not prime CPU counters", exc_info=True)

    def sample_cpu_percent(self) -> float:
        """Return overall CPU utilization since the previous call."""
        try:
            return float(psutil.cpu_percent(interval=None))
        except (psutil.Error, OSError) as exc:
            raise ProviderError(f"cannot read CPU usage: {exc}") from exc

    def sample_memory(self) -> MemoryStats:
        """Return current virtual memory usage."""
        try:
            mem = psutil.virtual_memory()
        except (psutil.Error, OSError) as exc:
            raise ProviderError(f"cannot read memory usage: {exc}") from exc
        return MemoryStats(
            used_bytes=mem.used,
            total_bytes=mem.total,
            used_percent=mem.percent,
        )

    def list_processes(self) -> list[ProcessRow]:
        """
        Collect one row per live process.

        A process whose details cannot be read is left out of the result,
        whether it exited, denied access or failed some other way. Only a
        failure of the enumeration itself is raised. Per-process CPU percent
        is 0.0 the first time a process is seen; process_iter() caches
        Process objects so later calls report real usage.
        """
        rows: list[ProcessRow] = []
        try:
            procs = psutil.process_iter()
            for proc in procs:
                try:
                    with proc.oneshot():
                        rows.append(
                            ProcessRow(
                                pid=proc.pid,
                                name=proc.name(),
                                cpu_percent=float(proc.cpu_percent(interval=None)),
                                mem_percent=float(proc.memory_percent()),
                            )
                        )
                except (psutil.Error, OSError):
                    logger.debug("Skipping pid %s", proc.pid)
                    continue
        except (psutil.Error, OSError) as exc:
            raise ProviderError(f"cannot list processes: {exc}") from exc
        return rows
