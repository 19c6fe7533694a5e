"""Background sampling loops for tman."""

import logging
import threading
from abc import ABC, abstractmethod
from queue import Queue

from tman.models import MetricSample, ProcessListUpdate, SampleUpdate, Update
from tman.provider import MetricsProvider, ProviderError
from tman.ranking import rank_processes

logger = logging.getLogger(__name__)


class PollingMonitor(ABC):
    """
    Fixed-interval sampling loop running in a daemon thread.

    Each tick calls ``_collect()`` and pushes its result, if any, to a
    thread-safe Queue. The first tick runs as soon as the thread starts.
    Subclasses implement ``_collect``.
    """

    def __init__(
        self,
        update_queue: "Queue[Update]",
        poll_rate: float,
        name: str,
    ) -> None:
        """
        Initialize the monitor.

        Args:
            update_queue: Thread-safe queue to push updates to.
            poll_rate: How often to poll (in seconds).
            name: Thread name, also used in log messages.
        """
        self._queue = update_queue
        self._poll_rate = max(0.1, poll_rate)
        self._name = name
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def poll_rate(self) -> float:
        """Get the current poll rate."""
        return self._poll_rate

    @poll_rate.setter
    def poll_rate(self, value: float) -> None:
        """Set the poll rate."""
        self._poll_rate = max(0.1, value)  # Minimum 0.1 seconds

    @property
    def is_running(self) -> bool:
        """Check if the monitor thread is running."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the monitoring thread."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._poll_loop,
            daemon=True,
            name=self._name,
        )
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        """
        Stop the monitoring thread.

        Args:
            timeout: How long to wait for thread to stop (seconds).
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def _poll_loop(self) -> None:
        """Main polling loop running in the background thread."""
        while not self._stop_event.is_set():
            self.tick()
            # Wait for poll_rate seconds or until stop is requested
            self._stop_event.wait(timeout=self._poll_rate)

    def tick(self) -> bool:
        """
        Run one sampling cycle.

        Returns:
            True if an update was published.
        """
        try:
            update = self._collect()
        except ProviderError as exc:
            # Prior values stay on screen; the next tick is the retry.
            logger.debug("%s skipped a tick: %s", self._name, exc)
            return False
        except Exception:
            logger.exception("%s failed unexpectedly", self._name)
            return False

        if update is None:
            return False
        self._queue.put(update)
        return True

    @abstractmethod
    def _collect(self) -> Update | None:
        """Take one reading. Returning None publishes nothing."""


class MetricsMonitor(PollingMonitor):
    """Fast loop: overall CPU percent and virtual memory."""

    def __init__(
        self,
        update_queue: "Queue[Update]",
        provider: MetricsProvider,
        poll_rate: float = 1.0,
    ) -> None:
        super().__init__(update_queue, poll_rate, name="MetricsMonitor")
        self._provider = provider

    def _collect(self) -> SampleUpdate:
        cpu_percent = self._provider.sample_cpu_percent()
        memory = self._provider.sample_memory()
        return SampleUpdate(MetricSample.from_readings(cpu_percent, memory))


class ProcessMonitor(PollingMonitor):
    """Slow loop: process table, ranked before it is published."""

    def __init__(
        self,
        update_queue: "Queue[Update]",
        provider: MetricsProvider,
        cap: int,
        poll_rate: float = 3.0,
    ) -> None:
        super().__init__(update_queue, poll_rate, name="ProcessMonitor")
        self._provider = provider
        self._cap = cap

    @property
    def cap(self) -> int:
        """Maximum number of processes published per tick."""
        return self._cap

    def _collect(self) -> ProcessListUpdate:
        rows = self._provider.list_processes()
        return ProcessListUpdate(rank_processes(rows, self._cap))
