"""Shared dashboard state and update application."""

from dataclasses import dataclass
from queue import Empty, Queue

from tman.models import MetricSample, ProcessListUpdate, ProcessRow, SampleUpdate, Update
from tman.viewport import Viewport


@dataclass(slots=True, frozen=True)
class DashboardSnapshot:
    """Consistent read-only view of the state for one render pass."""

    sample: MetricSample
    ranked: tuple[ProcessRow, ...]
    offset: int
    visible_rows: int


class DashboardState:
    """
    Latest sample, ranked process list and scroll position.

    Owned by the UI thread. Samplers never touch it directly; they publish
    update messages that the owner applies with ``apply`` or
    ``drain_updates``.
    """

    def __init__(self, visible_rows: int) -> None:
        """Initialize an empty state with a viewport of ``visible_rows``."""
        self.latest_sample: MetricSample = MetricSample.empty()
        self.ranked: tuple[ProcessRow, ...] = ()
        self.viewport = Viewport(visible_rows)

    @property
    def offset(self) -> int:
        """Current scroll offset."""
        return self.viewport.offset

    def apply(self, update: Update) -> None:
        """Apply one published update as a wholesale replace."""
        if isinstance(update, SampleUpdate):
            self.latest_sample = update.sample
        elif isinstance(update, ProcessListUpdate):
            self.ranked = update.ranked
            self.viewport.clamp(len(self.ranked))
        else:
            raise TypeError(f"unsupported update: {type(update).__name__}")

    def scroll_up(self) -> bool:
        """Scroll the process table one row up."""
        return self.viewport.scroll_up()

    def scroll_down(self) -> bool:
        """Scroll the process table one row down."""
        return self.viewport.scroll_down(len(self.ranked))

    def snapshot(self) -> DashboardSnapshot:
        """Capture the current state for rendering."""
        return DashboardSnapshot(
            sample=self.latest_sample,
            ranked=self.ranked,
            offset=self.viewport.offset,
            visible_rows=self.viewport.visible_rows,
        )


def drain_updates(update_queue: "Queue[Update]", state: DashboardState) -> int:
    """Apply every pending update in arrival order. Returns the count applied."""
    applied = 0
    while True:
        try:
            update = update_queue.get_nowait()
        except Empty:
            break
        state.apply(update)
        applied += 1
    return applied
