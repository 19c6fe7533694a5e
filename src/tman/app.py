"""tman - Main Textual application."""

import logging
import os
import sys
from queue import Queue

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widget import Widget
from textual.widgets import DataTable, Footer

from tman.config import DEFAULT_CONFIG, DashboardConfig
from tman.input import KeyResult, dispatch_key
from tman.models import Update
from tman.monitor import MetricsMonitor, ProcessMonitor
from tman.provider import MetricsProvider, PsutilProvider
from tman.render import CRITICAL, OK, WARN, Frame, GaugeView, TableView, build_frame
from tman.state import DashboardState, drain_updates
from tman.viewport import HEADER_ROW

logger = logging.getLogger(__name__)

BAR_COLORS = {OK: "green", WARN: "yellow", CRITICAL: "red"}
ROW_BACKGROUNDS = {"row-even": "on grey11", "row-odd": "on grey23"}

# Samplers are daemon threads; quitting does not wait out a slow scan
STOP_TIMEOUT = 0.5


class Gauge(Widget):
    """Horizontal bar gauge with a text label."""

    DEFAULT_CSS = """
    Gauge {
        height: 100%;
        border: solid $primary;
        padding: 0 1;
    }
    Gauge.ok {
        border: solid green;
    }
    Gauge.warn {
        border: solid yellow;
    }
    Gauge.critical {
        border: solid red;
    }
    """

    def __init__(self, title: str, *args, **kwargs) -> None:
        """Initialize Gauge."""
        super().__init__(*args, **kwargs)
        self.view = GaugeView(title=title, percent=0, label="", color=OK)
        self.border_title = title

    def show(self, view: GaugeView) -> None:
        """Display new gauge values."""
        self.view = view
        self.border_title = view.title
        self.remove_class(*BAR_COLORS)
        self.add_class(view.color)
        self.refresh()

    def render(self) -> Text:
        """Render the bar followed by the label."""
        label = self.view.label
        bar_width = max(0, self.content_size.width - len(label) - 1)
        filled = bar_width * self.view.percent // 100
        return Text.assemble(
            ("█" * filled, BAR_COLORS[self.view.color]),
            ("░" * (bar_width - filled), "dim"),
            " ",
            label,
        )


class ProcessTable(Container):
    """Container for the process data table."""

    DEFAULT_CSS = """
    ProcessTable {
        height: 1fr;
        border: solid $primary;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the process table."""
        yield DataTable(id="process-table", cursor_type="none", show_cursor=False)

    def on_mount(self) -> None:
        """Add the header columns when mounted."""
        table = self.query_one("#process-table", DataTable)
        table.add_columns(*HEADER_ROW)

    def show(self, view: TableView) -> None:
        """
        Replace every row with the visible window.

        The table is cleared and refilled on each call; row backgrounds
        alternate according to the frame's row styles.
        """
        self.border_title = view.title
        table = self.query_one("#process-table", DataTable)
        table.clear()
        for cells, style in zip(view.rows[1:], view.row_styles):
            background = ROW_BACKGROUNDS[style]
            table.add_row(*(Text(cell, style=background) for cell in cells))


class TmanApp(App):
    """Main tman application."""

    TITLE = "tman"
    SUB_TITLE = "Terminal Task Manager"

    CSS = """
    Screen {
        layout: vertical;
    }

    #gauges {
        height: 3fr;
    }

    #cpu-gauge, #memory-gauge {
        width: 1fr;
    }

    ProcessTable {
        height: 7fr;
    }
    """

    BINDINGS = [
        Binding("q", "dispatch('q')", "Quit", priority=True),
        Binding("up", "dispatch('up')", "Scroll up", priority=True),
        Binding("down", "dispatch('down')", "Scroll down", priority=True),
        Binding("ctrl+c", "dispatch('ctrl+c')", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        provider: MetricsProvider | None = None,
        config: DashboardConfig = DEFAULT_CONFIG,
    ) -> None:
        """
        Initialize the TmanApp.

        Args:
            provider: Metrics source. Defaults to the local host via psutil.
            config: Cadences, process cap and viewport size.
        """
        super().__init__()
        self._config = config
        self._provider = provider if provider is not None else PsutilProvider()
        self._update_queue: Queue[Update] = Queue()
        self._state = DashboardState(config.visible_rows)
        self._metrics_monitor = MetricsMonitor(
            self._update_queue, self._provider, poll_rate=config.fast_interval
        )
        self._process_monitor = ProcessMonitor(
            self._update_queue,
            self._provider,
            cap=config.process_cap,
            poll_rate=config.slow_interval,
        )
        self.frames_rendered = 0

    @property
    def state(self) -> DashboardState:
        """The dashboard state owned by this app."""
        return self._state

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Horizontal(
            Gauge("Memory Usage", id="memory-gauge"),
            Gauge("CPU Usage", id="cpu-gauge"),
            id="gauges",
        )
        yield ProcessTable()
        yield Footer()

    def on_mount(self) -> None:
        """Paint the empty dashboard, then start both samplers."""
        self.render_frame()
        self._metrics_monitor.start()
        self._process_monitor.start()
        # Samplers publish into the queue; only this thread applies updates
        self.set_interval(self._config.drain_interval, self._check_for_updates)

    def _check_for_updates(self) -> None:
        """Apply queued sampler updates and repaint if anything changed."""
        if drain_updates(self._update_queue, self._state):
            self.render_frame()

    def render_frame(self) -> Frame:
        """Repaint both gauges and the whole table from the current state."""
        frame = build_frame(self._state.snapshot())
        self.query_one("#cpu-gauge", Gauge).show(frame.cpu_gauge)
        self.query_one("#memory-gauge", Gauge).show(frame.memory_gauge)
        self.query_one(ProcessTable).show(frame.table)
        self.frames_rendered += 1
        return frame

    def action_dispatch(self, key: str) -> None:
        """Route a bound key through the input dispatcher."""
        result = dispatch_key(key, self._state)
        if result is KeyResult.QUIT:
            self.action_quit()
        elif result is KeyResult.REPAINT:
            self.render_frame()

    def action_quit(self) -> None:
        """Handle quit action with graceful cleanup."""
        self._metrics_monitor.stop(timeout=STOP_TIMEOUT)
        self._process_monitor.stop(timeout=STOP_TIMEOUT)
        self.exit(return_code=0)


def _configure_logging() -> None:
    """Log to the file named by TMAN_LOG, if set. The terminal belongs to the UI."""
    log_path = os.environ.get("TMAN_LOG")
    if not log_path:
        return
    level = os.environ.get("TMAN_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        filename=log_path,
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s",
    )


def main() -> None:
    """Entry point for tman application."""
    _configure_logging()
    try:
        app = TmanApp()
        app.run()
    except Exception as exc:
        logger.exception("Could not start the dashboard")
        print(f"tman: failed to initialize terminal: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    raise SystemExit(app.return_code or 0)


if __name__ == "__main__":
    main()
