"""Frame computation for the dashboard.

Everything here is pure: it turns a DashboardSnapshot into the values the
widgets display. The app repaints from a Frame and does no math itself.
"""

from dataclasses import dataclass

from tman.models import MetricSample, ProcessRow
from tman.state import DashboardSnapshot
from tman.viewport import HEADER_ROW, visible_slice

OK = "ok"
WARN = "warn"
CRITICAL = "critical"

ROW_STYLES = ("row-even", "row-odd")

BYTES_PER_GB = 1e9


@dataclass(slots=True, frozen=True)
class GaugeView:
    """Values for one gauge."""

    title: str
    percent: int
    label: str
    color: str


@dataclass(slots=True, frozen=True)
class TableView:
    """Values for the process table. ``rows[0]`` is the header."""

    title: str
    rows: list[tuple[str, ...]]
    row_styles: list[str]


@dataclass(slots=True, frozen=True)
class Frame:
    """Everything one repaint needs."""

    cpu_gauge: GaugeView
    memory_gauge: GaugeView
    table: TableView


def classify(percent: float) -> str:
    """Map a utilization percentage to a severity band."""
    if percent < 40:
        return OK
    if percent < 70:
        return WARN
    return CRITICAL


def gauge_percent(percent: float) -> int:
    """Clamp to 0-100 and truncate for the gauge fill."""
    return max(0, min(100, int(percent)))


def cpu_label(sample: MetricSample) -> str:
    """Label for the CPU gauge, e.g. ``85.00%``."""
    return f"{sample.cpu_percent:.2f}%"


def memory_label(sample: MetricSample) -> str:
    """Label for the memory gauge, e.g. ``25.00% (4.00GB/16.00GB)``."""
    used_gb = sample.mem_used_bytes / BYTES_PER_GB
    total_gb = sample.mem_total_bytes / BYTES_PER_GB
    return f"{sample.mem_used_percent:.2f}% ({used_gb:.2f}GB/{total_gb:.2f}GB)"


def row_style(index: int) -> str:
    """Alternating style for the data row at ``index`` within the window."""
    return ROW_STYLES[index % len(ROW_STYLES)]


def format_row(row: ProcessRow) -> tuple[str, ...]:
    """Format a process row as table cells."""
    return (
        str(row.pid),
        row.name,
        f"{row.cpu_percent:.2f}%",
        f"{row.mem_percent:.2f}%",
    )


def build_frame(snapshot: DashboardSnapshot) -> Frame:
    """Compute gauges and the visible table window from a snapshot."""
    sample = snapshot.sample
    cpu_gauge = GaugeView(
        title="CPU Usage",
        percent=gauge_percent(sample.cpu_percent),
        label=cpu_label(sample),
        color=classify(sample.cpu_percent),
    )
    memory_gauge = GaugeView(
        title="Memory Usage",
        percent=gauge_percent(sample.mem_used_percent),
        label=memory_label(sample),
        color=classify(sample.mem_used_percent),
    )

    window = visible_slice(snapshot.ranked, snapshot.offset, snapshot.visible_rows)
    rows = [HEADER_ROW] + [format_row(row) for row in window[1:]]
    table = TableView(
        title="Running Processes",
        rows=rows,
        row_styles=[row_style(i) for i in range(len(rows) - 1)],
    )
    return Frame(cpu_gauge=cpu_gauge, memory_gauge=memory_gauge, table=table)
