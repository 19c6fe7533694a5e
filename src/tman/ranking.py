"""Top-N process ranking."""

from collections.abc import Iterable

from tman.models import ProcessRow


def rank_processes(rows: Iterable[ProcessRow], cap: int) -> tuple[ProcessRow, ...]:
    """
    Sort processes by CPU usage, highest first, and keep the top ``cap``.

    sorted() is stable and keeps equal keys in input order even with
    reverse=True, so processes with the same CPU usage stay in the order
    the provider listed them.

    Args:
        rows: Raw process rows in provider order.
        cap: Maximum number of rows to keep.

    Returns:
        The ranked rows as an immutable tuple.
    """
    if cap < 0:
        raise ValueError("cap must not be negative")
    ranked = sorted(rows, key=lambda row: row.cpu_percent, reverse=True)
    return tuple(ranked[:cap])
