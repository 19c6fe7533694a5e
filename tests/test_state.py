"""Tests for DashboardState and update draining."""

import threading
from queue import Queue

import pytest

from tman.models import MetricSample, ProcessListUpdate, SampleUpdate, Update
from tman.ranking import rank_processes
from tman.state import DashboardSnapshot, DashboardState, drain_updates

from fakes import make_rows


def _sample(cpu: float) -> MetricSample:
    return MetricSample(
        cpu_percent=cpu,
        mem_used_percent=10.0,
        mem_used_bytes=1,
        mem_total_bytes=10,
        timestamp=1.0,
    )


class TestDashboardState:
    """Tests for DashboardState."""

    def test_initial_state(self):
        """Test the state starts with zero values."""
        state = DashboardState(visible_rows=10)

        assert state.latest_sample == MetricSample.empty()
        assert state.ranked == ()
        assert state.offset == 0

    def test_sample_update_replaces_sample(self):
        """Test the newest sample supersedes the previous one."""
        state = DashboardState(visible_rows=10)

        state.apply(SampleUpdate(_sample(10.0)))
        state.apply(SampleUpdate(_sample(20.0)))

        assert state.latest_sample.cpu_percent == 20.0

    def test_sample_update_keeps_list_and_offset(self):
        """Test a sample update only touches the sample."""
        state = DashboardState(visible_rows=10)
        state.apply(ProcessListUpdate(rank_processes(make_rows(25), cap=50)))
        state.scroll_down()

        state.apply(SampleUpdate(_sample(50.0)))

        assert len(state.ranked) == 25
        assert state.offset == 1

    def test_list_update_replaces_list(self):
        """Test a new process list replaces the old one wholesale."""
        state = DashboardState(visible_rows=10)
        first = rank_processes(make_rows(5), cap=50)
        second = rank_processes(make_rows(3), cap=50)

        state.apply(ProcessListUpdate(first))
        state.apply(ProcessListUpdate(second))

        assert state.ranked is second

    def test_shrinking_list_clamps_offset(self):
        """Test the offset is clamped when the list shrinks below it."""
        state = DashboardState(visible_rows=10)
        state.apply(ProcessListUpdate(rank_processes(make_rows(25), cap=50)))
        for _ in range(15):
            state.scroll_down()
        assert state.offset == 15

        state.apply(ProcessListUpdate(rank_processes(make_rows(12), cap=50)))

        assert state.offset == 2

    def test_scrolling_bounded_by_list(self):
        """Test scroll-down stops at the last full page."""
        state = DashboardState(visible_rows=10)
        state.apply(ProcessListUpdate(rank_processes(make_rows(12), cap=50)))

        assert state.scroll_down() is True
        assert state.scroll_down() is True
        assert state.scroll_down() is False
        assert state.offset == 2

    def test_scroll_up_at_top(self):
        """Test scroll-up at the top is a no-op."""
        state = DashboardState(visible_rows=10)

        assert state.scroll_up() is False
        assert state.offset == 0

    def test_unknown_update_rejected(self):
        """Test unsupported messages raise TypeError."""
        state = DashboardState(visible_rows=10)

        with pytest.raises(TypeError):
            state.apply("not an update")

    def test_snapshot_is_consistent_copy(self):
        """Test a snapshot is unaffected by later updates."""
        state = DashboardState(visible_rows=10)
        state.apply(SampleUpdate(_sample(30.0)))
        state.apply(ProcessListUpdate(rank_processes(make_rows(20), cap=50)))
        state.scroll_down()

        snapshot = state.snapshot()
        state.apply(SampleUpdate(_sample(90.0)))
        state.apply(ProcessListUpdate(()))

        assert isinstance(snapshot, DashboardSnapshot)
        assert snapshot.sample.cpu_percent == 30.0
        assert len(snapshot.ranked) == 20
        assert snapshot.offset == 1
        assert snapshot.visible_rows == 10


class TestDrainUpdates:
    """Tests for drain_updates."""

    def test_empty_queue(self):
        """Test draining an empty queue applies nothing."""
        queue: Queue[Update] = Queue()
        state = DashboardState(visible_rows=10)

        assert drain_updates(queue, state) == 0
        assert state.latest_sample == MetricSample.empty()

    def test_applies_in_arrival_order(self):
        """Test the last queued sample wins."""
        queue: Queue[Update] = Queue()
        state = DashboardState(visible_rows=10)
        queue.put(SampleUpdate(_sample(1.0)))
        queue.put(ProcessListUpdate(rank_processes(make_rows(4), cap=50)))
        queue.put(SampleUpdate(_sample(2.0)))

        assert drain_updates(queue, state) == 3
        assert state.latest_sample.cpu_percent == 2.0
        assert len(state.ranked) == 4
        assert queue.empty()

    def test_concurrent_producers(self):
        """Test updates from several threads are all applied on the draining thread."""
        queue: Queue[Update] = Queue()
        state = DashboardState(visible_rows=10)

        def produce_samples() -> None:
            for i in range(200):
                queue.put(SampleUpdate(_sample(float(i))))

        def produce_lists() -> None:
            for i in range(200):
                queue.put(ProcessListUpdate(rank_processes(make_rows(i % 30), cap=50)))

        threads = [
            threading.Thread(target=produce_samples),
            threading.Thread(target=produce_lists),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert drain_updates(queue, state) == 400
        assert state.latest_sample.cpu_percent == 199.0
        assert len(state.ranked) == 199 % 30
