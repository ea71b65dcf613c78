"""
Unit tests for the cooperative scheduler.
"""
import pytest

from rps_cam.scheduler import Scheduler
from tests.fakes import FakeClock


class TestScheduler:

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def scheduler(self, clock):
        return Scheduler(clock=clock)

    def test_callback_waits_for_its_delay(self, clock, scheduler):
        calls = []
        scheduler.call_later(1.0, lambda: calls.append("ran"))

        clock.advance(0.5)
        assert scheduler.run_pending() == 0
        clock.advance(0.5)
        assert scheduler.run_pending() == 1
        assert calls == ["ran"]

    def test_runs_in_due_order_then_fifo(self, clock, scheduler):
        calls = []
        scheduler.call_later(2.0, lambda: calls.append("late"))
        scheduler.call_later(1.0, lambda: calls.append("first"))
        scheduler.call_later(1.0, lambda: calls.append("second"))

        clock.advance(5.0)
        scheduler.run_pending()

        assert calls == ["first", "second", "late"]

    def test_cancelled_task_never_runs(self, clock, scheduler):
        calls = []
        task = scheduler.call_later(1.0, lambda: calls.append("ran"))
        task.cancel()

        clock.advance(2.0)

        assert scheduler.run_pending() == 0
        assert calls == []
        assert scheduler.pending() == 0

    def test_pending_and_next_due(self, clock, scheduler):
        assert scheduler.next_due() is None
        scheduler.call_later(3.0, lambda: None)
        scheduler.call_later(1.0, lambda: None)

        assert scheduler.pending() == 2
        assert scheduler.next_due() == 1.0

    def test_negative_delay_runs_immediately(self, scheduler):
        calls = []
        scheduler.call_later(-1.0, lambda: calls.append("ran"))

        scheduler.run_pending()

        assert calls == ["ran"]

    def test_rescheduled_callback_waits_for_next_pass(self, clock, scheduler):
        calls = []

        def tick():
            calls.append(clock())
            scheduler.call_later(1.0, tick)

        scheduler.call_later(1.0, tick)
        clock.advance(1.0)
        scheduler.run_pending()

        assert calls == [1.0]
        assert scheduler.pending() == 1
