import pytest

from src.snake.scheduler import Scheduler


class TestScheduler:
    """Millisecond timer queue driven by explicit clock advances."""

    def test_one_shot_fires_once_when_due(self):
        sched = Scheduler()
        calls = []
        timer = sched.call_later(100, lambda: calls.append(sched.now_ms))

        sched.advance(99)
        assert calls == []
        sched.advance(1)
        assert calls == [100]
        sched.advance(1000)
        assert calls == [100]
        assert not timer.active

    def test_due_order_with_ties_in_creation_order(self):
        sched = Scheduler()
        order = []
        sched.call_later(50, lambda: order.append("b"))
        sched.call_later(10, lambda: order.append("a"))
        sched.call_later(50, lambda: order.append("c"))

        assert sched.advance_to(50) == 3
        assert order == ["a", "b", "c"]

    def test_cancel_prevents_firing(self):
        sched = Scheduler()
        calls = []
        timer = sched.call_later(10, lambda: calls.append(1))
        timer.cancel()

        sched.advance(100)
        assert calls == []
        assert sched.pending() == 0

    def test_cancel_accepts_none(self):
        Scheduler.cancel(None)

    def test_recurring_timer(self):
        sched = Scheduler()
        calls = []
        sched.call_every(100, lambda: calls.append(sched.now_ms))

        sched.advance(350)
        assert calls == [100, 200, 300]
        assert sched.pending() == 1

    def test_recurring_timer_cancelled_from_its_own_callback(self):
        sched = Scheduler()
        calls = []

        def tick():
            calls.append(sched.now_ms)
            if len(calls) == 2:
                timer.cancel()

        timer = sched.call_every(10, tick)
        sched.advance(100)
        assert calls == [10, 20]
        assert sched.pending() == 0

    def test_callback_scheduled_during_advance_runs_if_due(self):
        sched = Scheduler()
        calls = []
        sched.call_later(10, lambda: sched.call_later(5, lambda: calls.append(sched.now_ms)))

        sched.advance(20)
        assert calls == [15]
        assert sched.now_ms == 20

    def test_rejects_bad_delays(self):
        sched = Scheduler()
        with pytest.raises(ValueError):
            sched.call_later(-1, lambda: None)
        with pytest.raises(ValueError):
            sched.call_every(0, lambda: None)

    def test_clear_cancels_everything(self):
        sched = Scheduler()
        t1 = sched.call_later(10, lambda: None)
        t2 = sched.call_every(10, lambda: None)
        sched.clear()
        assert sched.pending() == 0
        assert not t1.active and not t2.active
