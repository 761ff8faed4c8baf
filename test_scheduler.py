"""
Tests for the cooperative scheduler.
"""


def test_actions_run_in_time_order(scheduler, fake_clock):
    calls = []
    scheduler.call_later(100, calls.append, "late")
    scheduler.call_later(50, calls.append, "early")
    assert scheduler.pending_count() == 2

    fake_clock.advance_ms(60)
    scheduler.run_pending()
    assert calls == ["early"]

    fake_clock.advance_ms(60)
    scheduler.run_pending()
    assert calls == ["early", "late"]
    assert scheduler.is_empty()


def test_nothing_runs_before_its_time(scheduler, fake_clock):
    calls = []
    action = scheduler.call_later(500, calls.append, 1)

    fake_clock.advance_ms(100)
    assert scheduler.run_pending() is not None
    assert calls == []
    assert action.active


def test_cancel(scheduler, fake_clock):
    calls = []
    action = scheduler.call_later(10, calls.append, 1)
    action.cancel()
    action.cancel()

    fake_clock.advance_ms(50)
    scheduler.run_pending()
    assert calls == []
    assert action.cancelled
    assert not action.active
    assert scheduler.pending_count() == 0


def test_cancel_after_running_is_a_no_op(scheduler, fake_clock):
    calls = []
    action = scheduler.call_later(10, calls.append, 1)
    fake_clock.advance_ms(10)
    scheduler.run_pending()

    action.cancel()
    assert action.done
    assert not action.cancelled
    assert calls == [1]


def test_blocking_run_waits_for_everything(scheduler, fake_clock):
    calls = []

    def chain():
        calls.append("first")
        scheduler.call_later(200, calls.append, "second")

    scheduler.call_later(300, chain)
    assert scheduler.run_pending(blocking=True) is None
    assert calls == ["first", "second"]
    assert fake_clock.now >= 0.49
