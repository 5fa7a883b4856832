from backend.rest_timer import RestTimer


def test_counts_down_then_expires_once(scheduler):
    ticks = []
    expired = []
    timer = RestTimer(scheduler)
    timer.start(3, on_tick=ticks.append, on_expire=lambda: expired.append(True))
    assert timer.active
    assert scheduler.events[0].interval == 1.0

    scheduler.tick(5)
    assert ticks == [2, 1]
    assert expired == [True]
    assert not timer.active
    assert timer.remaining == 0


def test_cancel_blocks_further_callbacks(scheduler):
    ticks = []
    expired = []
    timer = RestTimer(scheduler)
    timer.start(2, on_tick=ticks.append, on_expire=lambda: expired.append(True))
    timer.cancel()
    assert scheduler.active == []

    scheduler.fire_stale()
    scheduler.fire_stale()
    assert ticks == []
    assert expired == []


def test_restart_replaces_previous_countdown(scheduler):
    first = []
    second = []
    timer = RestTimer(scheduler)
    timer.start(5, on_expire=lambda: first.append(True))
    timer.start(1, on_expire=lambda: second.append(True))
    assert len(scheduler.active) == 1

    scheduler.tick()
    scheduler.fire_stale()
    assert first == []
    assert second == [True]


def test_zero_seconds_expires_immediately(scheduler):
    expired = []
    timer = RestTimer(scheduler)
    timer.start(0, on_expire=lambda: expired.append(True))
    assert expired == [True]
    assert scheduler.events == []
    assert not timer.active


def test_custom_interval(scheduler):
    timer = RestTimer(scheduler, interval=0.5)
    timer.start(2)
    assert scheduler.events[0].interval == 0.5
