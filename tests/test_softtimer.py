import pytest

from sysbits.softtimer import TimerSet


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def env():
    clock = FakeClock()
    armed = []
    timers = TimerSet(4, clock=clock, arm=armed.append)
    return timers, clock, armed


def test_needs_at_least_one_timer():
    with pytest.raises(ValueError):
        TimerSet(0, clock=lambda: 0.0, arm=lambda s: None)


def test_declare_arms_physical_timer(env):
    timers, _clock, armed = env
    timer = timers.declare(1500, lambda arg: None)
    assert armed == [pytest.approx(1.5)]
    assert timers.is_running(timer)


def test_one_shot_fires_with_argument(env):
    timers, clock, _armed = env
    fired = []
    timer = timers.declare(300, fired.append, "hello")
    clock.now = 0.3
    timers.expire()
    assert fired == ["hello"]
    assert not timers.is_running(timer)


def test_not_yet_due_does_not_fire(env):
    timers, clock, _armed = env
    fired = []
    timer = timers.declare(300, fired.append, "x")
    clock.now = 0.1
    timers.expire()
    assert fired == []
    assert timers.is_running(timer)


def test_out_of_timers():
    timers = TimerSet(1, clock=lambda: 0.0, arm=lambda s: None)
    timers.declare(100, lambda arg: None)
    with pytest.raises(RuntimeError):
        timers.declare(200, lambda arg: None)


def test_callback_required(env):
    timers, _clock, _armed = env
    with pytest.raises(ValueError):
        timers.declare(100, None)


def test_periodic_timer_keeps_running(env):
    timers, clock, armed = env
    fired = []
    timer = timers.declare_periodic(100, fired.append, "tick")
    clock.now = 0.1
    timers.expire()
    clock.now = 0.2
    timers.expire()
    assert fired == ["tick", "tick"]
    assert timers.is_running(timer)
    assert armed[-1] == pytest.approx(0.1)


def test_shorter_timer_rearms(env):
    timers, clock, armed = env
    fired = []
    long_timer = timers.declare(1000, fired.append, "long")
    clock.now = 0.2
    short_timer = timers.declare(300, fired.append, "short")
    assert armed[-1] == pytest.approx(0.3)
    clock.now = 0.5
    timers.expire()
    assert fired == ["short"]
    assert not timers.is_running(short_timer)
    assert timers.is_running(long_timer)
    assert armed[-1] == pytest.approx(0.5)


def test_longer_timer_keeps_current_arming(env):
    timers, clock, armed = env
    fired = []
    timers.declare(300, fired.append, "first")
    timers.declare(1000, fired.append, "second")
    assert len(armed) == 1
    clock.now = 0.3
    timers.expire()
    assert fired == ["first"]
    assert armed[-1] == pytest.approx(0.7)
    clock.now = 1.0
    timers.expire()
    assert fired == ["first", "second"]


def test_undeclare_next_rearms_for_other(env):
    timers, clock, armed = env
    fired = []
    first = timers.declare(300, fired.append, "a")
    second = timers.declare(1000, fired.append, "b")
    clock.now = 0.1
    timers.undeclare(first)
    assert not timers.is_running(first)
    assert timers.is_running(second)
    assert armed[-1] == pytest.approx(0.9)
    clock.now = 1.0
    timers.expire()
    assert fired == ["b"]


def test_undeclare_none_and_is_running_none(env):
    timers, _clock, armed = env
    timers.undeclare(None)
    assert armed == []
    assert timers.is_running(None) is False


def test_restart_requires_running_timer(env):
    timers, clock, _armed = env
    timer = timers.declare(100, lambda arg: None)
    clock.now = 0.1
    timers.expire()
    with pytest.raises(ValueError):
        timers.restart(timer)


def test_restart_postpones_expiry(env):
    timers, clock, _armed = env
    fired = []
    timer = timers.declare(500, fired.append, "r")
    clock.now = 0.4
    timers.restart(timer)
    clock.now = 0.5
    timers.expire()
    assert fired == []
    assert timers.is_running(timer)
    clock.now = 0.9
    timers.expire()
    assert fired == ["r"]