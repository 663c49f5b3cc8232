"""Software timers multiplexed over one physical interval timer.

Timer times are kept relative to the moment the physical timer was last
armed. When it goes off, the elapsed time is subtracted from every running
timer, expired ones get their callbacks run, and the physical timer is
re-armed for the shortest remaining time.
"""

from __future__ import annotations

import contextlib
import signal
import sys
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

_USEC = 1_000_000


@dataclass(eq=False)
class Timer:
    """One timer slot; *time* and *period* are in microseconds."""

    in_use: bool = False
    periodic: bool = False
    time: int = 0
    period: int = 0
    callback: Callable[[Any], object] | None = None
    arg: Any = None


def _setitimer(seconds: float) -> None:
    # A zero value would disarm the interval timer instead of firing at once.
    signal.setitimer(signal.ITIMER_REAL, max(seconds, 1e-6))


class TimerSet:
    """A fixed pool of *max_timers* software timers.

    *clock* returns seconds (default time.monotonic). *arm* is called with a
    delay in seconds to start the physical timer; without it the real-time
    interval timer is used and SIGALRM calls expire().
    """

    def __init__(self, max_timers: int, clock: Callable[[], float] | None = None,
                 arm: Callable[[float], object] | None = None) -> None:
        if max_timers < 1:
            raise ValueError("need at least one timer")
        self._timers = [Timer() for _ in range(max_timers)]
        self._clock = clock if clock is not None else time.monotonic
        self._next: Timer | None = None
        self._time_set = 0
        if arm is None:
            signal.signal(signal.SIGALRM, self._on_alarm)
            self._arm: Callable[[float], object] = _setitimer
            self._signals = True
        else:
            self._arm = arm
            self._signals = False

    def _on_alarm(self, signo: int, frame: object) -> None:
        self.expire()

    @contextlib.contextmanager
    def _critical(self) -> Iterator[None]:
        if not self._signals:
            yield
            return
        signal.pthread_sigmask(signal.SIG_BLOCK, {signal.SIGALRM})
        try:
            yield
        finally:
            signal.pthread_sigmask(signal.SIG_UNBLOCK, {signal.SIGALRM})

    def _now(self) -> int:
        return int(round(self._clock() * _USEC))

    def _start(self, timer: Timer) -> None:
        self._arm(timer.time / _USEC)

    def _update(self, elapsed: int) -> None:
        """Subtract *elapsed* from all timers, firing those that run out."""
        while True:
            restart = False
            soonest: Timer | None = None
            for timer in self._timers:
                if not timer.in_use:
                    continue
                if elapsed < timer.time:
                    timer.time -= elapsed
                    if soonest is None or timer.time < soonest.time:
                        soonest = timer
                    continue
                if timer.callback is not None:
                    timer.callback(timer.arg)
                # The slot is released only after its callback has completed.
                if timer.periodic:
                    timer.time = timer.period
                    restart = True
                else:
                    timer.in_use = False
            if not restart:
                break
            elapsed = 0
        self._next = soonest if soonest is not None and soonest.in_use else None

    def expire(self) -> None:
        """Account for the time passed since arming and re-arm for the next timer."""
        now = self._now()
        self._update(now - self._time_set)
        if self._next is not None:
            self._start(self._next)
            self._time_set = now

    def _declare(self, periodic: bool, ms: int, callback: Callable[[Any], object],
                 arg: Any) -> Timer:
        if callback is None:
            raise ValueError("a callback is required")
        if ms < 0:
            raise ValueError("time must not be negative")
        if periodic and ms == 0:
            raise ValueError("a periodic timer needs a non-zero period")

        with self._critical():
            slot = next((timer for timer in self._timers if not timer.in_use), None)
            if slot is None:
                raise RuntimeError("out of timers")

            new = ms * 1000
            now = self._now()
            if self._next is not None and now + new < self._next.time + self._time_set:
                # The new timer is shorter than the one being waited on.
                self._update(now - self._time_set)

            slot.callback = callback
            slot.arg = arg
            slot.time = new
            slot.period = new
            slot.periodic = periodic
            slot.in_use = True

            if self._next is None or self._next.time + self._time_set > now + new:
                self._next = slot
                self._start(slot)
                self._time_set = now
            elif self._next is not slot and self._time_set != now:
                # Keep the new timer relative to the current time base.
                slot.time = new + (now - self._time_set)
                slot.period = new
            return slot

    def declare(self, ms: int, callback: Callable[[Any], object], arg: Any = None) -> Timer:
        """Create a one-shot timer expiring after *ms* milliseconds."""
        return self._declare(False, ms, callback, arg)

    def declare_periodic(self, period: int, callback: Callable[[Any], object],
                         arg: Any = None) -> Timer:
        """Create a timer expiring every *period* milliseconds."""
        return self._declare(True, period, callback, arg)

    def undeclare(self, timer: Timer | None) -> None:
        """Cancel *timer*; its callback will not be called."""
        if timer is None or not timer.in_use:
            return
        with self._critical():
            timer.in_use = False
            if timer is self._next:
                now = self._now()
                self._update(now - self._time_set)
                if self._next is not None:
                    self._start(self._next)
                    self._time_set = now

    def is_running(self, timer: Timer | None) -> bool:
        """True while *timer* is declared and has not expired."""
        return timer is not None and timer.in_use

    def restart(self, timer: Timer) -> None:
        """Start *timer* over with its full time from now.

        Raises ValueError when the timer is not running.
        """
        if not self.is_running(timer):
            raise ValueError("timer is not running")
        with self._critical():
            now = self._now()
            self._update(now - self._time_set)
            if timer.in_use:
                timer.time = timer.period
            running = [item for item in self._timers if item.in_use]
            self._next = min(running, key=lambda item: item.time) if running else None
            if self._next is not None:
                self._start(self._next)
            self._time_set = now


def main(argv: list[str] | None = None) -> int:
    """Declare a few timers and count seconds while they go off."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        seconds = int(args[0]) if args else 105
    except ValueError:
        print(f"usage: softtimer [SECONDS], not {args[0]!r}", file=sys.stderr)
        return 1

    def callback(text: str) -> None:
        print(f"callback() - {text}", end="", flush=True)

    timers = TimerSet(6)
    start = int(time.time())

    # Declared in reverse order of expiry to catch ordering bugs.
    timers.declare(100000, callback, "100 seconds")
    timers.declare(70000, callback, "70 seconds")
    timers.declare(30000, callback, "30 seconds")
    timers.declare_periodic(12000, callback, " > 12 sek period < ")

    print(f"Waiting ... ({start}) tok\n" + "=" * 50, end="", flush=True)
    try:
        for index in range(seconds):
            print(f"\n{index + 1}. ({int(time.time())}) ", end="", flush=True)
            time.sleep(1)
    finally:
        signal.setitimer(signal.ITIMER_REAL, 0)
    print("\nLeaving...", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())