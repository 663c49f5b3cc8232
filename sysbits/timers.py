"""Periodic second-resolution timers that signal expiry through a pollable pipe."""

from __future__ import annotations

import os
import selectors
import signal
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass
class _Timer:
    period: int
    callback: Callable[[Any], object] | None
    arg: Any = None
    timeout: int = 0


class PollTimers:
    """Periodic timers driven by SIGALRM; poll fileno() and call run() when readable.

    *clock* returns monotonic seconds and defaults to time.monotonic.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock if clock is not None else time.monotonic
        self._timers: list[_Timer] = []
        self._now = 0
        self.next_alarm: int | None = None
        self._read_fd, self._write_fd = os.pipe()
        os.set_blocking(self._read_fd, False)
        os.set_blocking(self._write_fd, False)
        try:
            previous = signal.signal(signal.SIGALRM, self._on_alarm)
        except (ValueError, OSError):
            os.close(self._read_fd)
            os.close(self._write_fd)
            raise
        self._previous = previous if previous is not None else signal.SIG_DFL
        self._closed = False

    def _on_alarm(self, signo: int, frame: object) -> None:
        try:
            os.write(self._write_fd, b"!")
        except OSError:
            pass

    def _ensure_open(self) -> None:
        if self._closed:
            raise ValueError("timers are closed")

    def add(self, period: int, callback: Callable[[Any], object] | None, arg: Any = None) -> None:
        """Register a timer firing every *period* seconds with *callback(arg)*."""
        self._ensure_open()
        self._timers.insert(0, _Timer(int(period), callback, arg))

    def _schedule(self) -> int:
        for timer in self._timers:
            if timer.timeout == 0:
                timer.timeout = self._now + timer.period

        soonest = self._timers[0]
        for timer in self._timers:
            if soonest.timeout > timer.timeout:
                soonest = timer

        seconds = soonest.timeout - self._now
        if seconds <= 0:
            seconds = 1
        self.next_alarm = seconds
        return signal.alarm(seconds)

    def start(self) -> int:
        """Arm the alarm for the nearest timer; return the seconds left on any earlier alarm."""
        self._ensure_open()
        if not self._timers:
            raise RuntimeError("no timers registered")
        self._now = int(self._clock())
        return self._schedule()

    def run(self) -> None:
        """Handle pipe activity: fire every expired timer and re-arm the alarm."""
        self._ensure_open()
        try:
            os.read(self._read_fd, 1)
        except BlockingIOError:
            pass

        self._now = int(self._clock())
        for timer in list(self._timers):
            if timer.timeout > self._now:
                continue
            if timer.callback is not None:
                timer.callback(timer.arg)
            timer.timeout = 0

        if self._timers:
            self._schedule()

    def fileno(self) -> int:
        """The descriptor that becomes readable when an alarm goes off."""
        self._ensure_open()
        return self._read_fd

    def close(self) -> None:
        """Cancel the alarm, restore the previous handler and drop all timers."""
        if self._closed:
            return
        self._closed = True
        signal.alarm(0)
        signal.signal(signal.SIGALRM, self._previous)
        os.close(self._read_fd)
        os.close(self._write_fd)
        self._timers.clear()
        self.next_alarm = None

    def __enter__(self) -> PollTimers:
        return self

    def __exit__(self, *args) -> None:
        self.close()


def main(argv: list[str] | None = None) -> int:
    """Run a 1 s, a 3 s and an 11 s timer until the last one expires."""
    forever = [True]

    def line(_arg: Any) -> None:
        print(file=sys.stderr, flush=True)

    def hej(_arg: Any) -> None:
        print("Hej!", end="", file=sys.stderr, flush=True)

    def timeout(flag: list[bool]) -> None:
        print("Timeout!", end="", file=sys.stderr, flush=True)
        flag[0] = False

    with PollTimers() as timers:
        print(f"Starting, timer fd: {timers.fileno()}", flush=True)
        timers.add(1, line)
        timers.add(3, hej)
        timers.add(11, timeout, forever)
        timers.start()

        with selectors.DefaultSelector() as selector:
            selector.register(timers, selectors.EVENT_READ)
            while forever[0]:
                for _key, _events in selector.select():
                    timers.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())