"""A small terminal spinner that runs until interrupted."""

from __future__ import annotations

import signal
import sys
import time
from typing import TextIO

STYLE = ".oOOo."
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"


class Spinner:
    """Draws one frame of the spinner per step() on *out*."""

    def __init__(self, out: TextIO | None = None, quiet: bool = False) -> None:
        self.out = out
        self.quiet = quiet
        self._count = 0

    def step(self) -> None:
        """Draw the next frame and move the cursor back onto it."""
        if self.quiet:
            return
        out = self.out if self.out is not None else sys.stdout
        position = self._count % len(STYLE)
        if position == 0:
            out.write(".")
        out.write(STYLE[position])
        self._count += 1
        out.write("\b")
        out.flush()


def run(interval: float = 0.1, out: TextIO | None = None) -> int:
    """Spin until SIGINT, SIGHUP or SIGTERM arrives; return the number of frames."""
    out = out if out is not None else sys.stdout
    running = [True]

    def stop(signo: int, frame: object) -> None:
        running[0] = False

    signals = [signal.SIGINT, signal.SIGHUP, signal.SIGTERM]
    previous = {signo: signal.signal(signo, stop) for signo in signals}
    spinner = Spinner(out)
    frames = 0
    out.write(HIDE_CURSOR)
    try:
        while running[0]:
            spinner.step()
            frames += 1
            time.sleep(interval)
    finally:
        out.write(SHOW_CURSOR)
        out.flush()
        for signo, handler in previous.items():
            signal.signal(signo, handler if handler is not None else signal.SIG_DFL)
    return frames


def main(argv: list[str] | None = None) -> int:
    """Spin on standard output until told to stop."""
    run()
    return 0


if __name__ == "__main__":
    sys.exit(main())