"""A client that subscribes to the daemon, kicks it a few times and leaves."""

from __future__ import annotations

import errno
import sys
import time

from sysbits.api import API_PATH, ApiError, kick, ping, subscribe, unsubscribe


def _warn(text: str) -> None:
    print(f"c: {text}", file=sys.stderr)


def run(path: str = API_PATH, rounds: int = 10, delay: float = 1.0) -> list[int]:
    """Talk to the daemon at *path*; return the ack sent in each round.

    Raises ConnectionError when the daemon does not show up and ApiError when
    subscribing or unsubscribing fails.
    """
    wait = 10
    while not ping(path):
        if not wait:
            raise ConnectionError(f"server at {path} not available")
        _warn("Server not yet there")
        time.sleep(wait * delay)
        wait -= 1
    _warn("Server available.")

    ident, ack = subscribe(None, 5000, path)
    if ident < 0:
        raise ApiError(errno.EINVAL, "Failed subscribing")

    acks: list[int] = []
    for _ in range(rounds):
        _warn(f"Next ack: {ack}")
        acks.append(ack)
        try:
            ack = kick(ident, 5000, ack, path)
        except ApiError as exc:
            _warn(f"Something failed: {exc}")
        _warn("Hello")
        time.sleep(delay)

    _warn("Exiting ...")
    unsubscribe(ident, ack, path)
    return acks


def main(argv: list[str] | None = None) -> int:
    """Run the client against the given socket path, or the default one."""
    args = sys.argv[1:] if argv is None else list(argv)
    path = args[0] if args else API_PATH
    try:
        run(path)
    except ConnectionError as exc:
        _warn(str(exc))
        return 1
    except ApiError as exc:
        _warn(f"Failed talking to server: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())