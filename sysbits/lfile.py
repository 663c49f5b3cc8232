"""Token reader for files like /etc/protocols and /etc/services."""

from __future__ import annotations

import re
import sys
from collections.abc import Iterator

_LINE_MAX = 255


def _atoi(token: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", token)
    return int(match.group(1)) if match else 0


def _splitter(sep: str):
    if not sep:
        return lambda chunk: [chunk] if chunk else []
    pattern = re.compile("[" + "".join(re.escape(char) for char in sep) + "]+")
    return lambda chunk: [token for token in pattern.split(chunk) if token]


class TokenFile:
    """A file read as a stream of tokens split on any character in *sep*.

    Lines starting with '#' are skipped; lines are read in chunks of at most
    255 characters.
    """

    def __init__(self, path, sep: str):
        if path is None or sep is None:
            raise ValueError("path and separators are required")
        self._split = _splitter(sep)
        self._file = open(path, encoding="utf-8", errors="replace")
        self._stream = self._generate()

    def _generate(self) -> Iterator[str]:
        while not self._file.closed:
            chunk = self._file.readline(_LINE_MAX)
            if not chunk:
                return
            if chunk.startswith("#"):
                continue
            yield from self._split(chunk)

    def tokens(self) -> Iterator[str]:
        """Return the iterator over the tokens not yet consumed."""
        return self._stream

    def get_key(self, key: str) -> str | None:
        """Return the token following the next token equal to *key*, or None."""
        for token in self._stream:
            if token.startswith("#"):
                continue
            if token == key:
                return next(self._stream, None)
        return None

    def get_int(self, key: str) -> int:
        """Return the integer value following *key*; raise KeyError if absent."""
        token = self.get_key(key)
        if token is None:
            raise KeyError(key)
        return _atoi(token)

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> TokenFile:
        return self

    def __exit__(self, *args) -> None:
        self.close()


def fgetint(path, sep: str, key: str) -> int:
    """Open *path* and return the integer that follows *key*."""
    with TokenFile(path, sep) as tokens:
        return tokens.get_int(key)


def main(argv: list[str] | None = None) -> int:
    """Look up the udp protocol number and the ftp port."""
    args = sys.argv[1:] if argv is None else list(argv)
    protocols = args[0] if len(args) > 0 else "/etc/protocols"
    services = args[1] if len(args) > 1 else "/etc/services"

    try:
        proto = fgetint(protocols, " \n\t", "udp")
    except (OSError, KeyError) as exc:
        print(f"Failed locating 'udp' protocol: {exc}", file=sys.stderr)
        return 1
    print(f"udp has proto {proto}")

    try:
        port = fgetint(services, " /\n\t", "ftp")
    except (OSError, KeyError) as exc:
        print(f"Failed locating 'ftp' service: {exc}", file=sys.stderr)
        return 1
    print(f"ftp is inet port {port}")
    return 0


if __name__ == "__main__":
    sys.exit(main())