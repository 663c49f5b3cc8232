"""Case-insensitive substring search and strict URL encoding."""

from __future__ import annotations

import string
import sys

_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)
_SAFE = frozenset((string.ascii_letters + string.digits + "-._").encode("ascii"))

DEFAULT_URL = "^F*D&S^s~09d"
REFERENCE_ENCODING = "%5EF%2AD%26S%5Es%7E09d"


def stristr(haystack: str, needle: str) -> str | None:
    """Return the tail of *haystack* from the first ASCII case-insensitive match of *needle*.

    Returns None when *needle* does not occur.
    """
    index = haystack.translate(_UPPER).find(needle.translate(_UPPER))
    if index < 0:
        return None
    return haystack[index:]


def _as_bytes(text: str | bytes) -> bytes:
    if isinstance(text, bytes):
        return text
    return text.encode("utf-8")


def _escape(byte: int) -> str:
    return f"%{byte:02X}"


def urlencode(text: str | bytes, length: int = 0) -> str:
    """URL encode *text*, keeping only a-z, A-Z, 0-9, '-', '.' and '_' as they are.

    A *length* of zero encodes everything, otherwise only the first *length* bytes.
    """
    if text is None:
        raise ValueError("nothing to encode")
    data = _as_bytes(text)
    if length:
        data = data[:length]
    return "".join(chr(byte) if byte in _SAFE else _escape(byte) for byte in data)


def urlencode_bounded(text: str | bytes, size: int) -> str:
    """URL encode *text* into at most *size* characters.

    Plain characters are kept while there is room; an escape is only written
    when it and a following character still fit, otherwise it is dropped.
    """
    if text is None or size <= 0:
        raise ValueError("invalid input or buffer size")
    parts: list[str] = []
    used = 0
    for byte in _as_bytes(text):
        if used >= size:
            break
        if byte in _SAFE:
            parts.append(chr(byte))
            used += 1
        elif used + 4 < size:
            parts.append(_escape(byte))
            used += 3
    return "".join(parts)


def main(argv: list[str] | None = None) -> int:
    """Show the encodings of a URL next to the reference encoding."""
    args = sys.argv[1:] if argv is None else list(argv)
    url = args[0] if args else DEFAULT_URL
    size = 3 * (len(_as_bytes(url)) + 1)
    print(f"URL   : {url}")
    print(f"ENC   : {urlencode(url)}")
    print(f"ENC2  : {urlencode_bounded(url, size)}")
    print(f"DH.org: {REFERENCE_ENCODING}")
    return 0


if __name__ == "__main__":
    sys.exit(main())