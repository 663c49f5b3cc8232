"""Read process properties from /proc/<PID>/status."""

from __future__ import annotations

import os
import re
import string
import sys

_LINE_MAX = 79


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def _first_word(text: str) -> str:
    words = text.split(None, 1)
    return words[0] if words else ""


def get_property(pid: int, name: str, root: str = "/proc") -> str | None:
    """Return the first word of property *name* for *pid*, or None if absent.

    Raises OSError when the status file cannot be read.
    """
    path = os.path.join(root, str(pid), "status")
    with open(path, encoding="utf-8", errors="replace") as status:
        while chunk := status.readline(_LINE_MAX):
            key, colon, rest = chunk.partition(":")
            if colon and key == name:
                return _first_word(rest)
    return None


def find_by_name(procname: str, root: str = "/proc") -> int | None:
    """Return the PID of the first process called *procname*, or None."""
    try:
        entries = os.listdir(root)
    except OSError:
        return None

    pids = sorted(_atoi(entry) for entry in entries if entry[:1] in string.digits)
    for pid in pids:
        try:
            value = get_property(pid, "Name", root)
        except OSError:
            continue
        if value == procname:
            return pid
    return None


def find_ppid(procname: str, root: str = "/proc") -> int | None:
    """Return the parent PID of the process called *procname*, or None."""
    pid = find_by_name(procname, root)
    if pid is None:
        return None
    try:
        value = get_property(pid, "PPid", root)
    except OSError:
        return None
    return None if value is None else _atoi(value)


def lookup_parent(procname: str, root: str = "/proc") -> str | None:
    """Return the name of the parent of the process called *procname*, or None."""
    ppid = find_ppid(procname, root)
    if not ppid:
        return None
    try:
        return get_property(ppid, "Name", root)
    except OSError as exc:
        print(f"Failed opening {exc.filename} for reading: {exc.strerror}", file=sys.stderr)
        return None


def main(argv: list[str] | None = None) -> int:
    """Print the name of the parent of the named process."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("Invalid number of arguments.\nUsage: procinfo PROCNAME", file=sys.stderr)
        return 1

    name = lookup_parent(args[0])
    if name is None:
        print(f"Error, failed looking up parent process of {args[0]}.")
    else:
        print(name)
    return 0


if __name__ == "__main__":
    sys.exit(main())