"""Print a directory hierarchy as a tree."""

from __future__ import annotations

import errno
import getopt
import os
import stat
import sys
from typing import TextIO

_USAGE = "usage: tree [-?hpv] PATH"


def format_perms(mode: int) -> str:
    """Return the bracketed permission string for *mode*, with a trailing space."""
    if stat.S_ISCHR(mode):
        kind = "c"
    elif stat.S_ISBLK(mode):
        kind = "b"
    elif stat.S_ISFIFO(mode):
        kind = "p"
    elif stat.S_ISLNK(mode):
        kind = "l"
    elif stat.S_ISSOCK(mode):
        kind = "s"
    else:
        kind = "-"

    def bit(mask: int, char: str) -> str:
        return char if mode & mask else "-"

    user_x = "s" if mode & stat.S_ISUID else bit(stat.S_IXUSR, "x")
    group_x = "s" if mode & stat.S_ISGID else bit(stat.S_IXGRP, "x")
    flags = (
        bit(stat.S_IRUSR, "r") + bit(stat.S_IWUSR, "w") + user_x
        + bit(stat.S_IRGRP, "r") + bit(stat.S_IWGRP, "w") + group_x
        + bit(stat.S_IROTH, "r") + bit(stat.S_IWOTH, "w") + bit(stat.S_IXOTH, "x")
    )
    return f"[{kind}{flags}] "


def tree(path: str, show_perms: bool = False, plain: bool = False,
         show_all: bool = False, out: TextIO | None = None) -> int:
    """Print the tree below *path*; return the number of entries that vanished.

    Raises NotADirectoryError when *path* is not a directory.
    """
    out = out if out is not None else sys.stdout
    pipe, fork, end = ("|", "|-", "`-") if plain else ("\u2502", "\u251c\u2500", "\u2514\u2500")

    def visible(name: str) -> bool:
        if name in (".", ".."):
            return False
        return show_all or not name.startswith(".")

    def descend(directory: str, prefix: str) -> int:
        try:
            info = os.lstat(directory)
        except OSError:
            return 1
        if not stat.S_ISDIR(info.st_mode):
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), directory)

        try:
            names = sorted(name for name in os.listdir(directory) if visible(name))
        except OSError:
            return 0

        result = 0
        for position, name in enumerate(names, start=1):
            if position == len(names):
                out.write(f"{prefix}{end} ")
                child_prefix = f"{prefix}     "
            else:
                out.write(f"{prefix}{fork} ")
                child_prefix = f"{prefix}{pipe}    "

            entry = f"{directory}/{name}"
            perms, kind, link = "", " ", ""
            try:
                info = os.lstat(entry)
            except OSError:
                pass
            else:
                if show_perms:
                    perms = format_perms(info.st_mode)
                if stat.S_ISDIR(info.st_mode):
                    kind = "/"
                if stat.S_ISLNK(info.st_mode):
                    try:
                        link = "-> " + os.readlink(entry)[:253]
                    except OSError:
                        link = ""

            out.write(f"{perms}{name}{kind}{link}\n")
            if kind == "/":
                result += descend(entry, child_prefix)
        return result

    out.write(f"{path}\n")
    return descend(path, "")


def main(argv: list[str] | None = None) -> int:
    """Command line entry: tree [-?hpv] PATH."""
    args = sys.argv[1:] if argv is None else list(argv)

    usage_code: int | None = None
    plain = verbose = False
    rest: list[str] = []

    if not args:
        usage_code = 1
    else:
        try:
            options, rest = getopt.gnu_getopt(args, "h?pv")
        except getopt.GetoptError as exc:
            print(f"tree: {exc}", file=sys.stderr)
            usage_code = 0
        else:
            for option, _value in options:
                if option == "-p":
                    plain = True
                elif option == "-v":
                    verbose = True
                else:
                    usage_code = 0
                    break
            if usage_code is None and not rest:
                usage_code = 1

    if usage_code is not None:
        print(_USAGE, file=sys.stderr)
        return usage_code

    try:
        return tree(rest[0], show_perms=verbose, plain=plain)
    except NotADirectoryError as exc:
        print(f"tree: {rest[0]}: {exc.strerror}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())