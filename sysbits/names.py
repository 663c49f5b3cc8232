"""Resolve host names to addresses and addresses to names."""

from __future__ import annotations

import socket
import sys


def lookup_addresses(name: str) -> list[str]:
    """Return every IPv4 and IPv6 address *name* resolves to.

    Raises socket.gaierror when the name cannot be resolved.
    """
    results = socket.getaddrinfo(name, None, socket.AF_UNSPEC, socket.SOCK_DGRAM)
    return [
        sockaddr[0]
        for family, _type, _proto, _canon, sockaddr in results
        if family in (socket.AF_INET, socket.AF_INET6)
    ]


def lookup_name(address: str | None) -> str:
    """Return the host name for the IPv4 or IPv6 *address*.

    Raises ValueError for a missing or malformed address and socket.gaierror
    when the lookup fails.
    """
    if not address:
        raise ValueError("Missing argument")

    family = socket.AF_INET6 if ":" in address else socket.AF_INET
    try:
        socket.inet_pton(family, address)
    except OSError as exc:
        raise ValueError(f"invalid address: {address}") from exc

    sockaddr = (address, 0, 0, 0) if family == socket.AF_INET6 else (address, 0)
    host, _service = socket.getnameinfo(sockaddr, 0)
    return host


def main(argv: list[str] | None = None) -> int:
    """Print the addresses of HOST, or with -n the name of an address."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("Usage: name [-n] HOST", file=sys.stderr)
        return 1

    if args[0] == "-n":
        try:
            print(lookup_name(args[1] if len(args) > 1 else None))
        except ValueError as exc:
            print(exc, file=sys.stderr)
            return 1
        except socket.gaierror as exc:
            print(f"getnameinfo: {exc.strerror}", file=sys.stderr)
            return 1
        return 0

    try:
        addresses = lookup_addresses(args[0])
    except socket.gaierror as exc:
        print(f"getaddrinfo: {exc.strerror}", file=sys.stderr)
        return 1
    for address in addresses:
        print(address)
    return 0


if __name__ == "__main__":
    sys.exit(main())