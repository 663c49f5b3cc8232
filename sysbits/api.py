"""Client side of a small request/reply protocol over a UNIX domain socket."""

from __future__ import annotations

import contextlib
import errno
import logging
import os
import select
import socket
import struct
import sys
from dataclasses import dataclass
from enum import IntEnum

API_PATH = "/tmp/d.sock"
LABEL_SIZE = 16
POLL_TIMEOUT = 1.0

_FORMAT = struct.Struct(f"=iii{LABEL_SIZE}siii")
MESSAGE_SIZE = _FORMAT.size

_log = logging.getLogger(__name__)


class Command(IntEnum):
    """Request types understood by the daemon."""

    SUBSCRIBE = 1
    UNSUBSCRIBE = 2
    KICK = 3


class ApiError(OSError):
    """A request to the daemon could not be completed."""


@dataclass(frozen=True)
class ApiMessage:
    """One fixed-size request or reply; *timeout* is in milliseconds."""

    cmd: int
    id: int = 0
    pid: int = 0
    label: str = ""
    timeout: int = 0
    ack: int = 0
    next_ack: int = 0

    def pack(self) -> bytes:
        """Return the wire form; the label is cut to 16 bytes."""
        label = self.label.encode("utf-8")[:LABEL_SIZE]
        return _FORMAT.pack(int(self.cmd), self.id, self.pid, label,
                            self.timeout, self.ack, self.next_ack)

    @classmethod
    def from_bytes(cls, data: bytes) -> ApiMessage:
        """Parse a message from exactly MESSAGE_SIZE bytes."""
        if len(data) != MESSAGE_SIZE:
            raise ValueError(f"expected {MESSAGE_SIZE} bytes, got {len(data)}")
        cmd, ident, pid, label, timeout, ack, next_ack = _FORMAT.unpack(data)
        text = label.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        return cls(cmd, ident, pid, text, timeout, ack, next_ack)


def open_socket(server: bool = False, path: str = API_PATH) -> socket.socket:
    """Open a non-blocking stream socket listening on, or connected to, *path*."""
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    sock.setblocking(False)
    try:
        if server:
            with contextlib.suppress(OSError):
                os.remove(path)
            sock.bind(path)
            sock.listen(10)
        else:
            try:
                sock.connect(path)
            except BlockingIOError as exc:
                if exc.errno != errno.EINPROGRESS:
                    raise
    except OSError:
        sock.close()
        raise
    return sock


def _ready(sock: socket.socket, read: bool = False, write: bool = False) -> bool:
    readers = [sock] if read else []
    writers = [sock] if write else []
    readable, writable, _ = select.select(readers, writers, [], POLL_TIMEOUT)
    return bool(readable or writable)


def ping(path: str = API_PATH) -> bool:
    """Return True when a server is accepting connections at *path*."""
    try:
        sock = open_socket(False, path)
    except OSError:
        return False
    with sock:
        if not _ready(sock, read=True, write=True):
            return False
        return sock.getsockopt(socket.SOL_SOCKET, socket.SO_ERROR) == 0


def _request(message: ApiMessage, path: str) -> ApiMessage:
    try:
        sock = open_socket(False, path)
    except OSError as exc:
        raise ApiError(exc.errno, f"cannot reach {path}: {exc.strerror}") from exc

    with sock:
        _log.debug("API: Got cmd %d", message.cmd)
        reply = message

        _log.debug("API: Sending to D ...")
        if _ready(sock, write=True):
            data = message.pack()
            try:
                sent = sock.send(data)
            except OSError as exc:
                raise ApiError(exc.errno, f"send failed: {exc.strerror}") from exc
            if sent != len(data):
                raise ApiError(errno.EIO, "short write")

        _log.debug("API: Receiving from D ...")
        if _ready(sock, read=True):
            try:
                data = sock.recv(MESSAGE_SIZE)
            except OSError as exc:
                raise ApiError(exc.errno, f"receive failed: {exc.strerror}") from exc
            if len(data) != MESSAGE_SIZE:
                raise ApiError(errno.EIO, "short read")
            reply = ApiMessage.from_bytes(data)

        _log.debug("API: All OK, next ACK %d!", reply.next_ack)
        return reply


def _progname() -> str:
    name = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""
    return name or "python"


def subscribe(label: str | None = None, timeout: int = 0,
              path: str = API_PATH) -> tuple[int, int]:
    """Register with the daemon; return the assigned id and the next ack."""
    message = ApiMessage(Command.SUBSCRIBE, pid=os.getpid(),
                         label=label or _progname(), timeout=timeout)
    reply = _request(message, path)
    return reply.id, reply.next_ack


def kick(ident: int, timeout: int, ack: int, path: str = API_PATH) -> int:
    """Report being alive with *ack*; return the next ack to send."""
    message = ApiMessage(Command.KICK, id=ident, pid=os.getpid(), timeout=timeout, ack=ack)
    return _request(message, path).next_ack


def unsubscribe(ident: int, ack: int, path: str = API_PATH) -> None:
    """Deregister *ident* from the daemon."""
    message = ApiMessage(Command.UNSUBSCRIBE, id=ident, pid=os.getpid(), timeout=-1, ack=ack)
    _request(message, path)