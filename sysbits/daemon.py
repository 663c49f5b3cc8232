"""A daemon that answers subscribe, kick and unsubscribe requests."""

from __future__ import annotations

import sys
from dataclasses import replace

from sysbits.api import API_PATH, MESSAGE_SIZE, ApiMessage, Command, open_socket

FIRST_ID = 1337
FIRST_ACK = 42


def _warn(text: str) -> None:
    print(f"d: {text}", file=sys.stderr)


class Daemon:
    """Serves clients on a UNIX socket at *path*, handing out ids from *first_id*."""

    def __init__(self, path: str = API_PATH, first_id: int = FIRST_ID) -> None:
        self.path = path
        self._next_id = first_id
        self._sock = open_socket(True, path)
        self._sock.setblocking(True)
        self._closed = False

    def handle(self, message: ApiMessage) -> ApiMessage:
        """Return the reply to *message*."""
        _warn(f"Client sent cmd {message.cmd}")
        if message.cmd == Command.SUBSCRIBE:
            _warn(f"Hello {message.label}, registering pid {message.pid}.")
            reply = replace(message, id=self._next_id, next_ack=FIRST_ACK)
            self._next_id += 1
            return reply
        if message.cmd == Command.UNSUBSCRIBE:
            _warn(f"Goodbye pid {message.pid}.")
            return message
        if message.cmd == Command.KICK:
            _warn(f"How do you do pid {message.pid}({message.id})?  "
                  f"ACK should be {message.next_ack}, is {message.ack}")
            return replace(message, next_ack=message.ack + 2)
        _warn(f"Invalid command {message.cmd}")
        return message

    def serve_one(self) -> ApiMessage | None:
        """Accept one client and answer it; return the reply, or None if there was none."""
        try:
            conn, _ = self._sock.accept()
        except OSError as exc:
            if self._closed:
                raise
            _warn(f"Failed creating client: {exc.strerror}")
            return None

        with conn:
            _warn("New client connecting!")
            data = b""
            try:
                while len(data) < MESSAGE_SIZE:
                    chunk = conn.recv(MESSAGE_SIZE - len(data))
                    if not chunk:
                        break
                    data += chunk
            except OSError as exc:
                _warn(f"Failed reading client request: {exc.strerror}")
                return None
            if not data:
                return None
            if len(data) < MESSAGE_SIZE:
                _warn("Failed reading client request: short read")
                return None

            reply = self.handle(ApiMessage.from_bytes(data))
            try:
                conn.sendall(reply.pack())
            except OSError as exc:
                _warn(f"Failed sending reply to client: {exc.strerror}")
        _warn("Preparing for next client.")
        return reply

    def serve_forever(self) -> None:
        """Answer clients until close() is called."""
        while not self._closed:
            try:
                self.serve_one()
            except OSError:
                if self._closed:
                    break
                raise

    def close(self) -> None:
        """Stop listening."""
        if self._closed:
            return
        self._closed = True
        try:
            self._sock.shutdown(2)
        except OSError:
            pass
        self._sock.close()


def main(argv: list[str] | None = None) -> int:
    """Run the daemon on the given socket path, or the default one."""
    args = sys.argv[1:] if argv is None else list(argv)
    path = args[0] if args else API_PATH
    try:
        daemon = Daemon(path)
    except OSError as exc:
        _warn(f"Failed starting server: {exc.strerror}")
        return 1
    try:
        daemon.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        daemon.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())