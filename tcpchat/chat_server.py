"""Chat server that relays every message to all connected clients."""

from __future__ import annotations

import logging
import selectors
import sys

from tcpchat.echo_client import _text
from tcpchat.echo_server import _listen, _serve_main
from tcpchat.net import check_error, set_non_blocking

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
BUFFER_SIZE = 1024
MAX_CONNECTIONS = 32


class ChatServer:
    """A non-blocking server that broadcasts each message to every client."""

    def __init__(self, port=DEFAULT_PORT, host=None):
        self._socket = _listen(port, host, MAX_CONNECTIONS, non_blocking=True)
        self._selector = selectors.DefaultSelector()
        self._selector.register(self._socket, selectors.EVENT_READ)
        self._clients = {}

    @property
    def port(self):
        """The port the server is bound to."""
        return self._socket.getsockname()[1]

    @property
    def connected_count(self):
        """The number of clients currently connected."""
        return len(self._clients)

    def poll(self, timeout=None):
        """Wait up to timeout seconds for events, handle them, return their count."""
        try:
            events = self._selector.select(timeout)
        except OSError:
            check_error(True, "epoll_wait() error")
        for key, _ in events:
            if key.fileobj is self._socket:
                self._accept()
            else:
                self._read(key.fileobj)
        return len(events)

    def handle_connections(self):
        """Serve clients forever."""
        while True:
            self.poll()

    def _accept(self):
        while True:
            try:
                conn, (ip, port) = self._socket.accept()
            except BlockingIOError:
                return
            except OSError as exc:
                logger.error("accept() error: %s", exc)
                return
            logger.info("connected with %s:%s on %s", ip, port, conn.fileno())
            set_non_blocking(conn)
            self._selector.register(conn, selectors.EVENT_READ)
            self._clients[conn.fileno()] = conn

    def _read(self, conn):
        while True:
            try:
                data = conn.recv(BUFFER_SIZE)
            except BlockingIOError:
                return
            except OSError:
                data = b""
            if not data:
                self._drop(conn)
                return
            message = data.split(b"\0", 1)[0]
            logger.info("message: %s", _text(message))
            self._broadcast(message)

    def _broadcast(self, message):
        for client in list(self._clients.values()):
            try:
                client.sendall(message)
            except OSError as exc:
                logger.warning("write to %s failed: %s", client.fileno(), exc)

    def _drop(self, conn):
        fd = conn.fileno()
        logger.info("connection %s closed", fd)
        self._selector.unregister(conn)
        self._clients.pop(fd, None)
        conn.close()

    def close(self):
        """Disconnect every client and stop listening."""
        for conn in self._clients.values():
            conn.close()
        self._clients.clear()
        self._selector.close()
        self._socket.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def main(argv=None):
    """Run the chat server until interrupted."""
    return _serve_main(ChatServer, "tcpchat-server", argv)


if __name__ == "__main__":
    sys.exit(main())