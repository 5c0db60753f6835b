"""Server that echoes back the first message of every connection."""

from __future__ import annotations

import logging
import socket
import sys

from tcpchat.echo_client import _endpoint_parser, _run, _text
from tcpchat.net import check_error, create_address, create_socket, set_non_blocking

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
BUFFER_SIZE = 1024
BACKLOG = 3


def _listen(port, host, backlog, non_blocking=False):
    """Return a socket bound to host:port and listening."""
    sock = create_socket()
    try:
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            if hasattr(socket, "SO_REUSEPORT"):
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEPORT, 1)
        except OSError:
            check_error(True, "setsockopt() error")
        address = create_address(port, host)
        try:
            sock.bind(address)
        except (OSError, OverflowError):
            check_error(True, "bind failed")
        if non_blocking:
            set_non_blocking(sock)
        try:
            sock.listen(backlog)
        except OSError:
            check_error(True, "listen failed")
    except BaseException:
        sock.close()
        raise
    print(f"Server listening on port {sock.getsockname()[1]}")
    return sock


def _serve_main(server_cls, prog, argv):
    """Parse argv, then run a server of server_cls until interrupted."""
    args = _endpoint_parser(prog, None).parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    def serve():
        with server_cls(args.port, args.host) as server:
            server.handle_connections()

    return _run(serve)


class EchoServer:
    """A listening TCP server that answers each client with its own message."""

    def __init__(self, port=DEFAULT_PORT, host=None):
        self._socket = _listen(port, host, BACKLOG)

    @property
    def port(self):
        """The port the server is bound to."""
        return self._socket.getsockname()[1]

    def handle_connections(self, limit=None):
        """Accept clients one at a time and echo to each.

        Runs forever unless limit gives the number of clients to serve.
        """
        served = 0
        while limit is None or served < limit:
            try:
                conn, _ = self._socket.accept()
            except OSError:
                check_error(True, "Accept error")
            self.handle_accept(conn)
            served += 1

    def handle_accept(self, conn):
        """Read one message from conn, send it back and close conn.

        Returns the bytes echoed, b"" when the client had disconnected, or
        None on a read error.
        """
        with conn:
            try:
                data = conn.recv(BUFFER_SIZE)
            except OSError:
                logger.error("Read error on client socket %s", conn.fileno())
                return None
            if not data:
                logger.info("Client disconnected.")
                return b""
            logger.info("Received: %s", _text(data))
            try:
                conn.sendall(data)
            except OSError:
                logger.error("Send error on client socket %s", conn.fileno())
                return None
            logger.info("Echo message sent")
            return data

    def close(self):
        """Stop listening."""
        self._socket.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def main(argv=None):
    """Run the echo server until interrupted."""
    return _serve_main(EchoServer, "tcpchat-echo-server", argv)


if __name__ == "__main__":
    sys.exit(main())