"""Interactive chat client: sends typed lines and prints what the server relays."""

from __future__ import annotations

import logging
import selectors
import sys

from tcpchat.echo_client import _connect, _endpoint_parser, _run, _text
from tcpchat.net import check_error

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
DEFAULT_SERVER = "127.0.0.1"
BUFFER_SIZE = 1024


class ChatClient:
    """A connected client of the chat server."""

    def __init__(self, port=DEFAULT_PORT, server_address=DEFAULT_SERVER):
        self._socket = _connect(port, server_address)
        self._selector = selectors.DefaultSelector()
        self._selector.register(self._socket, selectors.EVENT_READ)
        self._server_closed = False

    def send(self, message):
        """Send message to the server, terminated by a NUL byte."""
        try:
            self._socket.sendall(message.encode() + b"\0")
        except OSError:
            check_error(True, "write() error")

    def receive(self, timeout=None):
        """Wait up to timeout seconds for a message.

        Returns the text, None on timeout, or "" when the server has closed
        the connection.
        """
        try:
            events = self._selector.select(timeout)
        except OSError:
            check_error(True, "epoll_wait() error")
        logger.info("queued_event_count: %s", len(events))
        if not events:
            return None
        try:
            data = self._socket.recv(BUFFER_SIZE)
        except OSError:
            check_error(True, "read() error")
        if not data:
            self._server_closed = True
            logger.info("Server closed connection.")
            return ""
        text = _text(data)
        logger.info("msg: %s", text)
        return text

    def handle_connections(self, input_stream=None):
        """Send each input line and wait for the server's reply.

        Stops at the end of input or when the server closes the connection,
        and returns the replies received.
        """
        stream = sys.stdin if input_stream is None else input_stream
        received = []
        while True:
            print("input: ", end="", flush=True)
            line = stream.readline()
            if not line:
                return received
            self.send(line.removesuffix("\n"))
            reply = self.receive()
            if self._server_closed:
                return received
            received.append(reply)

    def close(self):
        """Close the connection."""
        self._selector.close()
        self._socket.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def main(argv=None):
    """Chat with the server from standard input."""
    args = _endpoint_parser("tcpchat-client", DEFAULT_SERVER).parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    def session():
        with ChatClient(args.port, args.host) as client:
            client.handle_connections()

    return _run(session)


if __name__ == "__main__":
    sys.exit(main())