"""Client that sends one message to an echo server and reads the reply."""

from __future__ import annotations

import argparse
import sys

from tcpchat.net import ChatError, check_error, create_address, create_socket

DEFAULT_PORT = 8080
DEFAULT_SERVER = "127.0.0.1"
BUFFER_SIZE = 1024

SERVER_CLOSED = "Server closed connection.\n"
READ_ERROR = "Read error.\n"


def _connect(port, server_address):
    """Return a TCP socket connected to server_address:port."""
    sock = create_socket()
    try:
        address = create_address(port, server_address)
        try:
            sock.connect(address)
        except (OSError, OverflowError):
            check_error(True, "Connection Failed.")
    except BaseException:
        sock.close()
        raise
    return sock


def _text(data):
    """Decode received bytes up to the first NUL byte."""
    return data.split(b"\0", 1)[0].decode(errors="replace")


def _endpoint_parser(prog, host_default):
    """Return an argument parser with --host and --port options."""
    parser = argparse.ArgumentParser(prog=prog)
    parser.add_argument("--host", default=host_default)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    return parser


def _run(action):
    """Run action and return an exit status: 1 on ChatError, else 0."""
    try:
        action()
    except ChatError as exc:
        print(exc, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0


class EchoClient:
    """A connected TCP client for the echo server."""

    def __init__(self, port, server_address):
        self._socket = _connect(port, server_address)

    def send_and_receive_message(self, message):
        """Send message and return the server's reply as text."""
        try:
            self._socket.sendall(message.encode())
        except OSError:
            check_error(True, "Send error.")
        print(f"Sent: {message}")
        try:
            data = self._socket.recv(BUFFER_SIZE)
        except OSError:
            return READ_ERROR
        if not data:
            return SERVER_CLOSED
        return _text(data)

    def close(self):
        """Close the connection."""
        self._socket.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def read_args(argv):
    """Return the message to send: the first of the given arguments."""
    if not argv:
        raise ValueError("Usage: tcpchat-echo-client <message>")
    return argv[0]


def main(argv=None):
    """Send one message to the echo server and print the reply."""
    parser = _endpoint_parser("tcpchat-echo-client", DEFAULT_SERVER)
    parser.add_argument("message", nargs="*")
    args = parser.parse_args(argv)
    try:
        message = read_args(args.message)
    except ValueError as exc:
        print(exc)
        return 1

    def session():
        with EchoClient(args.port, args.host) as client:
            response = client.send_and_receive_message(message)
        if response in (SERVER_CLOSED, READ_ERROR):
            print(response, end="")
        else:
            print(f"Received: {response}")

    return _run(session)


if __name__ == "__main__":
    sys.exit(main())