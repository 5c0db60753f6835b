"""Socket helpers shared by the chat and echo programs."""

from __future__ import annotations

import logging
import socket

logger = logging.getLogger(__name__)

ANY_ADDRESS = "0.0.0.0"


class ChatError(RuntimeError):
    """Raised when a socket operation fails."""


def check_error(test, error_message):
    """Log and raise ChatError with error_message when test is true."""
    if test:
        logger.error("%s", error_message)
        raise ChatError(error_message)


def create_socket():
    """Create an IPv4 TCP socket."""
    try:
        return socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    except OSError as exc:
        logger.error("Socket creation error: %s", exc)
        raise ChatError("Socket creation error") from exc


def create_address(port, ip=None):
    """Build an IPv4 (host, port) address.

    Without an ip the address binds to every interface. A given ip must be
    a dotted IPv4 address.
    """
    if ip is None:
        return (ANY_ADDRESS, port)
    try:
        socket.inet_pton(socket.AF_INET, ip)
    except (OSError, ValueError, TypeError):
        check_error(True, "Invalid address/ Address not supported")
    return (ip, port)


def set_non_blocking(sock):
    """Put sock into non-blocking mode and return it."""
    try:
        sock.setblocking(False)
    except OSError as exc:
        logger.error("fcntl() error: %s", exc)
        raise ChatError("fcntl() error") from exc
    return sock