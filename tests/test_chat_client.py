import io
import socket
import threading

import pytest

from tcpchat.chat_client import ChatClient
from tcpchat.net import ChatError


@pytest.fixture
def listener():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(4)
    sock.settimeout(2)
    yield sock
    sock.close()


@pytest.fixture
def connected(listener):
    """A client and the server side of its connection."""
    with ChatClient(listener.getsockname()[1], "127.0.0.1") as client:
        conn, _ = listener.accept()
        conn.settimeout(2)
        with conn:
            yield client, conn


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def _echo(listener):
    conn, _ = listener.accept()
    with conn:
        while data := conn.recv(1024):
            conn.sendall(data.split(b"\0", 1)[0])


def test_send_appends_nul(connected):
    client, conn = connected
    client.send("hi")
    assert conn.recv(1024) == b"hi\0"


def test_receive_returns_text(connected):
    client, conn = connected
    conn.sendall(b"back")
    assert client.receive(2.0) == "back"


def test_receive_times_out(connected):
    client, _ = connected
    assert client.receive(0.05) is None


def test_receive_after_server_close(connected):
    client, conn = connected
    conn.close()
    assert client.receive(2.0) == ""


def test_handle_connections_stops_when_server_closes(connected):
    client, conn = connected
    conn.close()
    assert client.handle_connections(io.StringIO("lost\nmore\n")) == []


def test_handle_connections_collects_replies(listener, capsys):
    thread = threading.Thread(target=_echo, args=(listener,))
    thread.start()
    try:
        with ChatClient(listener.getsockname()[1], "127.0.0.1") as client:
            replies = client.handle_connections(io.StringIO("one\ntwo\n"))
    finally:
        thread.join(timeout=5)
    assert replies == ["one", "two"]
    assert capsys.readouterr().out.count("input: ") == 3


@pytest.mark.parametrize(
    "endpoint, error",
    [
        (lambda: (_free_port(), "127.0.0.1"), "Connection Failed"),
        (lambda: (8080, "256.1.1.1"), "Invalid address"),
    ],
)
def test_connect_errors(endpoint, error):
    with pytest.raises(ChatError, match=error):
        ChatClient(*endpoint())