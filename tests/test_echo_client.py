import socket
import threading

import pytest

from tcpchat.echo_client import EchoClient, main, read_args
from tcpchat.net import ChatError


def _serve(reply):
    """Start a one-shot server; reply maps received bytes to bytes or None."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]

    def run():
        conn, _ = listener.accept()
        with conn:
            out = reply(conn.recv(1024))
            if out is not None:
                conn.sendall(out)
        listener.close()

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return port, thread


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.mark.parametrize(
    "reply, message, expected",
    [
        (lambda data: data, "Hello from client", "Hello from client"),
        (lambda data: None, "ping", "Server closed connection.\n"),
        (lambda data: data + b"\0trailing", "abc", "abc"),
    ],
)
def test_send_and_receive(reply, message, expected, capsys):
    port, thread = _serve(reply)
    with EchoClient(port, "127.0.0.1") as client:
        response = client.send_and_receive_message(message)
    thread.join(5)
    assert response == expected
    assert f"Sent: {message}" in capsys.readouterr().out


@pytest.mark.parametrize(
    "endpoint, error",
    [
        (lambda: (8080, "not-an-ip"), "Invalid address"),
        (lambda: (_free_port(), "127.0.0.1"), "Connection Failed"),
    ],
)
def test_connect_errors(endpoint, error):
    with pytest.raises(ChatError, match=error):
        EchoClient(*endpoint())


def test_send_after_close_raises():
    port, _ = _serve(lambda data: data)
    client = EchoClient(port, "127.0.0.1")
    client.close()
    with pytest.raises(ChatError):
        client.send_and_receive_message("late")


@pytest.mark.parametrize(
    "argv, expected", [(["hi"], "hi"), (["first", "second"], "first")]
)
def test_read_args_first_argument(argv, expected):
    assert read_args(argv) == expected


def test_read_args_empty():
    with pytest.raises(ValueError, match="Usage"):
        read_args([])


def test_main_prints_reply(capsys):
    port, thread = _serve(lambda data: data)
    code = main(["hello", "--port", str(port), "--host", "127.0.0.1"])
    thread.join(5)
    assert code == 0
    assert "Received: hello" in capsys.readouterr().out


def test_main_without_message(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().out


def test_main_connection_failure():
    assert main(["hello", "--port", str(_free_port())]) == 1