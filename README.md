# tcpchat

Small TCP networking tools written on top of Python's standard `socket`
and `selectors` modules:

- an **echo server** (`tcpchat.echo_server.EchoServer`) that accepts one
  client at a time, reads one message, sends it back and closes the
  connection;
- an **echo client** (`tcpchat.echo_client.EchoClient`) that sends one
  message and returns the reply;
- a **chat server** (`tcpchat.chat_server.ChatServer`) that multiplexes many
  non-blocking clients and relays every message it receives to all connected
  clients, the sender included;
- a **chat client** (`tcpchat.chat_client.ChatClient`) that sends lines typed
  on standard input and prints what the server relays back.

All tools use port 8080 by default; servers bind to every interface
(`0.0.0.0`) and clients connect to `127.0.0.1`. Data is read in chunks of up
to 1024 bytes.

## Installation

```
pip install .
```

No third-party libraries are needed. To run the tests:

```
pip install .[test]
pytest
```

## Command line

Every command accepts `--host` and `--port`.

Start an echo server:

```
tcpchat-echo-server
```

Send it a message from another terminal:

```
tcpchat-echo-client "Hello from client"
```

The client prints `Sent: ...` and then `Received: ...` with the echoed reply.
Called without a message it prints a usage line and exits with status 1.

Start the broadcasting chat server:

```
tcpchat-server
```

Connect one or more chat clients and type lines at the `input:` prompt:

```
tcpchat-client
```

After each line the client waits for the next message from the server and
logs it. It stops at the end of input or when the server closes the
connection. The servers log activity at INFO level; they run until
interrupted with Ctrl-C. Socket failures are printed to standard error and
give exit status 1.

## Library use

```python
from tcpchat.echo_client import EchoClient

with EchoClient(8080, "127.0.0.1") as client:
    reply = client.send_and_receive_message("ping")
    print(reply)
```

`send_and_receive_message` returns the reply text, or
`"Server closed connection.\n"` / `"Read error.\n"` when no reply came.

```python
from tcpchat.echo_server import EchoServer

with EchoServer(8080) as server:
    print("listening on", server.port)
    server.handle_connections(limit=1)   # serve one client, then return
```

Pass port `0` to let the system choose a free port; `server.port` tells which.

```python
from tcpchat.chat_server import ChatServer

with ChatServer(8080) as server:
    while True:
        server.poll(timeout=1.0)          # handle pending events
        print(server.connected_count, "clients")
```

`ChatServer.handle_connections()` polls forever.

```python
from tcpchat.chat_client import ChatClient

with ChatClient(8080, "127.0.0.1") as client:
    client.send("hello everyone")
    print(client.receive(timeout=1.0))   # None on timeout, "" if the server closed
```

`ChatClient.handle_connections(input_stream)` reads lines from any text
stream (standard input by default) and returns the replies it received.

Helpers in `tcpchat.net` — `create_socket`, `create_address`,
`set_non_blocking` and `check_error` — raise `tcpchat.net.ChatError` on
failure. Invalid addresses, refused connections and sockets that cannot be
bound are all reported as `ChatError`.

## Limitations

- The echo server handles a single message per connection and one client at
  a time.
- The chat protocol is plain text with no user names, authentication,
  encryption or message history; messages are not framed beyond a trailing
  NUL byte from the chat client.