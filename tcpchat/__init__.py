"""TCP echo and broadcast chat servers and clients."""

__version__ = "0.1.0"

__all__ = ["chat_client", "chat_server", "echo_client", "echo_server", "net"]