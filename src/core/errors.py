# core/errors.py
from __future__ import annotations


class CatalogError(Exception):
    """Base class for failures talking to the catalog server."""


class ProtocolHandshakeError(CatalogError):
    def __init__(self, greeting: str):
        super().__init__(f"Invalid catalog server greeting: {greeting!r}")
        self.greeting = greeting


class ProtocolCommandError(CatalogError):
    """
    The server answered a command with an ACK line.
    `message` is the server's text, `command` the line we sent.
    """

    def __init__(self, message: str, command: str):
        super().__init__(f"Catalog server error: {message}")
        self.message = message
        self.command = command


class ProtocolConnectionError(CatalogError):
    """Connection closed before a complete response was read."""


class PlaybackError(Exception):
    def __init__(self, args_: list[str], returncode: int | None, stderr: str = ""):
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"{' '.join(args_)} failed: {detail}")
        self.args_ = args_
        self.returncode = returncode
        self.stderr = stderr


class AmbiguousSongPosition(Exception):
    """A title could not be pinned to exactly one queue position."""

    def __init__(self, title: str, matches: list[int]):
        super().__init__(f"Could not find song '{title}' in playlist")
        self.title = title
        self.matches = matches
