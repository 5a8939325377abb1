from __future__ import annotations

import logging
import socket
from typing import Optional

from catalog.parser import (
    first_value,
    parse_album_identities,
    parse_status,
    parse_titles,
    parse_tracks,
    parse_values,
)
from core.errors import ProtocolCommandError, ProtocolConnectionError, ProtocolHandshakeError
from core.models import AlbumIdentity, StatusMap, Track
from core.utils import quote_arg

logger = logging.getLogger(__name__)

GREETING_PREFIX = "OK MPD"
OK_LINE = "OK"
ACK_PREFIX = "ACK"


# -----------------------------
# Transport
# -----------------------------

class _LineTransport:
    """
    Blocking line transport over a connected stream socket.
    Sends one UTF-8 line at a time and reads newline-terminated lines back.
    """

    def __init__(self, sock: socket.socket):
        self._sock: Optional[socket.socket] = sock
        self._buf = b""

    @classmethod
    def open(cls, host: str, port: int, timeout_s: Optional[float] = None) -> "_LineTransport":
        sock = socket.create_connection((host, port), timeout=timeout_s)
        return cls(sock)

    def send_line(self, line: str) -> None:
        if not self._sock:
            raise ProtocolConnectionError("catalog socket not connected")
        self._sock.sendall((line + "\n").encode("utf-8"))

    def read_line(self) -> Optional[str]:
        """
        Next line without its terminator, or None on EOF.
        """
        if not self._sock:
            raise ProtocolConnectionError("catalog socket not connected")
        while b"\n" not in self._buf:
            chunk = self._sock.recv(4096)
            if not chunk:
                return None
            self._buf += chunk
        line, self._buf = self._buf.split(b"\n", 1)
        return line.decode("utf-8", errors="replace").rstrip("\r")

    def close(self) -> None:
        if not self._sock:
            return
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        finally:
            self._sock.close()
            self._sock = None


# -----------------------------
# Client
# -----------------------------

class CatalogClient:
    """
    Client for an MPD-style catalog server.

    One command is in flight at a time: `command()` sends a line and reads
    until the terminating `OK` or `ACK` line before returning.
    """

    def __init__(self, transport: _LineTransport):
        self._transport = transport
        self._handshake()

    @classmethod
    def connect(cls, config) -> "CatalogClient":
        logger.debug("Connecting to catalog server at %s:%s", config.host, config.port)
        return cls(_LineTransport.open(config.host, config.port, config.timeout_s))

    @classmethod
    def from_socket(cls, sock) -> "CatalogClient":
        return cls(_LineTransport(sock))

    def __enter__(self) -> "CatalogClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        try:
            self._transport.send_line("close")
        except (OSError, ProtocolConnectionError):
            # already gone; nothing to say goodbye to
            pass
        self._transport.close()

    # ---- protocol helpers ----

    def _handshake(self) -> None:
        greeting = self._transport.read_line()
        if greeting is None or not greeting.startswith(GREETING_PREFIX):
            self._transport.close()
            raise ProtocolHandshakeError(greeting or "")
        logger.debug("Catalog server greeting: %s", greeting)

    def command(self, cmd: str) -> list[str]:
        """
        Send one command and return the response body lines.
        Raises ProtocolCommandError on ACK; nothing is returned in that case.
        """
        logger.debug("-> %s", cmd)
        self._transport.send_line(cmd)

        lines: list[str] = []
        while True:
            line = self._transport.read_line()
            if line is None:
                raise ProtocolConnectionError(f"Connection closed while waiting for reply to {cmd!r}")
            line = line.strip()
            if line == OK_LINE:
                return lines
            if line.startswith(ACK_PREFIX):
                logger.debug("<- %s", line)
                raise ProtocolCommandError(line, cmd)
            lines.append(line)

    @staticmethod
    def _find(*pairs: tuple[str, str]) -> str:
        return "find " + " ".join(f"{tag} {quote_arg(value)}" for tag, value in pairs)

    # ---- queries ----

    def list_artists(self) -> list[str]:
        seen: set[str] = set()
        artists: list[str] = []
        for name in parse_values(self.command("list albumartist"), "AlbumArtist"):
            if not name.strip() or name in seen:
                continue
            seen.add(name)
            artists.append(name)
        return artists

    def list_albums(self, artist: str | None = None) -> set[AlbumIdentity]:
        cmd = self._find(("albumartist", artist)) if artist is not None else "listallinfo"
        return parse_album_identities(self.command(cmd))

    def list_songs(self, artist: str | None = None, album: str | None = None) -> list[str]:
        """
        With no filters, every titled track as "artist<TAB>title".
        With any filter, the matching titles in server order.
        """
        filters: list[tuple[str, str]] = []
        if artist is not None:
            filters.append(("albumartist", artist))
        if album is not None:
            filters.append(("album", album))

        if not filters:
            return parse_titles(self.command("listallinfo"), with_artist=True)
        return parse_titles(self.command(self._find(*filters)))

    def get_playlist(self) -> list[Track]:
        return parse_tracks(self.command("playlistinfo"))

    def get_status(self) -> StatusMap:
        return parse_status(self.command("status"))

    def find_song_album(self, artist: str, title: str) -> str | None:
        return first_value(self.command(self._find(("albumartist", artist), ("title", title))), "Album")
