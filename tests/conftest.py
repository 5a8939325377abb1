"""
Shared fakes for the test suite.

FakeSocket speaks the catalog protocol from a table of scripted replies,
FakePicker replays scripted picker results and FakePlayback records the
calls that would have gone to mpc.
"""

import random

import pytest

from catalog.client import CatalogClient
from core.models import AlbumIdentity, PickMode, SelectionResult


def ok(*lines):
    return list(lines) + ["OK"]


class FakeSocket:
    def __init__(self, responses=None, greeting="OK MPD 0.23.5", chunk_size=7):
        self.responses = dict(responses or {})
        self.sent = []
        self.closed = False
        self.chunk_size = chunk_size
        self._out = (greeting + "\n").encode("utf-8") if greeting is not None else b""

    def sendall(self, data):
        for line in data.decode("utf-8").rstrip("\n").split("\n"):
            self.sent.append(line)
            if line == "close":
                continue
            reply = self.responses.get(line, ["OK"])
            self._out += ("\n".join(reply) + "\n").encode("utf-8")

    def recv(self, n):
        # small chunks exercise the line buffering
        size = min(n, self.chunk_size)
        chunk, self._out = self._out[:size], self._out[size:]
        return chunk

    def shutdown(self, how):
        pass

    def close(self):
        self.closed = True


class FakePicker:
    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def pick(self, items, prompt, selected_row=0, columns=False):
        self.calls.append(
            {"items": list(items), "prompt": prompt, "selected_row": selected_row, "columns": columns}
        )
        if not self.results:
            return SelectionResult.cancel()
        result = self.results.pop(0)
        if callable(result):
            return result(list(items))
        return result


def choose(value, mode=PickMode.ACCEPT):
    """Picker result that selects `value` wherever it ended up after shuffling."""
    return lambda items: SelectionResult(index=items.index(value), mode=mode)


class FakePlayback:
    def __init__(self, titles=None):
        self.calls = []
        self.titles = list(titles or [])

    def clear(self):
        self.calls.append(("clear",))

    def find_add(self, artist, album=None, title=None):
        self.calls.append(("find_add", artist, album, title))

    def playlist_titles(self):
        self.calls.append(("playlist_titles",))
        return list(self.titles)

    def play(self, position=None):
        self.calls.append(("play", position))

    def names(self):
        return [c[0] for c in self.calls]


class FakeCatalog:
    """In-memory stand-in for CatalogClient built from (artist, album, title) rows."""

    def __init__(self, rows=(), playlist=(), status=None):
        self.rows = list(rows)
        self.playlist = list(playlist)
        self.status = dict(status or {})
        self.calls = []

    def list_artists(self):
        self.calls.append(("list_artists",))
        out = []
        for artist, _, _ in self.rows:
            if artist not in out:
                out.append(artist)
        return out

    def list_albums(self, artist=None):
        self.calls.append(("list_albums", artist))
        return {AlbumIdentity(a, b) for a, b, _ in self.rows if artist is None or a == artist}

    def list_songs(self, artist=None, album=None):
        self.calls.append(("list_songs", artist, album))
        if artist is None and album is None:
            return [f"{a}\t{t}" for a, _, t in self.rows]
        return [t for a, b, t in self.rows if a == artist and b == album]

    def find_song_album(self, artist, title):
        self.calls.append(("find_song_album", artist, title))
        for a, b, t in self.rows:
            if a == artist and t == title:
                return b
        return None

    def get_playlist(self):
        return list(self.playlist)

    def get_status(self):
        return dict(self.status)


@pytest.fixture
def make_client():
    def _make(responses=None, **kwargs):
        sock = FakeSocket(responses, **kwargs)
        return CatalogClient.from_socket(sock), sock
    return _make


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def playback():
    return FakePlayback()
