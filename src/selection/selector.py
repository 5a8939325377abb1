# src/selection/selector.py
from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from core.models import AlbumIdentity, PickMode, Track
from core.utils import format_track_number, split_first_tab
from library.quarantine import load_quarantine_albums

logger = logging.getLogger(__name__)

UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_ALBUM = "Unknown Album"
UNKNOWN_TITLE = "Unknown Title"


def playlist_row(track: Track) -> str:
    artist = track.artist or UNKNOWN_ARTIST
    title = track.title or UNKNOWN_TITLE
    number = format_track_number(track.track_number)
    if number is not None:
        title = f"{number} {title}"
    return f"{artist}\t{title}"


class MusicSelector:
    """
    Drives one selection from the catalog (or the quarantine list) down to
    a playback action.

    Stages narrow artist -> album -> song. Each stage shows its candidates in
    the picker; cancelling ends the run quietly, an empty candidate list ends
    it with a notice, and the queue intent at an album or song stage queues
    what is resolved so far instead of narrowing further.

    Artist, album and all-songs lists are shown shuffled using `rng`.
    """

    def __init__(
        self,
        client,
        picker,
        dispatcher,
        rng: Optional[random.Random] = None,
        quarantine_path: Optional[str] = None,
        quarantine_loader: Callable[[str], list[AlbumIdentity]] = load_quarantine_albums,
    ):
        self.client = client
        self.picker = picker
        self.dispatcher = dispatcher
        self.rng = rng or random.Random()
        self.quarantine_path = quarantine_path
        self._load_quarantine = quarantine_loader

    def _shuffled(self, items) -> list:
        out = sorted(items)
        self.rng.shuffle(out)
        return out

    # -----------------------------
    # Stages
    # -----------------------------

    def select_artist(self) -> Optional[str]:
        artists = self.client.list_artists()
        if not artists:
            print("No artists found")
            return None

        artists = self._shuffled(artists)
        # queue intent has no meaning for a bare artist; both exits advance
        result = self.picker.pick(artists, "Artist:")
        if result.cancelled:
            return None
        return artists[result.index]

    def select_album(self, artist: Optional[str] = None) -> Optional[tuple[AlbumIdentity, PickMode]]:
        albums = self.client.list_albums(artist)
        if not albums:
            print("No albums found")
            return None

        albums = self._shuffled(albums)
        if artist is not None:
            result = self.picker.pick([a.album for a in albums], "Album:")
        else:
            result = self.picker.pick([a.as_row() for a in albums], "Album:", columns=True)

        if result.cancelled:
            return None
        return albums[result.index], result.mode

    def select_song(
        self,
        artist: Optional[str] = None,
        album: Optional[str] = None,
        preselect: int = 0,
    ) -> Optional[tuple[str, PickMode]]:
        songs = self.client.list_songs(artist, album)
        if not songs:
            print("No songs found")
            return None

        all_songs = artist is None and album is None
        if all_songs:
            songs = self._shuffled(songs)

        result = self.picker.pick(songs, "Choose a song:", selected_row=preselect, columns=all_songs)
        if result.cancelled:
            return None
        return songs[result.index], result.mode

    def select_quarantine_album(self, random_mode: bool = False) -> Optional[tuple[AlbumIdentity, PickMode]]:
        albums = self._load_quarantine(self.quarantine_path) if self.quarantine_path else []
        if not albums:
            print("No quarantine albums found")
            return None

        if random_mode:
            return self.rng.choice(sorted(albums)), PickMode.ACCEPT

        result = self.picker.pick([a.as_row() for a in albums], "Quarantine Album:", columns=True)
        if result.cancelled:
            return None
        return albums[result.index], result.mode

    # -----------------------------
    # Flows
    # -----------------------------

    def continue_from_album(self, target: AlbumIdentity, mode: PickMode, preselect: int = 0) -> None:
        if mode is PickMode.ALTERNATE:
            self.dispatcher.queue_album(target)
            return

        chosen = self.select_song(target.artist, target.album, preselect)
        if chosen is None:
            return
        title, song_mode = chosen
        self.dispatcher.play_song(target.artist, target.album, title, song_mode)

    def run_artist(self, artist: Optional[str] = None, preselect: int = 0) -> None:
        if artist is None:
            artist = self.select_artist()
            if artist is None:
                return
        chosen = self.select_album(artist)
        if chosen is not None:
            self.continue_from_album(*chosen, preselect=preselect)

    def run_album(self, artist: Optional[str] = None, album: Optional[str] = None, preselect: int = 0) -> None:
        if artist is not None and album is not None:
            self.continue_from_album(AlbumIdentity(artist, album), PickMode.ACCEPT, preselect)
            return
        chosen = self.select_album(artist)
        if chosen is not None:
            self.continue_from_album(*chosen, preselect=preselect)

    def run_song(self, preselect: int = 0) -> None:
        chosen = self.select_song(preselect=preselect)
        if chosen is None:
            return
        row, mode = chosen
        parts = split_first_tab(row)
        if parts is None:
            logger.warning("Song row without artist column: %r", row)
            return
        artist, title = parts
        self.dispatcher.play_song(artist, None, title, mode)

    def run_quarantine(self, preselect: int = 0) -> None:
        chosen = self.select_quarantine_album()
        if chosen is not None:
            self.continue_from_album(*chosen, preselect=preselect)

    def play_random_album(self) -> None:
        albums = self.client.list_albums()
        if not albums:
            print("No albums found")
            return
        target = self.rng.choice(sorted(albums))
        self.dispatcher.play_album(target, label="Playing random album")

    def play_random_quarantine_album(self) -> None:
        chosen = self.select_quarantine_album(random_mode=True)
        if chosen is not None:
            self.dispatcher.play_album(chosen[0], label="Playing random quarantine album")

    def show_playlist(self) -> None:
        playlist = self.client.get_playlist()
        if not playlist:
            print("Playlist is empty")
            return

        try:
            current = int(self.client.get_status().get("song", "0"))
        except ValueError:
            current = 0

        rows = [playlist_row(t) for t in playlist]
        result = self.picker.pick(rows, "Playlist:", selected_row=current, columns=True)
        if result.cancelled:
            return

        track = playlist[result.index]
        self.dispatcher.jump_to(
            result.index + 1,
            track.artist or UNKNOWN_ARTIST,
            track.album or UNKNOWN_ALBUM,
            track.title or UNKNOWN_TITLE,
        )

    def run(self, command: Optional[str], artist: Optional[str] = None, album: Optional[str] = None, preselect: int = 0) -> None:
        """Entry point per CLI command name; None runs the album flow."""
        if command == "artist":
            self.run_artist(artist, preselect)
        elif command == "song":
            self.run_song(preselect)
        elif command == "random":
            self.play_random_album()
        elif command == "quarantine":
            self.run_quarantine(preselect)
        elif command == "random-quarantine":
            self.play_random_quarantine_album()
        elif command == "playlist":
            self.show_playlist()
        elif command in (None, "album"):
            self.run_album(artist, album, preselect)
        else:
            raise ValueError(f"Unknown command: {command}")
