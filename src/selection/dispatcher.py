from __future__ import annotations

import logging
from typing import Callable, Optional

from core.errors import AmbiguousSongPosition
from core.models import AlbumIdentity, PickMode

logger = logging.getLogger(__name__)

NotifyFn = Callable[[str, str], None]


def locate_title(titles: list[str], title: str) -> int:
    """
    1-based queue position of the single exact match for `title`.
    Raises AmbiguousSongPosition when there is no match or more than one.
    """
    matches = [i + 1 for i, t in enumerate(titles) if t == title]
    if len(matches) != 1:
        raise AmbiguousSongPosition(title, matches)
    return matches[0]


class ActionDispatcher:
    """
    Last step of every selection: turns a resolved target into playback calls,
    prints the outcome and sends a notification.
    """

    def __init__(self, client, playback, notify: Optional[NotifyFn] = None):
        self.client = client
        self.playback = playback
        self._notify = notify

    def notify(self, summary: str, message: str) -> None:
        if self._notify is None:
            return
        try:
            self._notify(summary, message)
        except Exception as e:
            logger.debug("Notification dropped: %s", e)

    # ---- songs ----

    def play_song(self, artist: str, album: Optional[str], title: str, mode: PickMode = PickMode.ACCEPT) -> None:
        if album is None:
            album = self.client.find_song_album(artist, title)
            if album is None:
                logger.info("No album found for %r by %r, adding without album filter", title, artist)

        if mode is PickMode.ALTERNATE:
            self.playback.find_add(artist, album, title)
            print(f"Queued:\n{artist}\n{album or ''}\n{title}")
            self.notify("Queued", f"{artist}\n{album or ''}\n{title}")
            return

        self.playback.clear()
        self.playback.find_add(artist, album)

        try:
            position = locate_title(self.playback.playlist_titles(), title)
        except AmbiguousSongPosition as e:
            logger.warning("%s (matches: %s), starting from the top", e, e.matches)
            self.playback.play()
            print(str(e))
            self.notify("Now Playing Album", f"{artist}\n{album or ''}")
            return

        self.playback.play(position)
        print(f"Playing:\n{artist}\n{album or ''}\n{title}")
        self.notify("Now Playing", f"{artist}\n{album or ''}\n{title}")

    # ---- albums ----

    def play_album(self, target: AlbumIdentity, label: str = "Playing album") -> None:
        self.playback.clear()
        self.playback.find_add(target.artist, target.album)
        self.playback.play()
        print(f"{label}:\n{target.artist}\n{target.album}")
        self.notify("Now Playing Album", f"{target.artist}\n{target.album}")

    def queue_album(self, target: AlbumIdentity) -> None:
        self.playback.find_add(target.artist, target.album)
        print(f"Queued album:\n{target.artist}\n{target.album}")
        self.notify("Queued", f"{target.artist}\n{target.album}")

    # ---- queue position ----

    def jump_to(self, position: int, artist: str, album: str, title: str) -> None:
        self.playback.play(position)
        self.notify("Now Playing", f"{artist}\n{album}\n{title}")
