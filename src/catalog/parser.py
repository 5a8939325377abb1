# src/catalog/parser.py
from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence

from core.models import AlbumIdentity, StatusMap, Track

# (line prefix, record key), checked in order
TRACK_FIELDS: tuple[tuple[str, str], ...] = (
    ("AlbumArtist: ", "artist"),
    ("Album: ", "album"),
    ("Title: ", "title"),
    ("Track: ", "track_number"),
)
ALBUM_FIELDS = TRACK_FIELDS[:2]
SONG_FIELDS = (TRACK_FIELDS[0], TRACK_FIELDS[2])

TERMINATOR = "file: "


def iter_records(lines: Iterable[str], fields: Sequence[tuple[str, str]] = TRACK_FIELDS) -> Iterator[dict[str, str]]:
    """
    Fold `key: value` lines into records.

    Recognized field lines overwrite the matching key of the pending record.
    A terminator line stores the `file` key, yields the record and starts a
    fresh one. Anything else is ignored, so unknown server fields pass through.

    Every call starts from an empty record; nothing is shared between calls.
    A trailing partial record (no terminator) is dropped.
    """
    record: dict[str, str] = {}
    for line in lines:
        if line.startswith(TERMINATOR):
            record["file"] = line[len(TERMINATOR):]
            yield record
            record = {}
            continue
        for prefix, key in fields:
            if line.startswith(prefix):
                record[key] = line[len(prefix):]
                break


def parse_tracks(lines: Iterable[str]) -> list[Track]:
    return [
        Track(
            file_id=r["file"],
            artist=r.get("artist", ""),
            album=r.get("album", ""),
            title=r.get("title", ""),
            track_number=r.get("track_number"),
        )
        for r in iter_records(lines, TRACK_FIELDS)
        if r["file"]
    ]


def parse_album_identities(lines: Iterable[str]) -> set[AlbumIdentity]:
    albums: set[AlbumIdentity] = set()
    for r in iter_records(lines, ALBUM_FIELDS):
        artist = r.get("artist", "")
        album = r.get("album", "")
        if artist and album:
            albums.add(AlbumIdentity(artist, album))
    return albums


def parse_titles(lines: Iterable[str], *, with_artist: bool = False) -> list[str]:
    """
    Titles of every titled record, in server order.
    With `with_artist`, each entry is "artist<TAB>title".
    """
    out: list[str] = []
    for r in iter_records(lines, SONG_FIELDS):
        title = r.get("title", "")
        if not title:
            continue
        out.append(f"{r.get('artist', '')}\t{title}" if with_artist else title)
    return out


def parse_values(lines: Iterable[str], key: str) -> list[str]:
    prefix = f"{key}: "
    return [line[len(prefix):] for line in lines if line.startswith(prefix)]


def first_value(lines: Iterable[str], key: str) -> Optional[str]:
    for value in parse_values(lines, key):
        return value
    return None


def parse_status(lines: Iterable[str]) -> StatusMap:
    status: StatusMap = {}
    for line in lines:
        key, sep, value = line.partition(": ")
        if sep:
            status[key] = value
    return status
