# core/models.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict

StatusMap = Dict[str, str]

@dataclass(frozen=True)
class Track:
    file_id: str            # server-side uri, marks the end of a record
    artist: str = ""
    album: str = ""
    title: str = ""
    track_number: str | None = None   # may be "N/M"

@dataclass(frozen=True, order=True)
class AlbumIdentity:
    artist: str
    album: str

    def as_row(self) -> str:
        return f"{self.artist}\t{self.album}"

class PickMode(Enum):
    ACCEPT = auto()      # play now
    ALTERNATE = auto()   # queue for later

@dataclass(frozen=True)
class SelectionResult:
    index: int | None               # 0-based, None when cancelled
    mode: PickMode = PickMode.ACCEPT

    @property
    def cancelled(self) -> bool:
        return self.index is None

    @property
    def queue(self) -> bool:
        return self.mode is PickMode.ALTERNATE

    @staticmethod
    def cancel() -> "SelectionResult":
        return SelectionResult(index=None)
