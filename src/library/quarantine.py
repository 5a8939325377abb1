# src/library/quarantine.py
from __future__ import annotations

import logging
import os
import re
from typing import Iterable, Iterator

from core.models import AlbumIdentity

logger = logging.getLogger(__name__)

# "artist","album" and nothing else; no escapes, no space after the comma
QUARANTINE_LINE = re.compile(r'^"([^"]*)","([^"]*)"$')


def parse_quarantine_lines(lines: Iterable[str]) -> Iterator[AlbumIdentity]:
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        m = QUARANTINE_LINE.match(line)
        if not m:
            logger.debug("Skipping quarantine line %d: %r", lineno, line)
            continue
        yield AlbumIdentity(artist=m.group(1), album=m.group(2))


def load_quarantine_albums(path: str) -> list[AlbumIdentity]:
    """
    Read the hand-edited quarantine list at `path`.
    A missing file yields an empty list after a notice on stdout.
    """
    if not os.path.isfile(path):
        print(f"Quarantine file not found: {path}")
        return []

    with open(path, "r", encoding="utf-8", errors="replace") as fh:
        return list(parse_quarantine_lines(fh))
