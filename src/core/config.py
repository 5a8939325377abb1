# core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from PySide6.QtCore import QStandardPaths

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6600
PICKERS = ("rofi", "qt")


def default_quarantine_path() -> str:
    home = QStandardPaths.writableLocation(QStandardPaths.HomeLocation) or os.path.expanduser("~")
    return os.path.join(home, "music", "quarantine")


@dataclass
class AppConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    # None blocks forever; the server is local
    timeout_s: Optional[float] = None

    quarantine_path: str = field(default_factory=default_quarantine_path)
    picker: str = "rofi"
    notify_timeout_ms: int = 3000
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        Build a config from environment variables:
          - MPD_HOST, MPD_PORT
          - MUSIC_SELECTION_QUARANTINE  (path to the quarantine list)
          - MUSIC_SELECTION_PICKER      ("rofi" | "qt")
          - MUSIC_SELECTION_DEBUG=1
        """
        env = os.environ if environ is None else environ
        cfg = cls()

        if env.get("MPD_HOST"):
            cfg.host = env["MPD_HOST"]
        if env.get("MPD_PORT"):
            try:
                cfg.port = int(env["MPD_PORT"])
            except ValueError:
                raise ValueError(f"MPD_PORT must be an integer, got {env['MPD_PORT']!r}")
        if env.get("MUSIC_SELECTION_QUARANTINE"):
            cfg.quarantine_path = os.path.expanduser(env["MUSIC_SELECTION_QUARANTINE"])

        picker = env.get("MUSIC_SELECTION_PICKER")
        if picker:
            if picker not in PICKERS:
                raise ValueError(f"Unknown picker {picker!r}, expected one of {', '.join(PICKERS)}")
            cfg.picker = picker

        cfg.debug = env.get("MUSIC_SELECTION_DEBUG") == "1"
        return cfg
