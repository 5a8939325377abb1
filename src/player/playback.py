# src/player/playback.py
from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional

from core.errors import PlaybackError

logger = logging.getLogger(__name__)


@dataclass
class MpcConfig:
    mpc_path: str = "mpc"
    host: Optional[str] = None
    port: Optional[int] = None


class MpcPlayback:
    """
    Queue and transport control through the `mpc` command line client.

    Every call blocks until mpc exits. A non-zero exit status or a missing
    binary raises PlaybackError.
    """

    def __init__(self, config: Optional[MpcConfig] = None):
        self.config = config or MpcConfig()

    def _base_args(self) -> list[str]:
        args = [self.config.mpc_path]
        if self.config.host:
            args.append(f"--host={self.config.host}")
        if self.config.port:
            args.append(f"--port={self.config.port}")
        return args

    def _run(self, *args: str) -> str:
        argv = self._base_args() + list(args)
        logger.debug("Running %s", argv)
        try:
            proc = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise PlaybackError(argv, None, str(e)) from e

        if proc.returncode != 0:
            raise PlaybackError(argv, proc.returncode, proc.stderr or "")
        return proc.stdout

    # ---- queue ----

    def clear(self) -> None:
        self._run("clear")

    def find_add(self, artist: str, album: Optional[str] = None, title: Optional[str] = None) -> None:
        """
        Append every track matching the filters to the queue.
        The queue is never cleared here.
        """
        args = ["findadd"]
        if album is not None:
            args += ["album", album]
        args += ["albumartist", artist]
        if title is not None:
            args += ["title", title]
        self._run(*args)

    def playlist_titles(self) -> list[str]:
        out = self._run("playlist", "-f", "%title%")
        return out.strip("\n").split("\n") if out.strip() else []

    # ---- transport ----

    def play(self, position: Optional[int] = None) -> None:
        """
        Start playback; `position` is 1-based in the current queue.
        """
        if position is None:
            self._run("play")
        else:
            self._run("play", str(int(position)))
