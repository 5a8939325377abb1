from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Optional, Sequence

from catalog.client import CatalogClient
from core.config import AppConfig, PICKERS
from core.errors import CatalogError, PlaybackError
from core.state import AppState
from player.playback import MpcConfig, MpcPlayback
from selection.dispatcher import ActionDispatcher
from selection.selector import MusicSelector
from ui.notify import DesktopNotifier
from ui.picker import make_picker

logger = logging.getLogger(__name__)

COMMANDS = {
    "artist": "Select artist then album then song",
    "album": "Select album then song",
    "song": "Select song from all songs",
    "random": "Play a random album without prompts",
    "quarantine": "Select album from quarantine list",
    "random-quarantine": "Play a random quarantine album without prompts",
    "playlist": "Show current playlist and jump to selected song",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="music-selection", description="Music selection tool")
    parser.add_argument("--artist", help="Pre-select artist")
    parser.add_argument("--album", help="Pre-select album (requires --artist)")
    parser.add_argument("--preselect", type=int, default=0, help="Pre-select song index")
    parser.add_argument("--picker", choices=PICKERS, help="Picker to use (default: rofi)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")
    for name, help_text in COMMANDS.items():
        sub.add_parser(name, help=help_text)
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.album is not None and args.artist is None:
        parser.error("--album requires --artist")
    if args.preselect < 0:
        parser.error("--preselect must not be negative")
    return args


def init_app_state(config: AppConfig, client) -> AppState:
    app_state = AppState(config)
    app_state.client = client
    app_state.picker = make_picker(config.picker)
    app_state.playback = MpcPlayback(MpcConfig(host=config.host, port=config.port))

    notifier = DesktopNotifier(timeout_ms=config.notify_timeout_ms)
    app_state.notification.connect(notifier.show)
    return app_state


def build_selector(app_state: AppState, rng: Optional[random.Random] = None) -> MusicSelector:
    dispatcher = ActionDispatcher(app_state.client, app_state.playback, notify=app_state.notify)
    return MusicSelector(
        app_state.client,
        app_state.picker,
        dispatcher,
        rng=rng,
        quarantine_path=app_state.config.quarantine_path,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = AppConfig.from_env()
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    if args.picker:
        config.picker = args.picker
    if args.verbose:
        config.debug = True

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        with CatalogClient.connect(config) as client:
            app_state = init_app_state(config, client)
            selector = build_selector(app_state)
            selector.run(args.command, artist=args.artist, album=args.album, preselect=args.preselect)
    except (CatalogError, PlaybackError, OSError) as e:
        logger.debug("Aborting", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0
