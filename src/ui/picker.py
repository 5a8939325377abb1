# ui/picker.py
from __future__ import annotations

import logging
import subprocess
from typing import Protocol, Sequence

from core.models import PickMode, SelectionResult

logger = logging.getLogger(__name__)

ROFI_CANCEL = 1
ROFI_QUEUE = 10      # -kb-custom-1
COLUMN_GAP = " " * 11


class Picker(Protocol):
    def pick(
        self,
        items: Sequence[str],
        prompt: str,
        selected_row: int = 0,
        columns: bool = False,
    ) -> SelectionResult: ...


def align_columns(text: str) -> str:
    """
    Align tab separated fields with column(1).
    Falls back to the raw text if column is missing or fails.
    """
    try:
        proc = subprocess.run(
            ["column", "-o", COLUMN_GAP, "-s", "\t", "-t"],
            input=text,
            capture_output=True,
            text=True,
        )
    except OSError:
        logger.debug("column not available, showing unaligned rows")
        return text
    if proc.returncode != 0:
        return text
    return proc.stdout


def parse_index(stdout: str, count: int) -> int | None:
    """1-based index printed by rofi -> 0-based index, None if unusable."""
    s = stdout.strip()
    if not s:
        return None
    try:
        index = int(s)
    except ValueError:
        return None
    if 0 < index <= count:
        return index - 1
    return None


class RofiPicker:
    """
    Runs rofi in dmenu mode with index output.
    Enter accepts, Ctrl+Return signals the queue intent, Escape cancels.
    """

    def __init__(self, rofi_path: str = "rofi"):
        self.rofi_path = rofi_path

    def build_args(self, prompt: str, selected_row: int) -> list[str]:
        return [
            self.rofi_path,
            "-i", "-dmenu", "-no-custom", "-format", "d",
            "-kb-custom-1", "Ctrl+Return",
            "-p", prompt,
            "-selected-row", str(selected_row),
        ]

    def pick(self, items: Sequence[str], prompt: str, selected_row: int = 0, columns: bool = False) -> SelectionResult:
        if not items:
            return SelectionResult.cancel()

        text = "\n".join(items)
        if columns:
            text = align_columns(text)

        args = self.build_args(prompt, selected_row)
        logger.debug("Running %s with %d rows", args, len(items))
        # input= writes and closes stdin before stdout is collected
        proc = subprocess.run(args, input=text, capture_output=True, text=True)

        if proc.returncode == ROFI_CANCEL:
            return SelectionResult.cancel()

        index = parse_index(proc.stdout, len(items))
        if index is None:
            return SelectionResult.cancel()

        mode = PickMode.ALTERNATE if proc.returncode == ROFI_QUEUE else PickMode.ACCEPT
        return SelectionResult(index=index, mode=mode)


def make_picker(name: str) -> Picker:
    if name == "qt":
        from ui.picker_dialog import QtPicker  # Qt widgets only when asked for
        return QtPicker()
    return RofiPicker()
