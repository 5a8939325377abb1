"""
Unit tests for ui/picker.py with subprocess.run patched out.
"""

import subprocess
from types import SimpleNamespace

import pytest

from core.models import PickMode
from ui import picker as picker_mod
from ui.picker import RofiPicker, align_columns, make_picker, parse_index


class FakeRun:
    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def __call__(self, args, **kwargs):
        self.calls.append((args, kwargs))
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def completed(returncode=0, stdout=""):
    return SimpleNamespace(returncode=returncode, stdout=stdout, stderr="")


class TestParseIndex:
    def test_one_based_to_zero_based(self):
        assert parse_index("3\n", 5) == 2

    @pytest.mark.parametrize("raw", ["", "  ", "abc", "0", "6", "-1"])
    def test_unusable(self, raw):
        assert parse_index(raw, 5) is None


class TestRofiPicker:
    def test_accept(self, monkeypatch):
        run = FakeRun(completed(0, "2\n"))
        monkeypatch.setattr(subprocess, "run", run)
        result = RofiPicker().pick(["a", "b"], "Artist:", selected_row=1)
        assert result.index == 1 and result.mode is PickMode.ACCEPT
        args, kwargs = run.calls[0]
        assert args[:6] == ["rofi", "-i", "-dmenu", "-no-custom", "-format", "d"]
        assert args[args.index("-selected-row") + 1] == "1"
        assert args[args.index("-p") + 1] == "Artist:"
        assert kwargs["input"] == "a\nb"

    def test_custom_key_means_queue(self, monkeypatch):
        monkeypatch.setattr(subprocess, "run", FakeRun(completed(10, "1")))
        result = RofiPicker().pick(["a"], "Album:")
        assert result.index == 0 and result.mode is PickMode.ALTERNATE

    def test_escape_cancels(self, monkeypatch):
        monkeypatch.setattr(subprocess, "run", FakeRun(completed(1, "")))
        assert RofiPicker().pick(["a"], "Album:").cancelled

    def test_out_of_range_cancels(self, monkeypatch):
        monkeypatch.setattr(subprocess, "run", FakeRun(completed(0, "9")))
        assert RofiPicker().pick(["a"], "Album:").cancelled

    def test_empty_list_never_launches(self, monkeypatch):
        run = FakeRun()
        monkeypatch.setattr(subprocess, "run", run)
        assert RofiPicker().pick([], "Album:").cancelled
        assert run.calls == []

    def test_columns_piped_through_column(self, monkeypatch):
        run = FakeRun(completed(0, "A           B\n"), completed(0, "1"))
        monkeypatch.setattr(subprocess, "run", run)
        result = RofiPicker().pick(["A\tB"], "Album:", columns=True)
        assert run.calls[0][0][0] == "column"
        assert run.calls[0][1]["input"] == "A\tB"
        assert run.calls[1][1]["input"] == "A           B\n"
        assert result.index == 0


class TestAlignColumns:
    def test_missing_column_binary_falls_back(self, monkeypatch):
        monkeypatch.setattr(subprocess, "run", FakeRun(FileNotFoundError("column")))
        assert align_columns("a\tb") == "a\tb"

    def test_failed_column_falls_back(self, monkeypatch):
        monkeypatch.setattr(subprocess, "run", FakeRun(completed(1, "")))
        assert align_columns("a\tb") == "a\tb"


def test_make_picker_default_is_rofi():
    assert isinstance(make_picker("rofi"), RofiPicker)
    assert picker_mod.ROFI_QUEUE == 10
