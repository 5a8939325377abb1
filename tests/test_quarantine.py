"""
Unit tests for library/quarantine.py
"""

from core.models import AlbumIdentity
from library.quarantine import load_quarantine_albums, parse_quarantine_lines


class TestParseQuarantineLines:
    def test_quoted_pair(self):
        assert list(parse_quarantine_lines(['"A","B"'])) == [AlbumIdentity("A", "B")]

    def test_space_after_comma_rejected(self):
        assert list(parse_quarantine_lines(['"A", "B"'])) == []

    def test_surrounding_whitespace_stripped(self):
        assert list(parse_quarantine_lines(['   "A","B"  \n'])) == [AlbumIdentity("A", "B")]

    def test_blank_and_garbage_lines_skipped(self):
        lines = ["", "   ", "not a pair", '"only one"', '"A","B"', '"x","y","z"', '"C","D"']
        assert list(parse_quarantine_lines(lines)) == [AlbumIdentity("A", "B"), AlbumIdentity("C", "D")]

    def test_empty_fields_allowed(self):
        assert list(parse_quarantine_lines(['"",""'])) == [AlbumIdentity("", "")]


class TestLoadQuarantineAlbums:
    def test_missing_file_is_empty(self, tmp_path, capsys):
        path = tmp_path / "quarantine"
        assert load_quarantine_albums(str(path)) == []
        assert f"Quarantine file not found: {path}" in capsys.readouterr().out

    def test_reads_file_in_order(self, tmp_path):
        path = tmp_path / "quarantine"
        path.write_text('"Zed","Last"\n\n"Abe","First"\n', encoding="utf-8")
        assert load_quarantine_albums(str(path)) == [AlbumIdentity("Zed", "Last"), AlbumIdentity("Abe", "First")]

    def test_unicode_content(self, tmp_path):
        path = tmp_path / "quarantine"
        path.write_text('"Sigur Rós","( )"\n', encoding="utf-8")
        assert load_quarantine_albums(str(path)) == [AlbumIdentity("Sigur Rós", "( )")]
