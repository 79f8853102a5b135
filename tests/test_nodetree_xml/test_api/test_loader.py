"""Tests for source line loading."""

from pathlib import Path

import pytest

from nodetree_xml.api.loader import load_lines, split_source_lines
from nodetree_xml.shared.errors import SourceReadError


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", []),
        ("a", ["a"]),
        ("a\n", ["a"]),
        ("a\n\n", ["a", ""]),
        ("a\r\nb\rc\n", ["a", "b", "c"]),
        ("\n", [""]),
        ("\ufeff<A/>\n", ["<A/>"]),
        ("\ufeff", []),
    ],
)
def test_split_source_lines(text: str, expected: list) -> None:
    """Test splitting on every kind of line terminator."""
    assert split_source_lines(text) == expected


class TestLoadLines:
    """Test reading source files."""

    def test_reads_lines(self, tmp_path: Path) -> None:
        """Test reading a small file."""
        path = tmp_path / "doc.cfg"
        path.write_text("<A>\n  text\n</A>\n", encoding="utf-8")

        assert load_lines(path) == ["<A>", "  text", "</A>"]

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        """Test that str paths work as well as Path objects."""
        path = tmp_path / "doc.cfg"
        path.write_text("<A/>", encoding="utf-8")

        assert load_lines(str(path)) == ["<A/>"]

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a file that does not exist."""
        with pytest.raises(SourceReadError, match="Failed to load the specified file"):
            load_lines(tmp_path / "nope.cfg")

    def test_directory(self, tmp_path: Path) -> None:
        """Test a path that is not a regular file."""
        with pytest.raises(SourceReadError) as exc_info:
            load_lines(tmp_path)

        assert isinstance(exc_info.value.cause, OSError)

    def test_undecodable_file(self, tmp_path: Path) -> None:
        """Test bytes that are invalid in the requested encoding."""
        path = tmp_path / "bad.cfg"
        path.write_bytes(b"<A name='\xff\xfe'/>")

        with pytest.raises(SourceReadError) as exc_info:
            load_lines(path, encoding="utf-8")

        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    def test_unknown_encoding(self, tmp_path: Path) -> None:
        """Test an encoding name Python does not know."""
        path = tmp_path / "doc.cfg"
        path.write_text("<A/>", encoding="utf-8")

        with pytest.raises(SourceReadError) as exc_info:
            load_lines(path, encoding="no-such-codec")

        assert isinstance(exc_info.value.cause, LookupError)

    def test_utf8_byte_order_mark(self, tmp_path: Path) -> None:
        """Test that a BOM does not stick to the first line."""
        path = tmp_path / "bom.cfg"
        path.write_bytes("# don't edit by hand\n<param depth='3'/>\n".encode("utf-8-sig"))

        assert load_lines(path) == ["# don't edit by hand", "<param depth='3'/>"]
