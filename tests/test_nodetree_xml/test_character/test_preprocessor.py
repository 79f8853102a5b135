"""Tests for line cleanup and logical-line merging."""

import pytest

from nodetree_xml.character.preprocessor import (
    LinePreprocessor,
    LineState,
    clean_lines,
    merge_lines,
    preprocess,
    scan_line_state,
    strip_block_comments,
)
from nodetree_xml.shared.config import PreprocessConfig
from nodetree_xml.shared.errors import StructuralError, UnterminatedError


class TestStripBlockComments:
    """Test removal of block comments from a single line."""

    def test_comment_within_line(self) -> None:
        """Test a comment that opens and closes on one line."""
        assert strip_block_comments("a<!-- x -->b", False) == ("ab", False)

    def test_comment_opens(self) -> None:
        """Test a comment that runs past the end of the line."""
        assert strip_block_comments("a <!-- start", False) == ("a ", True)

    def test_comment_closes(self) -> None:
        """Test a line that starts inside a comment."""
        assert strip_block_comments("end --> b", True) == (" b", False)

    def test_line_entirely_inside_comment(self) -> None:
        """Test a line with no comment delimiters inside a comment."""
        assert strip_block_comments("still inside", True) == ("", True)

    def test_several_comments(self) -> None:
        """Test multiple comments on one line."""
        assert strip_block_comments("<!--a--><!--b-->c", False) == ("c", False)

    def test_custom_markers(self) -> None:
        """Test configurable comment delimiters."""
        assert strip_block_comments("a{{x}}b", False, "{{", "}}") == ("ab", False)


class TestCleanLines:
    """Test the per-line cleanup pass."""

    def test_one_output_per_input(self) -> None:
        """Test that comments and blanks become empty strings."""
        lines = ["  <A>", "\t\t", "# comment", "<!-- start", "end -->", "x"]

        assert clean_lines(lines) == ["<A>", "", "", "", "", "x"]

    def test_indented_hash_comment(self) -> None:
        """Test that a hash comment after indentation is removed."""
        assert clean_lines(["    # note"]) == [""]

    def test_hash_comments_can_be_disabled(self) -> None:
        """Test the strip_hash_comments switch."""
        config = PreprocessConfig(strip_hash_comments=False)

        assert clean_lines(["# kept"], config) == ["# kept"]

    def test_custom_hash_prefix(self) -> None:
        """Test a different comment prefix."""
        config = PreprocessConfig(hash_comment_prefix=";")

        assert clean_lines(["; gone", "# kept"], config) == ["", "# kept"]

    def test_restrips_after_comment_removal(self) -> None:
        """Test that text after a comment loses its leading blanks."""
        assert clean_lines(["<!-- c -->   <A>"]) == ["<A>"]

    def test_block_comments_can_be_disabled(self) -> None:
        """Test the strip_block_comments switch."""
        config = PreprocessConfig(strip_block_comments=False)

        assert clean_lines(["<!-- c -->"], config) == ["<!-- c -->"]

    def test_trailing_whitespace_kept(self) -> None:
        """Test that only leading blanks are stripped."""
        assert clean_lines(["  text  "]) == ["text  "]


class TestLineState:
    """Test end-of-line state scanning."""

    def test_closed_line(self) -> None:
        """Test a line with everything balanced."""
        state = scan_line_state('<A b="1">text')

        assert state == LineState()
        assert not state.is_open
        assert state.describe() == "nothing"

    def test_open_double_quote(self) -> None:
        """Test a line ending inside a double-quoted value."""
        state = scan_line_state('<A b="x')

        assert state.in_double_quote and state.in_tag
        assert state.describe() == "double-quoted value"

    def test_open_single_quote(self) -> None:
        """Test a line ending inside a single-quoted value."""
        assert scan_line_state("<A b='x").describe() == "single-quoted value"

    def test_open_tag(self) -> None:
        """Test a line ending inside a tag."""
        assert scan_line_state("<A").describe() == "tag"

    def test_escaped_quotes(self) -> None:
        """Test that escaped quotes do not change state."""
        assert not scan_line_state('<A b="say \\"hi\\"">').is_open

    @pytest.mark.parametrize("line", ["<A <B>", "a > b"])
    def test_misplaced_caret(self, line: str) -> None:
        """Test that structural caret errors are raised."""
        with pytest.raises(StructuralError):
            scan_line_state(line)


class TestMergeLines:
    """Test the logical-line merging pass."""

    def test_open_tag_is_joined(self) -> None:
        """Test joining a tag split across lines."""
        assert merge_lines(["<A", 'b="1">', "text"]) == ['<A b="1">', "text"]

    def test_open_quote_is_joined(self) -> None:
        """Test joining a value split across lines."""
        assert merge_lines(['<A b="multi', 'line">']) == ['<A b="multi line">']

    def test_joins_across_blank_lines(self) -> None:
        """Test that blank lines in the middle of a tag are absorbed."""
        assert merge_lines(["<A", "", "/>"]) == ["<A  />"]

    def test_custom_separator(self) -> None:
        """Test the join separator."""
        assert merge_lines(["<A", "/>"], separator="") == ["<A/>"]

    def test_unterminated_quote_at_end(self) -> None:
        """Test an open quote at end of input."""
        with pytest.raises(UnterminatedError, match="double-quoted value"):
            merge_lines(['<A b="c>'])

    def test_unterminated_tag_at_end(self) -> None:
        """Test an open tag at end of input."""
        with pytest.raises(UnterminatedError, match="Unterminated tag"):
            merge_lines(["<A", "b='1'"])


class TestLinePreprocessor:
    """Test the combined preprocessing entry points."""

    def test_process(self) -> None:
        """Test both passes in sequence."""
        lines = ["# header", "<Entry", "  path='/tmp'", "/>", "<!-- x -->"]

        assert LinePreprocessor().process(lines) == [
            "",
            "<Entry path='/tmp' />",
            "",
        ]

    def test_preprocess_function(self) -> None:
        """Test the module-level helper."""
        assert preprocess(["  <A>", "</A>"]) == ["<A>", "</A>"]

    def test_uses_join_separator(self) -> None:
        """Test that the configured separator is used."""
        processor = LinePreprocessor(PreprocessConfig(join_separator=""))

        assert processor.process(["<A", "/>"]) == ["<A/>"]
