"""Line preprocessing for node-tree parsing.

Raw source lines are normalized in two passes before any tree is built:

1. Per-line cleanup. Leading tabs and spaces are stripped, hash-comment lines
   are blanked, and ``<!-- ... -->`` block comments are removed. A block
   comment may span any number of lines; the "inside a comment" flag carries
   from one line to the next.
2. Logical-line merging. A line that ends inside a double-quoted value, a
   single-quoted value or an open tag is joined to the following line with a
   single space, repeatedly, until all three are closed again.

Line structure is not preserved, which is why parse errors never report a
line number.
"""

import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from nodetree_xml.character.scanner import (
    CLOSE_CARET,
    DOUBLE_QUOTE,
    OPEN_CARET,
    SINGLE_QUOTE,
    is_escaped,
)
from nodetree_xml.shared.config import PreprocessConfig
from nodetree_xml.shared.errors import StructuralError, UnterminatedError
from nodetree_xml.shared.logging import get_logger

LEADING_BLANKS = " \t"


@dataclass
class LineState:
    """Open/closed state at the end of one logical line."""

    in_double_quote: bool = False
    in_single_quote: bool = False
    in_tag: bool = False

    @property
    def is_open(self) -> bool:
        """Check whether anything is left open at end of line."""
        return self.in_double_quote or self.in_single_quote or self.in_tag

    def describe(self) -> str:
        """Name the construct left open, innermost first."""
        if self.in_double_quote:
            return "double-quoted value"
        if self.in_single_quote:
            return "single-quoted value"
        if self.in_tag:
            return "tag"
        return "nothing"


def strip_block_comments(
    line: str,
    in_comment: bool,
    open_marker: str = "<!--",
    close_marker: str = "-->"
) -> Tuple[str, bool]:
    """Remove block-comment content from one line.

    Args:
        line: Line to strip
        in_comment: Whether the line starts inside a block comment
        open_marker: Block comment opener
        close_marker: Block comment closer

    Returns:
        The stripped text and whether the line ends inside a block comment
    """
    kept = []
    pos = 0
    while True:
        if in_comment:
            end = line.find(close_marker, pos)
            if end == -1:
                return "".join(kept), True
            pos = end + len(close_marker)
            in_comment = False
        else:
            begin = line.find(open_marker, pos)
            if begin == -1:
                kept.append(line[pos:])
                return "".join(kept), False
            kept.append(line[pos:begin])
            pos = begin + len(open_marker)
            in_comment = True


def scan_line_state(line: str) -> LineState:
    """Scan a logical line and report what is left open at its end.

    Raises:
        StructuralError: On ``<`` inside an open tag or ``>`` outside one
    """
    state = LineState()
    for pos, char in enumerate(line):
        if char == DOUBLE_QUOTE:
            if not state.in_single_quote and not is_escaped(line, pos):
                state.in_double_quote = not state.in_double_quote
        elif char == SINGLE_QUOTE:
            if not state.in_double_quote and not is_escaped(line, pos):
                state.in_single_quote = not state.in_single_quote
        elif state.in_double_quote or state.in_single_quote:
            continue
        elif char == OPEN_CARET:
            if state.in_tag:
                raise StructuralError(
                    f'XML Parse Error: Misplaced opening caret within "{line}".',
                    literal=line,
                )
            state.in_tag = True
        elif char == CLOSE_CARET:
            if not state.in_tag:
                raise StructuralError(
                    f'XML Parse Error: Misplaced closing caret within "{line}".',
                    literal=line,
                )
            state.in_tag = False
    return state


def clean_lines(
    lines: Iterable[str],
    config: Optional[PreprocessConfig] = None
) -> List[str]:
    """Run the per-line cleanup pass.

    The output has exactly one entry per input line; comment and blank lines
    become empty strings.
    """
    config = config or PreprocessConfig()
    cleaned = []
    in_comment = False

    for raw in lines:
        line = raw.lstrip(LEADING_BLANKS)
        if not line:
            cleaned.append("")
            continue

        if config.strip_hash_comments and line[0] == config.hash_comment_prefix:
            cleaned.append("")
            continue

        if config.strip_block_comments:
            line, in_comment = strip_block_comments(
                line,
                in_comment,
                config.block_comment_open,
                config.block_comment_close,
            )

        cleaned.append(line.lstrip(LEADING_BLANKS))

    return cleaned


def merge_lines(lines: List[str], separator: str = " ") -> List[str]:
    """Run the logical-line merging pass.

    Raises:
        StructuralError: On a misplaced caret
        UnterminatedError: When a quote or tag is still open at end of input
    """
    merged = []
    index = 0
    total = len(lines)

    while index < total:
        current = lines[index]
        index += 1
        state = scan_line_state(current)
        while state.is_open:
            if index >= total:
                raise UnterminatedError(
                    f"XML Parse Error: Unterminated {state.describe()} "
                    f'at end of document in "{current}".',
                    literal=current,
                )
            current = current + separator + lines[index]
            index += 1
            state = scan_line_state(current)
        merged.append(current)

    return merged


class LinePreprocessor:
    """Runs both preprocessing passes with logging."""

    def __init__(
        self,
        config: Optional[PreprocessConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or PreprocessConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "line_preprocessor")

    def process(self, lines: Iterable[str]) -> List[str]:
        """Clean and merge raw source lines.

        Args:
            lines: Raw lines exactly as read from the source

        Returns:
            Logical lines ready for tree assembly
        """
        start_time = time.time()
        source = list(lines)
        cleaned = clean_lines(source, self.config)
        merged = merge_lines(cleaned, self.config.join_separator)

        self.logger.debug(
            "Preprocessing completed",
            extra={
                "lines_read": len(source),
                "logical_lines": len(merged),
                "processing_time_ms": (time.time() - start_time) * 1000,
            }
        )
        return merged


def preprocess(
    lines: Iterable[str],
    config: Optional[PreprocessConfig] = None
) -> List[str]:
    """Clean and merge raw source lines with default logging."""
    return LinePreprocessor(config).process(lines)
