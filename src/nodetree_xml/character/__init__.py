"""Character-level processing for node-tree parsing.

Quote-sensitive search primitives and the two-pass line preprocessor that
prepares raw source lines for tree assembly.
"""

from .preprocessor import (
    LinePreprocessor,
    LineState,
    clean_lines,
    merge_lines,
    preprocess,
    scan_line_state,
    strip_block_comments,
)
from .scanner import (
    NOT_FOUND,
    WHITESPACE,
    find_unquoted,
    find_unquoted_any,
    is_escaped,
    next_non_space,
    next_space,
    split_unquoted,
)

__all__ = [
    "LinePreprocessor",
    "LineState",
    "clean_lines",
    "merge_lines",
    "preprocess",
    "scan_line_state",
    "strip_block_comments",
    "NOT_FOUND",
    "WHITESPACE",
    "find_unquoted",
    "find_unquoted_any",
    "is_escaped",
    "next_non_space",
    "next_space",
    "split_unquoted",
]
