"""Tag tokenization for node-tree parsing.

Turns the text between one pair of carets into a Node with its properties.
"""

from .tag_builder import (
    TagResult,
    build_node,
    build_property,
    tokenize_tag,
    unescape,
)

__all__ = [
    "TagResult",
    "build_node",
    "build_property",
    "tokenize_tag",
    "unescape",
]
