"""Document tree for node-tree parsing.

Key Components:
    Node: A tagged element with properties, children and loose inner text
    Property: One immutable name/value attribute

The tree assembler lives in :mod:`nodetree_xml.tree.builder`.
"""

from .node import (
    Node,
    Property,
    escape_value,
)

__all__ = [
    "Node",
    "Property",
    "escape_value",
]
