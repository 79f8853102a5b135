"""Node-tree XML parser.

A small, strict parser for XML-style configuration files. It reads a document
line by line, strips hash and block comments, rejoins tags and quoted values
that were split across lines, and builds a tree of nodes with properties and
loose inner text under a synthetic ``~ROOT`` node.

API levels:
- Level 1: Simple functions - parse_lines(), parse_string(), parse_file()
- Level 2: Configured parser - XMLParser class with ParserConfig
"""

__version__ = "0.1.0"
__author__ = "Nodetree XML Parser Team"

from .api import XMLParser, parse_file, parse_lines, parse_string
from .shared.config import ParserConfig, PreprocessConfig, TreeConfig
from .shared.errors import (
    PropertySyntaxError,
    SourceReadError,
    StructuralError,
    TagMismatchError,
    UnterminatedError,
    XMLParserError,
)
from .shared.result import ParseResult
from .tree.builder import XMLTreeBuilder
from .tree.node import Node, Property

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse_lines",
    "parse_string",
    "parse_file",

    # Level 2: Configured parser
    "XMLParser",
    "XMLTreeBuilder",

    # Result objects and data structures
    "ParseResult",
    "Node",
    "Property",

    # Configuration
    "ParserConfig",
    "PreprocessConfig",
    "TreeConfig",

    # Errors
    "XMLParserError",
    "StructuralError",
    "TagMismatchError",
    "PropertySyntaxError",
    "UnterminatedError",
    "SourceReadError",
]
