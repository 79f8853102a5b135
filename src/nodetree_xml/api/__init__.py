"""Public parsing API for node-tree documents."""

from .adapters import LxmlAdapter
from .loader import load_lines, split_source_lines
from .parser import XMLParser, parse_file, parse_lines, parse_string

__all__ = [
    "LxmlAdapter",
    "XMLParser",
    "load_lines",
    "parse_file",
    "parse_lines",
    "parse_string",
    "split_source_lines",
]
