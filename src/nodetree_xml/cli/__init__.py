"""Command-line interface module for the nodetree-xml parser.

This module provides CLI tools to dump, validate and query parsed documents.
"""

from .main import main

__all__ = ["main"]
