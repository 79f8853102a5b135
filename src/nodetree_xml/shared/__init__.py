"""Shared utilities for node-tree parsing.

This module provides configuration objects, the error taxonomy, result types
and logging helpers used across all processing layers.
"""

from .config import (
    ROOT_TYPE,
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    ParserConfig,
    PreprocessConfig,
    TreeConfig,
)
from .errors import (
    PropertySyntaxError,
    SourceReadError,
    StructuralError,
    TagMismatchError,
    UnterminatedError,
    XMLParserError,
)
from .logging import (
    ComponentFilter,
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    ParseMetrics,
    ParseResult,
)

__all__ = [
    "ROOT_TYPE",
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "ParserConfig",
    "PreprocessConfig",
    "TreeConfig",
    "PropertySyntaxError",
    "SourceReadError",
    "StructuralError",
    "TagMismatchError",
    "UnterminatedError",
    "XMLParserError",
    "ComponentFilter",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "ParseMetrics",
    "ParseResult",
]
