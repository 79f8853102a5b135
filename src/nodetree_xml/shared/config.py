"""Configuration classes for node-tree parsing.

This module provides configuration objects for the preprocessing, tree
assembly and global layers of the parser.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

ROOT_TYPE = "~ROOT"

_SECTIONS = ["preprocess", "tree", "global_"]


@dataclass
class PreprocessConfig:
    """Configuration for line cleanup and logical-line merging."""

    strip_hash_comments: bool = True
    hash_comment_prefix: str = "#"
    strip_block_comments: bool = True
    block_comment_open: str = "<!--"
    block_comment_close: str = "-->"
    join_separator: str = " "

    def __post_init__(self) -> None:
        """Validate preprocess configuration."""
        if len(self.hash_comment_prefix) != 1:
            raise ValueError("hash_comment_prefix must be a single character")
        if self.hash_comment_prefix in "<>\"' \t":
            raise ValueError("hash_comment_prefix cannot be a caret, quote or blank")
        if not self.block_comment_open or not self.block_comment_close:
            raise ValueError("block comment delimiters cannot be empty")


@dataclass
class TreeConfig:
    """Configuration for tree assembly and tree rendering."""

    root_type: str = ROOT_TYPE
    max_depth: int = 1000
    strict_unterminated: bool = True
    accumulate_dump_indent: bool = True
    dump_indent: str = "    "

    def __post_init__(self) -> None:
        """Validate tree configuration."""
        if not self.root_type:
            raise ValueError("root_type cannot be empty")
        if self.root_type.startswith("/"):
            raise ValueError("root_type cannot start with '/'")
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")


@dataclass
class GlobalConfig:
    """Global configuration settings that apply across all components."""

    logging_level: str = "WARNING"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    default_encoding: str = "utf-8"
    verbose: bool = False

    def __post_init__(self) -> None:
        """Validate global configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.logging_level not in valid_levels:
            raise ValueError(f"logging_level must be one of {valid_levels}")
        if not self.default_encoding:
            raise ValueError("default_encoding cannot be empty")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Complete configuration for all parser components.

    Immutable once built. Use :meth:`override` to derive a modified copy.
    """

    preprocess: PreprocessConfig = field(default_factory=PreprocessConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete parser configuration."""
        try:
            self.preprocess.__post_init__()
            self.tree.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        if self.tree.dump_indent.strip():
            raise ConfigValidationError(
                "tree.dump_indent must contain only whitespace",
                field_name="tree.dump_indent",
                suggestions=["Use spaces or tabs for dump_indent"],
            )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Keyword arguments for configuration fields to override

        Returns:
            New ParserConfig instance with overrides applied

        Example:
            >>> config = ParserConfig()
            >>> new_config = config.override(
            ...     tree__max_depth=50,
            ...     tree__strict_unterminated=False
            ... )
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            # "global_" itself ends in an underscore, so match known prefixes
            # instead of splitting on the first "__".
            component = next(
                (s for s in _SECTIONS if key.startswith(s + "__")), None
            )
            if component is not None:
                field_name = key[len(component) + 2:]
                nested_overrides.setdefault(component, {})[field_name] = value
            elif "__" in key:
                raise ConfigValidationError(
                    f"Unknown configuration section in: {key}",
                    field_name=key,
                    suggestions=_SECTIONS,
                )
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for key, value in nested_overrides.items():
            if key in _SECTIONS and isinstance(value, dict):
                try:
                    new_fields[key] = replace(getattr(self, key), **value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            else:
                new_fields[key] = value

        try:
            return replace(self, **new_fields)
        except TypeError as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected rather than silently ignored.
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration must be a JSON object")
        section_types = {
            "preprocess": PreprocessConfig,
            "tree": TreeConfig,
            "global_": GlobalConfig,
        }
        field_values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in section_types:
                try:
                    field_values[key] = section_types[key](**value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            elif key in ("name", "description"):
                field_values[key] = value
            else:
                raise ConfigValidationError(
                    f"Unknown configuration key: {key}", field_name=key
                )
        return cls(**field_values)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Create preset that rejects unterminated elements (the default)."""
        return cls(
            tree=TreeConfig(strict_unterminated=True),
            name="strict",
            description="Fail on elements left open at end of input",
        )

    @classmethod
    def lenient(cls) -> "ParserConfig":
        """Create preset that tolerates elements left open at end of input."""
        return cls(
            tree=TreeConfig(strict_unterminated=False),
            name="lenient",
            description="Leave elements open at end of input as built",
        )
