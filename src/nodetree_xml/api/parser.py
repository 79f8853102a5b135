"""Core parser API for node-tree documents.

Module-level functions cover the common one-shot cases; :class:`XMLParser`
holds a configuration and the most recent result for repeated use.

Every function either returns a complete :class:`ParseResult` or raises an
:class:`XMLParserError`. There is no partial result.
"""

import logging
import time
from pathlib import Path
from typing import Iterable, List, Optional, Union

from nodetree_xml.api.loader import load_lines, split_source_lines
from nodetree_xml.character.preprocessor import LinePreprocessor
from nodetree_xml.shared import (
    ParserConfig,
    ParseResult,
    XMLParserError,
    get_logger,
)
from nodetree_xml.tree.builder import XMLTreeBuilder
from nodetree_xml.tree.node import Node

MS_PER_SECOND = 1000


class XMLParser:
    """Configured parser that keeps the last document it parsed.

    Examples:
        >>> parser = XMLParser()
        >>> result = parser.parse_lines(['<param frequency="60" depth="3"/>'])
        >>> parser.get_root_node().get_child_of_type("PARAM").get_property("depth").value
        '3'
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize parser.

        Args:
            config: Parser configuration; defaults to ``ParserConfig()``
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "xml_parser")
        self._last_result: Optional[ParseResult] = None

    @property
    def last_result(self) -> Optional[ParseResult]:
        """Get the result of the most recent successful parse."""
        return self._last_result

    def parse_lines(self, lines: Iterable[str]) -> ParseResult:
        """Parse a document given as a sequence of raw lines.

        Args:
            lines: Lines exactly as found in the source, without terminators

        Returns:
            ParseResult holding the tree rooted at the synthetic root node

        Raises:
            XMLParserError: On the first problem found
        """
        start_time = time.time()
        source = list(lines)
        verbose = (
            self.config.global_.verbose
            and self.logger.is_enabled_for(logging.INFO)
        )

        self.logger.info(
            "Starting parse operation",
            extra={"lines_read": len(source)}
        )
        if verbose:
            for line in source:
                self.logger.info(f"source: {line}")

        try:
            preprocessor = LinePreprocessor(self.config.preprocess, self.correlation_id)
            clean = preprocessor.process(source)
            builder = XMLTreeBuilder(self.config.tree, self.correlation_id)
            root = builder.build(clean)
        except XMLParserError as e:
            self.logger.error(
                "Parse operation failed",
                extra={
                    "error_type": type(e).__name__,
                    "literal": e.literal,
                    "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
                }
            )
            raise

        metrics = builder.metrics
        metrics.lines_read = len(source)
        metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND

        result = ParseResult(
            root=root,
            source=source,
            clean=clean,
            metrics=metrics,
            correlation_id=self.correlation_id,
        )
        self._last_result = result

        self.logger.info(
            "Parse operation completed",
            extra={
                "nodes_created": metrics.nodes_created,
                "max_depth": metrics.max_depth,
                "processing_time_ms": metrics.processing_time_ms,
            }
        )
        if verbose:
            for line in self.dump_tree(root):
                self.logger.info(f"tree: {line}")

        return result

    def parse_string(self, xml_string: str) -> ParseResult:
        """Parse a document held in one string."""
        return self.parse_lines(split_source_lines(xml_string))

    def parse_file(
        self,
        file_path: Union[str, Path],
        encoding: Optional[str] = None
    ) -> ParseResult:
        """Read and parse a document file.

        Raises:
            SourceReadError: If the file cannot be read
            XMLParserError: If its contents fail to parse
        """
        lines = load_lines(file_path, encoding or self.config.global_.default_encoding)
        return self.parse_lines(lines)

    def get_root_node(self) -> Node:
        """Get the root of the most recently parsed tree."""
        return self._require_result().root

    def get_source(self) -> List[str]:
        """Get a copy of the unaltered lines of the most recent document."""
        return list(self._require_result().source)

    def dump_tree(self, node: Optional[Node] = None) -> List[str]:
        """Render a tree, one node per line, using the configured indent."""
        if node is None:
            node = self.get_root_node()
        return node.to_tree_lines(
            indent=self.config.tree.dump_indent,
            accumulate=self.config.tree.accumulate_dump_indent,
        )

    def _require_result(self) -> ParseResult:
        if self._last_result is None:
            raise XMLParserError("No document has been parsed yet.")
        return self._last_result


def parse_lines(
    lines: Iterable[str],
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse a document given as a sequence of raw lines.

    Examples:
        >>> result = parse_lines(['<Config depth="3">', '</Config>'])
        >>> result.root.get_child_of_type("config").get_property_value("DEPTH")
        '3'
    """
    return XMLParser(config, correlation_id).parse_lines(lines)


def parse_string(
    xml_string: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse a document held in one string."""
    return XMLParser(config, correlation_id).parse_string(xml_string)


def parse_file(
    file_path: Union[str, Path],
    encoding: Optional[str] = None,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Read and parse a document file.

    Examples:
        >>> parse_file("missing.xml")
        Traceback (most recent call last):
        ...
        nodetree_xml.shared.errors.SourceReadError: Failed to load the specified file: missing.xml
    """
    return XMLParser(config, correlation_id).parse_file(file_path, encoding)
