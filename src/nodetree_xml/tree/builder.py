"""Tree assembly from preprocessed logical lines.

The builder walks the logical lines once, front to back, with a single
cursor. For each line it finds the first tag, files the text before it as
loose inner text of the element currently open, builds the tag, and pushes
whatever follows the ``>`` back to the front of the line buffer so further
tags on the same line are handled as if freshly read.

Open elements are kept on an explicit stack rather than the call stack, so
nesting depth is bounded only by :attr:`TreeConfig.max_depth`.
"""

import time
from collections import deque
from typing import Deque, Iterable, List, Optional

from nodetree_xml.character.scanner import (
    CLOSE_CARET,
    NOT_FOUND,
    OPEN_CARET,
    find_unquoted,
)
from nodetree_xml.shared.config import TreeConfig
from nodetree_xml.shared.errors import (
    StructuralError,
    TagMismatchError,
    UnterminatedError,
)
from nodetree_xml.shared.logging import get_logger
from nodetree_xml.shared.result import ParseMetrics
from nodetree_xml.tokenization.tag_builder import build_node
from nodetree_xml.tree.node import Node


class XMLTreeBuilder:
    """Builds a node tree under a synthetic root from logical lines."""

    def __init__(
        self,
        config: Optional[TreeConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize tree builder.

        Args:
            config: Tree assembly configuration
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or TreeConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "xml_tree_builder")
        self.metrics = ParseMetrics()

        self._pending: Deque[str] = deque()
        self._open: List[Node] = []

    def build(self, lines: Iterable[str]) -> Node:
        """Build a tree from preprocessed logical lines.

        Args:
            lines: Logical lines produced by the preprocessor

        Returns:
            The root node, whose type is the configured root type

        Raises:
            StructuralError: On a missing closing caret, an empty tag, a
                misplaced caret, or nesting deeper than ``max_depth``
            TagMismatchError: On a closing tag for an element that is not
                the innermost open one
            PropertySyntaxError: On a malformed attribute
            UnterminatedError: If elements are still open at end of input
                and ``strict_unterminated`` is set
        """
        start_time = time.time()
        self._reset_state(lines)
        root = Node.create_root(self.config.root_type)
        self._open.append(root)

        self.logger.debug(
            "Starting tree building",
            extra={"logical_lines": self.metrics.logical_lines}
        )

        while self._pending:
            self._process_line(self._pending.popleft())

        if len(self._open) > 1:
            self._handle_unterminated()

        self.metrics.processing_time_ms = (time.time() - start_time) * 1000
        self.logger.debug(
            "Tree building completed",
            extra={
                "nodes_created": self.metrics.nodes_created,
                "properties_created": self.metrics.properties_created,
                "max_depth": self.metrics.max_depth,
            }
        )
        return root

    def _reset_state(self, lines: Iterable[str]) -> None:
        self._pending = deque(lines)
        self._open = []
        self.metrics = ParseMetrics(logical_lines=len(self._pending))

    def _process_line(self, line: str) -> None:
        parent = self._open[-1]

        open_pos = find_unquoted(line, OPEN_CARET, check_carets=True)
        if open_pos == NOT_FOUND:
            parent.append_loose_inner(line)
            return

        close_pos = find_unquoted(line, CLOSE_CARET, check_carets=True)
        if close_pos == NOT_FOUND:
            raise StructuralError(
                f'XML Parse Error: Could not find closing caret within "{line}".',
                literal=line,
            )

        result = build_node(line[open_pos + 1:close_pos], parent)
        parent.append_loose_inner(line[:open_pos])
        self._pending.appendleft(line[close_pos + 1:])

        node = result.node
        if node.is_closing:
            self._close(node, parent, line)
            return

        depth = len(self._open)
        if depth > self.config.max_depth:
            raise StructuralError(
                f"XML Parse Error: Nesting deeper than {self.config.max_depth} "
                f'levels at "{node.type}" in "{line}".',
                literal=line,
            )

        parent.add_child(node)
        self.metrics.nodes_created += 1
        self.metrics.properties_created += len(node.properties)
        self.metrics.max_depth = max(self.metrics.max_depth, depth)

        if not result.self_closing:
            self._open.append(node)

    def _close(self, closing: Node, parent: Node, line: str) -> None:
        if parent.is_root or not closing.is_type("/" + parent.type):
            raise TagMismatchError(
                f'XML Parse Error: Bad closing tag "{closing.type}" in "{line}".',
                literal=line,
                tag=closing.type,
                expected=None if parent.is_root else "/" + parent.type,
            )
        self._open.pop()

    def _handle_unterminated(self) -> None:
        innermost = self._open[-1]
        unclosed = [node.type for node in self._open[1:]]
        if self.config.strict_unterminated:
            raise UnterminatedError(
                f'XML Parse Error: Element "{innermost.type}" is never closed.',
                literal=innermost.opening_tag(),
            )
        self.logger.warning(
            "Elements left open at end of input",
            extra={"unclosed": unclosed}
        )
