"""Result and metrics objects for node-tree parsing."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from nodetree_xml.tree.node import Node


@dataclass
class ParseMetrics:
    """Counters collected while parsing one document."""

    processing_time_ms: float = 0.0
    lines_read: int = 0
    logical_lines: int = 0
    nodes_created: int = 0
    properties_created: int = 0
    max_depth: int = 0

    @property
    def lines_merged(self) -> int:
        """Number of physical lines folded into a preceding line."""
        return max(0, self.lines_read - self.logical_lines)

    @property
    def lines_per_second(self) -> float:
        """Calculate source lines processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.lines_read * 1000.0) / self.processing_time_ms


@dataclass
class ParseResult:
    """A completed parse: the tree plus the text it was built from.

    Only successful parses produce a result; failures raise
    :class:`~nodetree_xml.shared.errors.XMLParserError` instead.
    """

    root: "Node"
    source: List[str] = field(default_factory=list)
    clean: List[str] = field(default_factory=list)
    metrics: ParseMetrics = field(default_factory=ParseMetrics)
    correlation_id: Optional[str] = None

    @property
    def tree(self) -> "Node":
        """Alias for :attr:`root`."""
        return self.root

    def summary(self) -> Dict[str, Any]:
        """Get summary statistics for the parse."""
        return {
            "root_children": len(self.root.get_children()),
            "nodes_created": self.metrics.nodes_created,
            "properties_created": self.metrics.properties_created,
            "max_depth": self.metrics.max_depth,
            "lines_read": self.metrics.lines_read,
            "logical_lines": self.metrics.logical_lines,
            "lines_merged": self.metrics.lines_merged,
            "processing_time_ms": self.metrics.processing_time_ms,
            "correlation_id": self.correlation_id,
        }
