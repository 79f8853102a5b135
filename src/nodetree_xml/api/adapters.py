"""Integration adapter for handing parsed trees to lxml.

lxml is an optional dependency (``pip install nodetree-xml[lxml]``) and is
imported only when a conversion is requested.
"""

from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from nodetree_xml.shared import get_logger
from nodetree_xml.tree.node import Node

if TYPE_CHECKING:
    import lxml.etree


class LxmlAdapter:
    """Converts a node tree to ``lxml.etree`` elements.

    Properties become attributes in document order; on duplicate names the
    last one wins. A node's loose inner text becomes the element's ``text``:
    because loose text is accumulated per node, its position relative to the
    children is not kept. The synthetic root is renamed ``root_tag``.
    """

    def __init__(
        self,
        root_tag: str = "document",
        correlation_id: Optional[str] = None
    ) -> None:
        self.root_tag = root_tag
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, "lxml_adapter")

    def is_available(self) -> bool:
        """Check if lxml is available."""
        try:
            import lxml.etree  # noqa: F401
            return True
        except ImportError:
            return False

    def to_element(self, node: Node) -> "lxml.etree._Element":
        """Convert a subtree into an lxml element tree.

        Raises:
            ImportError: If lxml is not installed
            ValueError: If a node type or property name is not a valid XML name
        """
        from lxml import etree

        converted = self._make_element(etree, node, None)
        stack: List[Tuple[Node, Any]] = [(node, converted)]
        while stack:
            source, target = stack.pop()
            for child in source.children:
                stack.append((child, self._make_element(etree, child, target)))

        self._logger.debug(
            "Converted tree to lxml",
            extra={"element_count": sum(1 for _ in node.iter_nodes())}
        )
        return converted

    def to_string(self, node: Node, pretty_print: bool = True) -> str:
        """Serialize a subtree through lxml."""
        from lxml import etree

        return etree.tostring(
            self.to_element(node), encoding="unicode", pretty_print=pretty_print
        )

    def _make_element(self, etree: Any, node: Node, parent: Any) -> Any:
        tag = self.root_tag if node.is_root else node.type
        if parent is None:
            element = etree.Element(tag)
        else:
            element = etree.SubElement(parent, tag)
        for prop in node.properties:
            element.set(prop.name, prop.value)
        if node.loose_inner:
            element.text = node.loose_inner
        return element
