"""Node and Property objects making up a parsed document tree.

A tree is owned top-down: each node owns its properties and children, and the
``parent`` reference is a navigation-only back-pointer fixed when the node is
created. Type and property-name lookups are case-insensitive; stored names keep
their original case. All traversals are iterative so deep documents do not
exhaust the interpreter stack.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from nodetree_xml.shared.config import ROOT_TYPE


def _same_name(left: str, right: str) -> bool:
    return left.lower() == right.lower()


def escape_value(value: str) -> str:
    """Escape a property value so it can be written back inside double quotes."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


@dataclass(frozen=True)
class Property:
    """One attribute: an immutable name/value pair."""

    name: str
    value: str

    def matches(self, name: str) -> bool:
        """Check whether this property has ``name``, ignoring case."""
        return _same_name(self.name, name)

    def __str__(self) -> str:
        return f'{self.name}="{escape_value(self.value)}"'


@dataclass(eq=False)
class Node:
    """A tagged element with properties, children and loose inner text.

    ``loose_inner`` is the document-order concatenation of every text run that
    appeared directly inside this node, outside any nested tag.
    """

    type: str
    parent: Optional["Node"] = field(default=None, repr=False)
    properties: List[Property] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list, repr=False)
    loose_inner: str = ""

    def __post_init__(self) -> None:
        """Validate node values."""
        if not self.type:
            raise ValueError("Node type cannot be empty")

    @classmethod
    def create_root(cls, root_type: str = ROOT_TYPE) -> "Node":
        """Create the sentinel root node of a new tree."""
        return cls(root_type)

    #
    # Self
    #

    @property
    def is_root(self) -> bool:
        """Check whether this is the parentless root of its tree."""
        return self.parent is None

    @property
    def is_closing(self) -> bool:
        """Check whether this node was built from a closing tag."""
        return self.type.startswith("/")

    @property
    def depth(self) -> int:
        """Get the number of ancestors above this node (root = 0)."""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def is_type(self, type_name: str) -> bool:
        """Check this node's type, ignoring case."""
        return _same_name(self.type, type_name)

    def get_loose_inner(self) -> str:
        """Get the text appearing directly inside this node."""
        return self.loose_inner

    def append_loose_inner(self, text: str) -> None:
        """Append a text run to this node's loose inner text."""
        self.loose_inner += text

    def add_property(
        self, prop: Union[Property, str], value: Optional[str] = None
    ) -> Property:
        """Attach a property, given either a Property or a name and value."""
        if isinstance(prop, Property):
            if value is not None:
                raise TypeError("value must not be given with a Property")
            new_property = prop
        else:
            if value is None:
                raise TypeError("value is required when adding by name")
            new_property = Property(prop, value)
        self.properties.append(new_property)
        return new_property

    def get_property(self, name: str) -> Optional[Property]:
        """Get the first property called ``name`` (any case), or None."""
        for prop in self.properties:
            if prop.matches(name):
                return prop
        return None

    def get_property_value(
        self, name: str, default: Optional[str] = None
    ) -> Optional[str]:
        """Get the value of the first property called ``name``, or ``default``."""
        prop = self.get_property(name)
        return default if prop is None else prop.value

    def has_property(self, name: str) -> bool:
        """Check whether a property called ``name`` exists."""
        return self.get_property(name) is not None

    def get_properties(self) -> List[Property]:
        """Get a snapshot of all properties in document order."""
        return list(self.properties)

    #
    # Tree
    #

    def add_child(self, child: "Node") -> None:
        """Attach a child created with this node as its parent."""
        if not isinstance(child, Node):
            raise TypeError("Child must be a Node instance")
        if child.parent is not self:
            raise ValueError(
                f"Node '{child.type}' was created under a different parent"
            )
        self.children.append(child)

    def get_children(self) -> List["Node"]:
        """Get a snapshot of all children in document order."""
        return list(self.children)

    def get_children_of_type(self, type_name: str) -> List["Node"]:
        """Get every child of the given type (any case), in document order."""
        return [child for child in self.children if child.is_type(type_name)]

    def get_child_of_type(self, type_name: str) -> Optional["Node"]:
        """Get the first child of the given type (any case), or None."""
        for child in self.children:
            if child.is_type(type_name):
                return child
        return None

    def iter_nodes(self) -> Iterator["Node"]:
        """Iterate over this node and all descendants, depth first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def select(self, path: str) -> List["Node"]:
        """Follow a slash-separated path of child types from this node.

        Example:
            >>> root = Node.create_root()
            >>> config = Node("Config", root)
            >>> root.add_child(config)
            >>> config.add_child(Node("Entry", config))
            >>> [node.get_path() for node in root.select("config/entry")]
            ['/Config/Entry']
        """
        current = [self]
        for segment in path.strip("/").split("/"):
            if not segment:
                continue
            current = [
                child
                for node in current
                for child in node.get_children_of_type(segment)
            ]
        return current

    def get_path(self) -> str:
        """Get the slash-separated chain of types from the root to this node."""
        types = []
        node: Optional[Node] = self
        while node is not None and node.parent is not None:
            types.append(node.type)
            node = node.parent
        return "/" + "/".join(reversed(types))

    #
    # Rendering
    #

    def opening_tag(self) -> str:
        """Render the opening tag with all properties."""
        return "<" + " ".join([self.type] + [str(p) for p in self.properties]) + ">"

    def __str__(self) -> str:
        return f"{self.opening_tag()}{self.loose_inner}</{self.type}>"

    def to_tree_lines(
        self, indent: str = "    ", accumulate: bool = True
    ) -> List[str]:
        """Render this subtree as one line per node.

        Args:
            indent: Prefix unit for each nesting level
            accumulate: Repeat ``indent`` once per depth. When False every
                descendant gets a single ``indent`` regardless of depth.
        """
        lines = []
        stack: List[Tuple[Node, int]] = [(self, 0)]
        while stack:
            node, level = stack.pop()
            if accumulate:
                prefix = indent * level
            else:
                prefix = indent if level else ""
            lines.append(prefix + str(node))
            stack.extend((child, level + 1) for child in reversed(node.children))
        return lines

    def describe_lines(self) -> List[str]:
        """Render properties, inner text and child nodes as labelled lines."""
        lines = []
        stack: List[Tuple[Node, str, Optional[str]]] = [(self, "", None)]
        while stack:
            node, prefix, header = stack.pop()
            if header is not None:
                lines.append(header)
            for prop in node.properties:
                lines.append(f"{prefix}PROPERTY: {prop.name} = {prop.value}")
            lines.append(f"{prefix}INNER: {node.loose_inner}")
            for child in reversed(node.children):
                stack.append((child, prefix + "\t", f"{prefix}NODE: {child.type}"))
        return lines

    def to_dict(self) -> Dict[str, Any]:
        """Convert this subtree to nested dictionaries."""
        result: Dict[str, Any] = {}
        stack: List[Tuple[Node, Dict[str, Any]]] = [(self, result)]
        while stack:
            node, out = stack.pop()
            out["type"] = node.type
            # A list keeps duplicate names and their order.
            out["properties"] = [
                {"name": prop.name, "value": prop.value} for prop in node.properties
            ]
            out["loose_inner"] = node.loose_inner
            out["children"] = []
            for child in node.children:
                child_out: Dict[str, Any] = {}
                out["children"].append(child_out)
                stack.append((child, child_out))
        return result
