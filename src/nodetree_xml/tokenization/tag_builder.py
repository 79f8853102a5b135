"""Tag and property construction from the text between one pair of carets.

The input is everything strictly between a matched ``<`` and ``>``, such as::

    Essay type="term" author='George Winston'
    Piano color="black" /
    Toaster
    /Toaster

The first token is the node type. Each following token is a ``name=value``
attribute (whitespace around ``=`` allowed, quoted values kept whole) or a
bare ``/``. A trailing ``/`` marks the tag as self-closing.
"""

from dataclasses import dataclass
from typing import List, Optional

from nodetree_xml.character.scanner import (
    BACKSLASH,
    DOUBLE_QUOTE,
    NOT_FOUND,
    SINGLE_QUOTE,
    WHITESPACE,
    find_unquoted,
    is_escaped,
    next_non_space,
    next_space,
)
from nodetree_xml.shared.errors import PropertySyntaxError, StructuralError
from nodetree_xml.tree.node import Node, Property

SELF_CLOSING_MARK = "/"
QUOTES = (DOUBLE_QUOTE, SINGLE_QUOTE)


@dataclass
class TagResult:
    """A node built from one tag, and whether that tag closed itself."""

    node: Node
    self_closing: bool

    @property
    def is_closing_tag(self) -> bool:
        """Check whether the tag was a closing tag such as ``/Config``."""
        return self.node.is_closing


def tokenize_tag(source: str) -> List[str]:
    """Split tag text into the type token and one token per attribute.

    Examples:
        >>> tokenize_tag('Piano color = "jet black" keys=88')
        ['Piano', 'color = "jet black"', 'keys=88']
    """
    tokens = []
    pos = next_non_space(source, 0)

    while pos < len(source):
        end = next_space(source, pos)
        if tokens:
            # Only an '=' separated from this token by whitespace belongs to it.
            equals = find_unquoted(source, "=", pos)
            if equals != NOT_FOUND and (
                end == NOT_FOUND or not source[end:equals].strip()
            ):
                end = next_space(source, next_non_space(source, equals + 1))

        if end == NOT_FOUND:
            end = len(source)

        tokens.append(source[pos:end])
        pos = next_non_space(source, end)

    return tokens


def unescape(value: str) -> str:
    """Delete every backslash that is not itself escaped.

    Examples:
        >>> unescape('say \\\\"hi\\\\"')
        'say "hi"'
        >>> unescape('C:\\\\\\\\temp')
        'C:\\\\temp'
    """
    chars = []
    pos = 0
    while pos < len(value):
        char = value[pos]
        if char == BACKSLASH:
            if pos + 1 < len(value):
                chars.append(value[pos + 1])
            pos += 2
            continue
        chars.append(char)
        pos += 1
    return "".join(chars)


def build_property(source: str) -> Property:
    """Build a Property from one ``name=value`` token.

    Raises:
        PropertySyntaxError: On a missing ``=``, an empty name, or a value whose
            opening quote is not matched by the same closing quote
    """
    if "=" not in source:
        raise PropertySyntaxError(
            f'XML Parse Error: malformed property in "{source}".',
            literal=source,
        )

    name, value = source.split("=", 1)
    name = name.strip()
    value = value.strip()

    if not name:
        raise PropertySyntaxError(
            f'XML Parse Error: malformed property in "{source}".',
            literal=source,
        )

    if value and value[0] in QUOTES:
        last = len(value) - 1
        if last == 0 or value[last] != value[0] or is_escaped(value, last):
            raise PropertySyntaxError(
                f'XML Parse Error: malformed property value in "{source}".',
                literal=source,
            )
        value = value[1:last]

    return Property(name, unescape(value))


def build_node(source: str, parent: Optional[Node]) -> TagResult:
    """Build a Node, with its properties, from the text inside one tag.

    The node is created with ``parent`` as its parent but is not attached
    to it; that is left to the caller.

    Raises:
        StructuralError: If the tag holds no type name
        PropertySyntaxError: If any attribute token is malformed
    """
    body = source.rstrip(WHITESPACE)
    self_closing = body.endswith(SELF_CLOSING_MARK)
    if self_closing:
        body = body[:-1]

    tokens = tokenize_tag(body)
    if not tokens:
        raise StructuralError(
            f'XML Parse Error: Empty tag "<{source}>".', literal=source
        )

    node = Node(tokens[0], parent)
    for token in tokens[1:]:
        if token == SELF_CLOSING_MARK:
            continue
        node.add_property(build_property(token))

    return TagResult(node, self_closing)
