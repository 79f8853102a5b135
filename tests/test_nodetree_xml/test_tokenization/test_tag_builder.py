"""Tests for tag tokenizing and node/property construction."""

import pytest

from nodetree_xml.shared.errors import PropertySyntaxError, StructuralError
from nodetree_xml.tokenization.tag_builder import (
    build_node,
    build_property,
    tokenize_tag,
    unescape,
)
from nodetree_xml.tree.node import Node, Property


class TestTokenizeTag:
    """Test splitting tag text into tokens."""

    def test_type_and_properties(self) -> None:
        """Test spacing around '=' and quoted values with spaces."""
        tokens = tokenize_tag('Piano color = "jet black" keys=88')

        assert tokens == ["Piano", 'color = "jet black"', "keys=88"]

    def test_surrounding_whitespace(self) -> None:
        """Test that outer whitespace is ignored."""
        assert tokenize_tag("  Toaster  ") == ["Toaster"]

    def test_empty(self) -> None:
        """Test tag text with no tokens."""
        assert tokenize_tag("") == []
        assert tokenize_tag("   ") == []

    def test_bare_token_before_property(self) -> None:
        """Test that a token without '=' stays separate from the next one."""
        assert tokenize_tag("A b c=1") == ["A", "b", "c=1"]

    def test_single_quoted_value(self) -> None:
        """Test single-quoted values containing spaces and '='."""
        assert tokenize_tag("T a='x = y' b=2") == ["T", "a='x = y'", "b=2"]


class TestUnescape:
    """Test backslash removal."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ('say \\"hi\\"', 'say "hi"'),
            ("C:\\\\temp", "C:\\temp"),
            ("\\n", "n"),
            ("trailing\\", "trailing"),
            ("plain", "plain"),
        ],
    )
    def test_unescape(self, raw: str, expected: str) -> None:
        """Test that each unescaped backslash is dropped."""
        assert unescape(raw) == expected


class TestBuildProperty:
    """Test building a Property from one token."""

    @pytest.mark.parametrize(
        "token, name, value",
        [
            ('a="1"', "a", "1"),
            (" a = '2' ", "a", "2"),
            ("b=c", "b", "c"),
            ('x="a=b"', "x", "a=b"),
            ('e=""', "e", ""),
            ("f=", "f", ""),
            ('q="it\'s"', "q", "it's"),
        ],
    )
    def test_valid(self, token: str, name: str, value: str) -> None:
        """Test well-formed property tokens."""
        assert build_property(token) == Property(name, value)

    def test_escaped_backslash_in_value(self) -> None:
        """Test that an escaped backslash survives as one backslash."""
        assert build_property('p="C:\\\\temp"').value == "C:\\temp"

    @pytest.mark.parametrize("token", ["novalue", "=1", " = 'x'"])
    def test_malformed_property(self, token: str) -> None:
        """Test tokens missing '=' or a name."""
        with pytest.raises(PropertySyntaxError, match="malformed property in"):
            build_property(token)

    @pytest.mark.parametrize("token", ['a="1\'', 'a="1', 'a="', 'a="1\\"'])
    def test_malformed_value(self, token: str) -> None:
        """Test mismatched, missing or escaped closing quotes."""
        with pytest.raises(PropertySyntaxError, match="malformed property value"):
            build_property(token)


class TestBuildNode:
    """Test building a node from the text inside one tag."""

    def test_opening_tag(self) -> None:
        """Test a plain opening tag with properties."""
        root = Node.create_root()
        result = build_node('Config depth="3" name=main', root)

        assert not result.self_closing
        assert not result.is_closing_tag
        assert result.node.type == "Config"
        assert result.node.get_property_value("depth") == "3"
        assert result.node.get_property_value("name") == "main"

    def test_self_closing_without_space(self) -> None:
        """Test a '/' directly after a quoted value."""
        result = build_node("T a=\"1\" b='2'/", Node.create_root())

        assert result.self_closing
        assert result.node.get_properties() == [Property("a", "1"), Property("b", "2")]

    def test_self_closing_with_space(self) -> None:
        """Test a separated trailing '/'."""
        result = build_node('Entry path="/tmp" / ', Node.create_root())

        assert result.self_closing
        assert result.node.get_property_value("path") == "/tmp"

    def test_self_closing_bare_type(self) -> None:
        """Test a self-closing tag without properties."""
        result = build_node("br/", None)

        assert result.self_closing
        assert result.node.type == "br"

    def test_closing_tag(self) -> None:
        """Test that closing tags are recognized."""
        result = build_node("/Config", Node.create_root())

        assert result.is_closing_tag
        assert not result.self_closing

    def test_node_is_not_attached(self) -> None:
        """Test that the parent is set but the child is not added."""
        root = Node.create_root()
        node = build_node("A", root).node

        assert node.parent is root
        assert root.get_children() == []

    @pytest.mark.parametrize("source", ["", "   ", "/", " / "])
    def test_empty_tag(self, source: str) -> None:
        """Test tags with no type name."""
        with pytest.raises(StructuralError, match="Empty tag"):
            build_node(source, Node.create_root())

    def test_bad_property_propagates(self) -> None:
        """Test that a malformed attribute fails the whole tag."""
        with pytest.raises(PropertySyntaxError):
            build_node("A b", Node.create_root())
