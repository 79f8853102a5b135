"""Exception types raised while loading and parsing node-tree documents.

Every parse failure is fatal: the first problem aborts the whole parse and is
reported through one of the classes below. Messages quote the offending
source literal. They never carry a line number because the preprocessor
reflows the source before the tree is assembled.
"""

from typing import Optional


class XMLParserError(Exception):
    """Base exception for every failure surfaced by the parser."""

    def __init__(
        self,
        message: str,
        literal: Optional[str] = None,
        cause: Optional[BaseException] = None
    ) -> None:
        """Initialize parser error.

        Args:
            message: Human-readable summary of the problem
            literal: Source fragment in which the problem occurred
            cause: Underlying exception, if this error wraps one
        """
        super().__init__(message)
        self.message = message
        self.literal = literal
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> Optional[BaseException]:
        """Get the wrapped underlying exception, if any."""
        return self.__cause__


class StructuralError(XMLParserError):
    """Unbalanced or misplaced angle brackets, empty tags, excessive nesting."""


class TagMismatchError(XMLParserError):
    """A closing tag does not match the element currently open."""

    def __init__(
        self,
        message: str,
        literal: Optional[str] = None,
        tag: Optional[str] = None,
        expected: Optional[str] = None
    ) -> None:
        super().__init__(message, literal)
        self.tag = tag
        self.expected = expected


class PropertySyntaxError(XMLParserError):
    """An attribute token has no '=' or a badly quoted value."""


class UnterminatedError(XMLParserError):
    """A quote, tag or element is still open when the input runs out."""


class SourceReadError(XMLParserError):
    """The source document could not be read."""
