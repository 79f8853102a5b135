"""Quote-sensitive search primitives.

Every search the parser performs goes through :func:`find_unquoted_any`:
locating tag carets, the next whitespace, the next ``=``. Occurrences of the
target inside a single- or double-quoted region are skipped. The two quote
kinds do not nest: inside double quotes a single quote is literal, and vice
versa. A quote preceded by an odd run of backslashes is escaped and does not
open or close a region.

In caret-checking mode the haystack is treated as XML text and a ``<`` inside
an open tag, or a ``>`` outside one, raises :class:`StructuralError`.
"""

from typing import List

from nodetree_xml.shared.errors import StructuralError

NOT_FOUND = -1

WHITESPACE = " \t\n\r\f"

DOUBLE_QUOTE = '"'
SINGLE_QUOTE = "'"
OPEN_CARET = "<"
CLOSE_CARET = ">"
BACKSLASH = "\\"


def is_escaped(text: str, index: int) -> bool:
    """Check whether the character at ``index`` is escaped.

    A character is escaped when the contiguous run of backslashes directly
    before it has odd length.

    Examples:
        >>> is_escaped('a\\\\"', 2)
        True
        >>> is_escaped('a\\\\\\\\"', 3)
        False
    """
    run = 0
    pos = index - 1
    while pos >= 0 and text[pos] == BACKSLASH:
        run += 1
        pos -= 1
    return run % 2 == 1


def find_unquoted_any(
    haystack: str,
    needles: str,
    start: int = 0,
    check_carets: bool = False
) -> int:
    """Find the first unquoted occurrence of any character in ``needles``.

    Scanning begins at ``start`` with fresh quote and tag state; escaping is
    judged within the scanned slice only.

    Args:
        haystack: Text to search
        needles: Characters to look for
        start: Offset at which scanning begins
        check_carets: Raise on misplaced ``<`` or ``>`` outside quotes

    Returns:
        Absolute index of the match, or ``NOT_FOUND``

    Raises:
        StructuralError: In caret-checking mode, on a misplaced caret
    """
    if start < 0:
        start = 0
    text = haystack[start:]
    in_double = False
    in_single = False
    in_tag = False

    for pos, char in enumerate(text):
        if char == DOUBLE_QUOTE and not in_single and not is_escaped(text, pos):
            if DOUBLE_QUOTE in needles:
                return start + pos
            in_double = not in_double
            continue
        if char == SINGLE_QUOTE and not in_double and not is_escaped(text, pos):
            if SINGLE_QUOTE in needles:
                return start + pos
            in_single = not in_single
            continue
        if in_double or in_single:
            continue

        if char == OPEN_CARET:
            if in_tag and check_carets:
                raise StructuralError(
                    f'XML Parse Error: Misplaced opening caret within "{haystack}".',
                    literal=haystack,
                )
            in_tag = True
        elif char == CLOSE_CARET:
            if not in_tag and check_carets:
                raise StructuralError(
                    f'XML Parse Error: Misplaced closing caret within "{haystack}".',
                    literal=haystack,
                )
            in_tag = False

        if char in needles:
            return start + pos

    return NOT_FOUND


def find_unquoted(
    haystack: str,
    needle: str,
    start: int = 0,
    check_carets: bool = False
) -> int:
    """Find the first unquoted occurrence of a single character.

    Examples:
        >>> find_unquoted('text = "a<b" <c>', "<")
        13
        >>> find_unquoted('"a<b"', "<")
        -1
    """
    if len(needle) != 1:
        raise ValueError("needle must be a single character")
    return find_unquoted_any(haystack, needle, start, check_carets)


def next_space(haystack: str, start: int = 0) -> int:
    """Find the next unquoted whitespace at or after ``start``."""
    if start >= len(haystack):
        return NOT_FOUND
    return find_unquoted_any(haystack, WHITESPACE, start)


def next_non_space(haystack: str, start: int = 0) -> int:
    """Find the next non-whitespace at or after ``start``.

    Returns ``len(haystack)`` when only whitespace remains.
    """
    pos = max(start, 0)
    while pos < len(haystack) and haystack[pos] in WHITESPACE:
        pos += 1
    return pos


def split_unquoted(target: str, separator: str) -> List[str]:
    """Split ``target`` on every unquoted ``separator``.

    Returns ``n + 1`` pieces for ``n`` unquoted separators.
    """
    pieces = []
    remainder = target
    pos = find_unquoted(remainder, separator)
    while pos != NOT_FOUND:
        pieces.append(remainder[:pos])
        remainder = remainder[pos + 1:]
        pos = find_unquoted(remainder, separator)
    pieces.append(remainder)
    return pieces
