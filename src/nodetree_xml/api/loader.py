"""Source line loading.

The parser consumes an ordered list of lines read once before parsing
starts. Lines are split on ``\\n``, ``\\r\\n`` or ``\\r`` and carry no line
terminator. A leading byte-order mark is dropped.
"""

from pathlib import Path
from typing import List, Union

from nodetree_xml.shared.errors import SourceReadError
from nodetree_xml.shared.logging import get_logger

logger = get_logger(__name__, component="source_loader")

BYTE_ORDER_MARK = "\ufeff"


def split_source_lines(text: str) -> List[str]:
    """Split document text into lines without their terminators.

    A final terminator does not produce a trailing empty line.
    A leading byte-order mark is removed.
    """
    if text.startswith(BYTE_ORDER_MARK):
        text = text[len(BYTE_ORDER_MARK):]
    if not text:
        return []
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def load_lines(file_path: Union[str, Path], encoding: str = "utf-8") -> List[str]:
    """Read every line of a text file.

    Args:
        file_path: Path of the document to read
        encoding: Text encoding of the document

    Returns:
        The file's lines, in order, without terminators

    Raises:
        SourceReadError: If the file cannot be opened or decoded; the
            underlying exception is attached as the cause
    """
    path_obj = Path(file_path)
    try:
        with path_obj.open(encoding=encoding, newline="") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError, LookupError) as e:
        logger.error(
            "Failed to read source file",
            extra={"file_path": str(path_obj), "error_type": type(e).__name__}
        )
        raise SourceReadError(
            f"Failed to load the specified file: {path_obj}",
            literal=str(path_obj),
            cause=e,
        ) from e

    lines = split_source_lines(text)
    logger.debug(
        "Source file read",
        extra={"file_path": str(path_obj), "line_count": len(lines)}
    )
    return lines
