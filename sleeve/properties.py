# Sleeve Java Properties Codec
# Conversion between string maps and the Java .properties text format

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

import javaproperties

from sleeve.utils.paths import atomic_write

PropertyMap = dict[str, str]

DEFAULT_ENCODING = "utf-8"

_VALUE_ESCAPES = str.maketrans(
    {
        "\t": "\\t",
        "\r": "\\r",
        "\n": "\\n",
        "\f": "\\f",
        "\\": "\\\\",
    }
)

# Java's line reader only knows these three terminators
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"


class PropertiesError(Exception):
    """Base exception for properties codec errors."""


class ParseError(PropertiesError):
    """Raised when properties text is malformed."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.message = message
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


def escape_value(value: str) -> str:
    """Escape tab, CR, LF, form feed and backslash in a property value."""
    return value.translate(_VALUE_ESCAPES)


def to_properties(mapping: Mapping[str, Any]) -> str:
    """
    Convert a mapping to Java properties text.

    Keys are emitted in sorted order, one `key=value` line each, with no
    trailing newline. Keys are written as-is and must not contain `=` or
    line breaks.

    For example:
        to_properties({"foo": "bar", "baz": "fab"})
        -> "baz=fab\\nfoo=bar"

    Args:
        mapping: Keys and values to serialize. Values are passed through str().

    Returns:
        Properties text, empty for an empty mapping.
    """
    return "\n".join(f"{key}={escape_value(str(mapping[key]))}" for key in sorted(mapping))


def _find_unterminated_continuation(text: str) -> Optional[int]:
    """Return the starting line of a logical line left open at end of text."""
    lines = _LINE_BREAK.split(text)
    if lines and lines[-1] == "":
        lines.pop()

    continuing = False
    start = 0
    for lineno, line in enumerate(lines, 1):
        stripped = line.lstrip(_WHITESPACE)
        if not continuing:
            if not stripped or stripped[0] in "#!":
                continue
            start = lineno
        elif not stripped:
            continuing = False
            continue
        trailing = len(stripped) - len(stripped.rstrip("\\"))
        continuing = trailing % 2 == 1

    return start if continuing else None


def from_properties(text: str) -> PropertyMap:
    """
    Parse Java properties text into a dict.

    Comments, continuation lines, escapes and \\uXXXX sequences are handled
    by javaproperties. Later occurrences of a key replace earlier ones.

    Args:
        text: Properties text.

    Returns:
        Dict of keys to values in file order.

    Raises:
        ParseError: If the text is malformed.
    """
    open_line = _find_unterminated_continuation(text)
    if open_line is not None:
        raise ParseError("unterminated continuation line at end of input", line=open_line)

    try:
        return javaproperties.loads(text, object_pairs_hook=dict)
    except ValueError as e:
        raise ParseError(str(e)) from e


def load_properties(path: Path, *, encoding: str = DEFAULT_ENCODING) -> PropertyMap:
    """
    Read and parse a properties file.

    Args:
        path: File to read.
        encoding: File encoding.

    Returns:
        Parsed properties.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ParseError: If the content is malformed.
    """
    with open(path, encoding=encoding, newline="") as f:
        text = f.read()
    return from_properties(text)


def dump_properties(mapping: Mapping[str, Any], path: Path, *, encoding: str = DEFAULT_ENCODING) -> Path:
    """
    Serialize a mapping and write it atomically to path.

    Returns:
        The path written.
    """
    atomic_write(path, to_properties(mapping), encoding=encoding)
    return path
