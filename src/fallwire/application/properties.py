"""Application layer - Flat ``key=value`` properties parsing."""

from typing import Iterator, Tuple

from fallwire.domain import MalformedPropertiesError

SEPARATOR = "="


def parse_properties(text: str) -> Iterator[Tuple[str, str]]:
    """Yield the ``(key, value)`` pairs of newline-delimited properties text.

    Lines are split on ``\\n`` only, with one trailing ``\\r`` removed. Empty
    lines are skipped. Every other line, whitespace-only ones included, must
    contain exactly one separator; keys and values are taken verbatim.

    Args:
        text: The properties source.

    Raises:
        MalformedPropertiesError: For a line with no separator or more than one.

    Example:
        >>> list(parse_properties("port=8080\\nhost=localhost\\n"))
        [('port', '8080'), ('host', 'localhost')]
    """
    for line_number, line in enumerate(text.split("\n"), start=1):
        if line.endswith("\r"):
            line = line[:-1]
        if not line:
            continue
        parts = line.split(SEPARATOR)
        if len(parts) != 2:
            raise MalformedPropertiesError(line_number, line)
        yield parts[0], parts[1]
