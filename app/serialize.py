from __future__ import annotations

from typing import Iterable, Sequence

from .rules import DELIMITER, LINE_TERMINATOR

QUOTE = '"'
_NEEDS_QUOTES = (DELIMITER, QUOTE, "\n")


def quote_field(field: str) -> str:
    if any(c in field for c in _NEEDS_QUOTES):
        return QUOTE + field.replace(QUOTE, QUOTE * 2) + QUOTE
    return field


def rows_to_csv(rows: Iterable[Sequence[str]]) -> str:
    """Join rows with LF, no trailing newline. Quote only where required."""
    return LINE_TERMINATOR.join(
        DELIMITER.join(quote_field(f) for f in row) for row in rows
    )
