"""
Quote-aware CSV tokenizer.

Scans physical lines (split on LF) one character at a time. A quoted field may
span several physical lines; the line break is kept in the field value.
Rows are emitted only if at least one field is non-empty. Row width is not
checked here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .rules import DELIMITER

Row = List[str]

QUOTE = '"'


@dataclass
class ParserState:
    field_buffer: str = ""
    in_quotes: bool = False
    current_row: Row = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)

    def close_field(self) -> None:
        self.current_row.append(self.field_buffer.strip())
        self.field_buffer = ""

    def close_row(self) -> None:
        # a line that produced no separator and no content is not a field
        if self.field_buffer or self.current_row:
            self.close_field()
        if any(self.current_row):
            self.rows.append(self.current_row)
        self.current_row = []
        self.field_buffer = ""


def scan_line(state: ParserState, line: str) -> ParserState:
    """Feed one physical line (without its terminator) through the state."""
    i = 0
    n = len(line)
    while i < n:
        char = line[i]
        if char == QUOTE:
            if state.in_quotes and i + 1 < n and line[i + 1] == QUOTE:
                state.field_buffer += QUOTE
                i += 1
            else:
                state.in_quotes = not state.in_quotes
        elif char == DELIMITER and not state.in_quotes:
            state.close_field()
        else:
            state.field_buffer += char
        i += 1

    if state.in_quotes:
        state.field_buffer += "\n"
    else:
        state.close_row()
    return state


def parse_csv(text: str) -> List[Row]:
    state = ParserState()
    for line in text.split("\n"):
        scan_line(state, line)

    # unterminated quote: close silently at end of input
    state.close_row()
    return state.rows
