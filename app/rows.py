"""
Row-level cleaning and validation.

A row either comes back cleaned (Accepted) or is dropped with a reason
(Rejected). Rejection is an expected outcome, never an exception. An invalid
phone number degrades the row (field cleared) instead of rejecting it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Union

from .cleaning import clean_field, normalize_email
from .validators import is_valid_email, is_valid_phone_number

QUOTE = '"'

# Residual malformations cleaning could not repair.
_LEADING_COMMA_THEN_QUOTE = re.compile(r'^,.*"')
_QUOTE_THEN_COMMA = re.compile(r'".*,')


class RejectReason(str, Enum):
    WRONG_WIDTH = "wrong_width"
    INVALID_EMAIL = "invalid_email"
    MALFORMED_QUOTES = "malformed_quotes"


@dataclass(frozen=True)
class Accepted:
    row: List[str]
    phone_cleared: bool = False


@dataclass(frozen=True)
class Rejected:
    reason: RejectReason


RowOutcome = Union[Accepted, Rejected]


def count_unescaped_quotes(field: str) -> int:
    count = 0
    i = 0
    n = len(field)
    while i < n:
        if field[i] == QUOTE:
            if i + 1 < n and field[i + 1] == QUOTE:
                i += 1
            else:
                count += 1
        i += 1
    return count


def has_malformed_quotes(field: str) -> bool:
    value = field.strip()
    if count_unescaped_quotes(value) % 2:
        return True
    return bool(_LEADING_COMMA_THEN_QUOTE.match(value) or _QUOTE_THEN_COMMA.search(value))


def validate_row(
    row: Sequence[str],
    expected_width: int,
    email_index: Optional[int],
    phone_index: Optional[int],
) -> RowOutcome:
    if len(row) != expected_width:
        return Rejected(RejectReason.WRONG_WIDTH)

    cleaned = [clean_field(f) for f in row]

    if email_index is not None:
        email = normalize_email(cleaned[email_index])
        cleaned[email_index] = email
        if not is_valid_email(email):
            return Rejected(RejectReason.INVALID_EMAIL)

    phone_cleared = False
    if phone_index is not None:
        phone = cleaned[phone_index]
        if phone.strip() and not is_valid_phone_number(phone):
            cleaned[phone_index] = ""
            phone_cleared = True

    for f in cleaned:
        if has_malformed_quotes(f):
            return Rejected(RejectReason.MALFORMED_QUOTES)

    return Accepted(cleaned, phone_cleared)
