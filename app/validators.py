from __future__ import annotations

import re

from .rules import PHONE_FORMATTING_CHARS, PHONE_MAX_DIGITS, PHONE_MIN_DIGITS

_EMAIL_SHAPE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_STRIP = str.maketrans("", "", PHONE_FORMATTING_CHARS)


def is_valid_email(value: str) -> bool:
    email = value.strip()
    if not email:
        return False

    if email.count("@") != 1:
        return False

    local, domain = email.split("@")
    if not local or not domain:
        return False

    if "." not in domain:
        return False

    if domain.startswith(".") or domain.endswith("."):
        return False

    return _EMAIL_SHAPE.fullmatch(email) is not None


def is_valid_phone_number(value: str) -> bool:
    """Digits only after removing formatting, 10 to 15 of them."""
    phone = value.strip()
    if not phone:
        return False

    digits = phone.translate(_PHONE_STRIP)
    if not (digits.isascii() and digits.isdigit()):
        return False

    return PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS
