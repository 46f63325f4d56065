from __future__ import annotations

from .rules import ALLOWED_TLDS, DELIMITER, TLD_TYPO_CORRECTIONS

QUOTE = '"'


def clean_field(field: str) -> str:
    """
    Normalize a single raw field.

    Rules:
    - Strip surrounding whitespace.
    - Drop one stray leading comma (field absorbed a separator).
    - Unwrap a matching pair of outer quotes; a trailing comma inside the
      quotes is treated as malformed and dropped. Re-quoting is left to the
      serializer.
    - Otherwise drop one stray trailing comma.
    """
    value = field.strip()

    if value.startswith(DELIMITER):
        value = value[1:].strip()

    if len(value) > 1 and value.startswith(QUOTE) and value.endswith(QUOTE):
        inner = value[1:-1]
        if inner.endswith(DELIMITER):
            return inner[:-1]
        return inner

    if value.endswith(DELIMITER):
        value = value[:-1].strip()

    return value


def normalize_email(email: str) -> str:
    """
    Repair common TLD typos (a@b.con -> a@b.com).

    Allow-listed TLDs and unknown suffixes are returned untouched; the strict
    validator decides what to do with the latter.
    """
    if email.count("@") != 1:
        return email

    local, domain = email.split("@")
    if not domain or "." not in domain:
        return email

    cut = domain.rindex(".")
    suffix = domain[cut:].lower()
    if suffix in ALLOWED_TLDS:
        return email

    correction = TLD_TYPO_CORRECTIONS.get(suffix)
    if correction is None and suffix.endswith(DELIMITER):
        correction = TLD_TYPO_CORRECTIONS.get(suffix[:-1])
    if correction is None:
        return email

    return f"{local}@{domain[:cut]}{correction}"
