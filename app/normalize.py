"""
Core cleaning pipeline.

Responsibilities:
- header shape/name enforcement against the operator's column list
- column-role detection (email, phone)
- per-row cleaning + validation, order preserved
- decoding uploaded bytes and building the API response envelope
"""

from __future__ import annotations

import hashlib
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import structlog
from charset_normalizer import from_bytes

from .cleaning import clean_field
from .exceptions import StructureError
from .rows import Accepted, RejectReason, Rejected, RowOutcome, validate_row
from .rules import (
    CLEANED_FILENAME_PREFIX,
    DEFAULT_CLEANED_FILENAME,
    EMAIL_COLUMN_MARKERS,
    OUTPUT_ENCODING,
    PHONE_COLUMN_MARKERS,
)
from .serialize import rows_to_csv
from .tokenizer import Row, parse_csv

logger = structlog.get_logger(__name__)

DEFAULT_PARALLEL_MIN_ROWS = 5000


@dataclass(frozen=True)
class ColumnRoles:
    email_index: Optional[int] = None
    phone_index: Optional[int] = None


@dataclass(frozen=True)
class RowRejection:
    row: int  # 1-based data row, header excluded
    reason: RejectReason


@dataclass
class ParseResult:
    valid_rows: List[Row]
    invalid_row_count: int = 0
    rejections: List[RowRejection] = field(default_factory=list)
    cleared_phone_rows: List[int] = field(default_factory=list)


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _first_match(columns: Sequence[str], markers: Sequence[str]) -> Optional[int]:
    lowered = [c.lower() for c in columns]
    for i, name in enumerate(lowered):
        if any(marker in name for marker in markers):
            return i
    return None


def find_column_roles(expected_columns: Sequence[str]) -> ColumnRoles:
    return ColumnRoles(
        email_index=_first_match(expected_columns, EMAIL_COLUMN_MARKERS),
        phone_index=_first_match(expected_columns, PHONE_COLUMN_MARKERS),
    )


def validate_header(header: Sequence[str], expected_columns: Sequence[str]) -> None:
    """Raise StructureError unless header matches expected_columns (case-insensitive)."""
    if len(header) != len(expected_columns):
        raise StructureError.count_mismatch(len(expected_columns), len(header))

    for i, (actual, expected) in enumerate(zip(header, expected_columns)):
        if actual.strip().lower() != expected.strip().lower():
            raise StructureError.name_mismatch(i + 1, expected, actual)


def validate_and_clean_csv(
    text: str,
    expected_columns: Sequence[str],
    *,
    max_workers: Optional[int] = None,
    parallel_min_rows: int = DEFAULT_PARALLEL_MIN_ROWS,
) -> ParseResult:
    """
    Tokenize text, enforce the header, and keep only rows that validate.

    Returns the cleaned header as valid_rows[0] followed by accepted rows in
    input order. Raises StructureError on empty input or header mismatch.
    """
    if not expected_columns:
        raise ValueError("expected_columns must name at least one column")

    if not any(line.strip() for line in text.split("\n")):
        logger.warning("CSV input is empty", expected_columns=len(expected_columns))
        raise StructureError.empty_input()

    rows = parse_csv(text)
    if not rows:
        logger.warning("CSV input has no rows", expected_columns=len(expected_columns))
        raise StructureError.empty_input()

    header, data_rows = rows[0], rows[1:]
    try:
        validate_header(header, expected_columns)
    except StructureError as e:
        logger.warning("Header rejected", error=str(e))
        raise

    roles = find_column_roles(expected_columns)
    width = len(expected_columns)

    def check(row: Row) -> RowOutcome:
        return validate_row(row, width, roles.email_index, roles.phone_index)

    if max_workers and max_workers > 1 and len(data_rows) >= parallel_min_rows:
        # map() yields in submission order
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            outcomes = list(executor.map(check, data_rows))
    else:
        outcomes = [check(row) for row in data_rows]

    result = ParseResult(valid_rows=[[clean_field(h) for h in header]])
    for i, outcome in enumerate(outcomes, start=1):
        if isinstance(outcome, Accepted):
            result.valid_rows.append(outcome.row)
            if outcome.phone_cleared:
                result.cleared_phone_rows.append(i)
        elif isinstance(outcome, Rejected):
            result.invalid_row_count += 1
            result.rejections.append(RowRejection(row=i, reason=outcome.reason))

    logger.info(
        "CSV cleaning completed",
        total_rows=len(data_rows),
        valid_rows=len(result.valid_rows) - 1,
        invalid_rows=result.invalid_row_count,
        email_column=roles.email_index,
        phone_column=roles.phone_index,
    )
    return result


def decode_csv_bytes(raw: bytes) -> tuple[str, Dict[str, Any]]:
    """
    Decode uploaded bytes to text with LF line endings.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is consumed rather than kept in the first header name.
    - If decode fails, fall back to UTF-8, then to replacement characters.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(b"\xef\xbb\xbf") and (decode_used.lower().replace("-", "_") in ("utf_8", "utf8")):
        decode_used = "utf-8-sig"

    decode_fallback = False

    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        try:
            text = raw.decode("utf-8")
            decode_used = "utf-8"
        except UnicodeDecodeError:
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
        decode_fallback = True

    if decode_fallback:
        logger.warning("Encoding detection failed, used fallback", detected=detected, decode_used=decode_used)

    text = text.replace("\r\n", "\n").replace("\r", "\n")

    info = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }
    return text, info


def parse_column_names(values: Sequence[str]) -> List[str]:
    """Split comma-separated entries, strip, drop blanks and duplicates, keep order."""
    columns: List[str] = []
    for value in values:
        for name in value.split(","):
            name = name.strip()
            if name and name not in columns:
                columns.append(name)
    return columns


def cleaned_filename(filename: Optional[str]) -> str:
    if not filename:
        return DEFAULT_CLEANED_FILENAME
    return f"{CLEANED_FILENAME_PREFIX}{filename}"


def status_message(invalid_rows: int) -> str:
    if invalid_rows == 0:
        return "CSV processed successfully! No invalid rows found."
    noun = "row" if invalid_rows == 1 else "rows"
    return f"CSV processed successfully! Removed {invalid_rows} invalid {noun}."


def clean_csv_bytes(
    raw: bytes,
    filename: Optional[str],
    columns: Sequence[str],
    *,
    max_workers: Optional[int] = None,
    parallel_min_rows: int = DEFAULT_PARALLEL_MIN_ROWS,
) -> Dict[str, Any]:
    """
    Decode, clean and serialize an uploaded CSV.
    Returns a dict matching the API's response envelope.
    """
    text, encoding_info = decode_csv_bytes(raw)
    result = validate_and_clean_csv(
        text,
        columns,
        max_workers=max_workers,
        parallel_min_rows=parallel_min_rows,
    )
    content = rows_to_csv(result.valid_rows)
    content_bytes = content.encode(OUTPUT_ENCODING)

    header = result.valid_rows[0]
    roles = find_column_roles(columns)
    phone_column = header[roles.phone_index] if roles.phone_index is not None else None

    errors = [
        {
            "row": r.row,
            "column": None,
            "issue": r.reason.value,
            "value": None,
            "action": "dropped",
        }
        for r in result.rejections
    ]
    warnings = [
        {
            "row": row,
            "column": phone_column,
            "issue": "invalid_phone",
            "value": None,
            "action": "cleared",
        }
        for row in result.cleared_phone_rows
    ]

    return {
        "cleaned_csv": {
            "filename": cleaned_filename(filename),
            "sha256": _sha256_hex(content_bytes),
            "encoding": OUTPUT_ENCODING,
            "content": content,
        },
        "report": {
            "summary": {
                "rows": len(result.valid_rows) - 1 + result.invalid_row_count,
                "columns": len(header),
                "valid_rows": len(result.valid_rows) - 1,
                "invalid_rows": result.invalid_row_count,
            },
            "message": status_message(result.invalid_row_count),
            "encoding": encoding_info,
            "warnings": warnings,
            "errors": errors,
        },
    }
