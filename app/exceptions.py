"""Exceptions for csv cleaning."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(eq=False)
class StructureError(Exception):
    """Header does not match the expected columns.

    Raised before any row is processed; no partial output exists.

    Attributes:
        message: Human-readable diagnostic.
        expected_count / actual_count: set for count mismatches.
        position: 1-based column position, set for name mismatches.
        expected_name / actual_name: set for name mismatches.
    """

    message: str
    expected_count: Optional[int] = None
    actual_count: Optional[int] = None
    position: Optional[int] = None
    expected_name: Optional[str] = None
    actual_name: Optional[str] = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def empty_input(cls) -> "StructureError":
        return cls("CSV input is empty")

    @classmethod
    def count_mismatch(cls, expected: int, actual: int) -> "StructureError":
        return cls(
            f"Column count mismatch: expected {expected}, found {actual}.",
            expected_count=expected,
            actual_count=actual,
        )

    @classmethod
    def name_mismatch(cls, position: int, expected: str, actual: str) -> "StructureError":
        return cls(
            f'Column name mismatch at position {position}: expected "{expected}", found "{actual}".',
            position=position,
            expected_name=expected,
            actual_name=actual,
        )
