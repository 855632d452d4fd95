"""Typed failure result for a detection run."""

from __future__ import annotations

import enum
from typing import Any


class ErrorKind(str, enum.Enum):
    DIMENSION_MISMATCH = "dimension_mismatch"
    ZERO_DIMENSION = "zero_dimension"
    SOURCE_UNREADABLE = "source_unreadable"


class AnalysisError(Exception):
    """Raised when a detection run cannot produce a result.

    A failed run never yields partial differences.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message}

    def __repr__(self) -> str:
        return f"AnalysisError({self.kind.value!r}, {self.message!r})"
