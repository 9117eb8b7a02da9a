"""Error taxonomy shared by validation, stores, and services.

Every code is recoverable at the shell boundary. Nothing here
terminates the process.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Failure kinds surfaced in ``ServiceError.code``."""

    EMPTY_FIELD = "EMPTY_FIELD"
    INVALID_NUMBER = "INVALID_NUMBER"
    INVALID_DATE = "INVALID_DATE"
    DATE_ORDER_VIOLATION = "DATE_ORDER_VIOLATION"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    DANGLING_REFERENCE = "DANGLING_REFERENCE"
    REFERENCED = "REFERENCED"


# Codes the menu shell answers by prompting again for the same field.
REPROMPT_CODES = frozenset(
    {ErrorCode.EMPTY_FIELD, ErrorCode.INVALID_NUMBER, ErrorCode.INVALID_DATE}
)


class OutOfRangeError(IndexError):
    """Raised by a store when a position is outside ``0 <= index < size``."""

    def __init__(self, kind: str, index: int, size: int) -> None:
        self.kind = kind
        self.index = index
        self.size = size
        super().__init__(f"No {kind} at index {index} (registered: {size})")
