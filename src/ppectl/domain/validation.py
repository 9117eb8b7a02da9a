"""Field validators used while collecting input and by the services.

Validators return a :class:`FieldCheck` instead of raising, so the menu
shell can inspect ``code`` and decide whether to prompt again
(field-level errors) or abort the current operation.

Empty input has two meanings:

- required context (register): an error for text, numbers, and dates.
- optional context (update): ``unchanged=True``, the field keeps its value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any

from ppectl.domain.errors import ErrorCode

DATE_FORMAT_HINT = "YYYY-MM-DD"

_INTEGER = re.compile(r"^[+-]?\d+$")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class FieldCheck:
    """Outcome of validating one raw input value."""

    ok: bool
    value: Any = None
    code: ErrorCode | None = None
    message: str = ""
    unchanged: bool = False


UNCHANGED = FieldCheck(ok=True, unchanged=True)


def _fail(code: ErrorCode, message: str) -> FieldCheck:
    return FieldCheck(ok=False, code=code, message=message)


def require_text(raw: str | None, field: str, *, optional: bool = False) -> FieldCheck:
    """Accept non-blank text, stripped of surrounding whitespace."""
    text = (raw or "").strip()
    if not text:
        if optional:
            return UNCHANGED
        return _fail(ErrorCode.EMPTY_FIELD, f"{field} must not be empty")
    return FieldCheck(ok=True, value=text)


def optional_text(raw: str | None) -> FieldCheck:
    """Free text that may be left blank (e.g. a return note)."""
    text = (raw or "").strip()
    if not text:
        return UNCHANGED
    return FieldCheck(ok=True, value=text)


def parse_int(raw: str | int | None, field: str, *, optional: bool = False) -> FieldCheck:
    """Parse a base-10 integer, sign allowed."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return FieldCheck(ok=True, value=raw)
    text = (raw or "").strip()
    if not text:
        if optional:
            return UNCHANGED
        return _fail(ErrorCode.INVALID_NUMBER, f"{field} is required")
    if not _INTEGER.match(text):
        return _fail(ErrorCode.INVALID_NUMBER, f"{field} must be a whole number, got {text!r}")
    try:
        value = int(text)
    except ValueError:
        # Past the interpreter's digit limit for str -> int conversion.
        return _fail(ErrorCode.INVALID_NUMBER, f"{field} has too many digits ({len(text)})")
    return FieldCheck(ok=True, value=value)


def parse_date(raw: str | date | None, field: str, *, optional: bool = False) -> FieldCheck:
    """Parse a calendar date in canonical ``YYYY-MM-DD`` form."""
    if isinstance(raw, date):
        return FieldCheck(ok=True, value=raw)
    text = (raw or "").strip()
    if not text:
        if optional:
            return UNCHANGED
        return _fail(ErrorCode.INVALID_DATE, f"{field} is required ({DATE_FORMAT_HINT})")
    if not _ISO_DATE.match(text):
        return _fail(ErrorCode.INVALID_DATE, f"{field} must use {DATE_FORMAT_HINT}, got {text!r}")
    try:
        parsed = date.fromisoformat(text)
    except ValueError:
        return _fail(ErrorCode.INVALID_DATE, f"{field} is not a calendar date: {text!r}")
    return FieldCheck(ok=True, value=parsed)


def check_date_order(
    earlier: date,
    later: date,
    *,
    earlier_field: str,
    later_field: str,
) -> FieldCheck:
    """Require ``later >= earlier``."""
    if later < earlier:
        return _fail(
            ErrorCode.DATE_ORDER_VIOLATION,
            f"{later_field} ({later.isoformat()}) is before "
            f"{earlier_field} ({earlier.isoformat()})",
        )
    return FieldCheck(ok=True, value=later)
