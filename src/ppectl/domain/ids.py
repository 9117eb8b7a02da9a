"""Stable record identifiers.

Each store claims sequential IDs from its own counter: ``EMP-0001``,
``PPE-0001``, ``LOAN-0001``, ``RET-0001``. Minimum 4 digits, grows
naturally past 9999.

INVARIANT: IDs are permanent and never reused, even after removal.
Positions shift on removal; IDs do not.
"""

from __future__ import annotations

from ppectl.domain.types import EntityKind

TYPE_PREFIXES: dict[EntityKind, str] = {
    EntityKind.EMPLOYEE: "EMP-",
    EntityKind.EQUIPMENT: "PPE-",
    EntityKind.LOAN: "LOAN-",
    EntityKind.RETURN: "RET-",
}


def format_id(prefix: str, value: int) -> str:
    """Render a counter value as ``{prefix}{value:04d}``."""
    if value < 1:
        msg = f"Sequential IDs start at 1, got {value}"
        raise ValueError(msg)
    return f"{prefix}{value:04d}"
