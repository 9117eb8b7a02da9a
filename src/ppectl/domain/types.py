"""Record kinds tracked by the inventory."""

from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    """The four record kinds, one store each."""

    EMPLOYEE = "employee"
    EQUIPMENT = "equipment"
    LOAN = "loan"
    RETURN = "return"


PLURALS: dict[EntityKind, str] = {
    EntityKind.EMPLOYEE: "employees",
    EntityKind.EQUIPMENT: "equipment",
    EntityKind.LOAN: "loans",
    EntityKind.RETURN: "returns",
}
