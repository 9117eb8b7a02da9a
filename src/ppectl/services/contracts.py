"""Typed payload contracts for service and adapter boundaries.

Rows carry every field the shell needs to render a record, so output
code never reaches back into the stores.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from ppectl.domain.types import EntityKind


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="json")


class EmployeeRow(BaseModel):
    """One employee as rendered: name, department, registration."""

    kind: EntityKind = EntityKind.EMPLOYEE
    index: int
    id: str
    name: str
    department: str
    registration: int


class EquipmentRow(BaseModel):
    """One PPE item. ``expiry`` is the raw text as entered, or None."""

    kind: EntityKind = EntityKind.EQUIPMENT
    index: int
    id: str
    name: str
    quantity: int
    expiry: str | None = None


class LoanRow(BaseModel):
    """One loan with its parties resolved to names.

    ``employee_index``/``equipment_index`` are None when the referenced
    record has been removed.
    """

    kind: EntityKind = EntityKind.LOAN
    index: int
    id: str
    employee_id: str
    equipment_id: str
    employee_index: int | None = None
    equipment_index: int | None = None
    employee_name: str
    equipment_name: str
    loan_date: str
    expected_return: str


class ReturnRow(BaseModel):
    """One return with the loan's parties resolved to names."""

    kind: EntityKind = EntityKind.RETURN
    index: int
    id: str
    loan_id: str
    loan_index: int | None = None
    employee_name: str
    equipment_name: str
    return_date: str
    note: str | None = None


class ListResultData(BaseModel):
    """Payload contract for every ``list_*`` operation."""

    model_config = ConfigDict(extra="allow")

    kind: EntityKind
    count: int
    empty: bool
    items: list[dict[str, Any]]
