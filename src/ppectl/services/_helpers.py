"""Shared service-layer helper functions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ppectl.domain.errors import ErrorCode

if TYPE_CHECKING:
    from ppectl.domain.records import Loan
    from ppectl.infrastructure.inventory import Inventory


def dangling_warning(record_id: str | None, kind: str, target_id: str) -> str:
    """Warning text for a reference whose target has been removed."""
    return f"{ErrorCode.DANGLING_REFERENCE}: {record_id} references a removed {kind} ({target_id})"


def loan_party_names(inventory: Inventory, loan: Loan, warnings: list[str]) -> tuple[str, str]:
    """Resolve a loan's employee and equipment names.

    A reference whose record has been removed renders as the configured
    ``removed_label`` and adds a dangling-reference warning.
    """
    removed = inventory.display.removed_label
    employee = inventory.employees.lookup(loan.employee_id)
    equipment = inventory.equipment.lookup(loan.equipment_id)
    if employee is None:
        warnings.append(dangling_warning(loan.id, "employee", loan.employee_id))
    if equipment is None:
        warnings.append(dangling_warning(loan.id, "equipment", loan.equipment_id))
    return (
        employee.name if employee is not None else removed,
        equipment.name if equipment is not None else removed,
    )
