"""Record line formatting and the format_result dispatcher.

Record lines use the fixed-width ``Label: value | Label: value`` layout.
Widths come from the ``[display]`` config section.

The CLI renders ServiceResult for humans (Rich) or machines (--json).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from ppectl.config.models import DisplayConfig
from ppectl.domain.types import EntityKind

if TYPE_CHECKING:
    from ppectl.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output mode flags plus display widths."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    display: DisplayConfig = Field(default_factory=DisplayConfig)


def format_employee(row: dict[str, Any], display: DisplayConfig) -> str:
    """``Name: Ana             | Dept: Safety     | Registration: 001001``"""
    return (
        f"Name: {row['name']:<{display.name_width}} | "
        f"Dept: {row['department']:<{display.department_width}} | "
        f"Registration: {row['registration']:0{display.registration_digits}d}"
    )


def format_equipment(row: dict[str, Any], display: DisplayConfig) -> str:
    expiry = row.get("expiry") or display.none_label
    return (
        f"Name: {row['name']:<{display.name_width}} | "
        f"Quantity: {row['quantity']:>{display.quantity_width}} | "
        f"Expiry: {expiry:>{display.expiry_width}}"
    )


def format_loan(row: dict[str, Any], display: DisplayConfig) -> str:
    return (
        f"Employee: {row['employee_name']:<{display.name_width}} | "
        f"PPE: {row['equipment_name']:<{display.name_width}} | "
        f"Loaned: {row['loan_date']} | "
        f"Due: {row['expected_return']}"
    )


def format_return(row: dict[str, Any], display: DisplayConfig) -> str:
    note = row.get("note") or display.none_label
    return (
        f"Employee: {row['employee_name']:<{display.name_width}} | "
        f"PPE: {row['equipment_name']:<{display.name_width}} | "
        f"Returned: {row['return_date']} | "
        f"Note: {note}"
    )


_ROW_FORMATTERS = {
    EntityKind.EMPLOYEE: format_employee,
    EntityKind.EQUIPMENT: format_equipment,
    EntityKind.LOAN: format_loan,
    EntityKind.RETURN: format_return,
}


def format_row(row: dict[str, Any], display: DisplayConfig | None = None) -> str:
    """Format a service row by its ``kind``."""
    formatter = _ROW_FORMATTERS[EntityKind(row["kind"])]
    return formatter(row, display or DisplayConfig())


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    Dispatches to JSON, quiet, or Rich rendering based on *settings*.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        from ppectl.output.renderers import render_quiet

        return render_quiet(result)

    from ppectl.output.renderers import render_result

    return render_result(result, display=settings.display, verbose=settings.verbose)
