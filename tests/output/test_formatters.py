"""Tests for record line formatting and format_result dispatch."""

import json

from ppectl.config.models import DisplayConfig
from ppectl.output.formatters import (
    OutputSettings,
    format_employee,
    format_equipment,
    format_loan,
    format_result,
    format_return,
    format_row,
)
from ppectl.services.result import ServiceError, ServiceResult

DISPLAY = DisplayConfig()


class TestRecordLines:
    def test_employee(self) -> None:
        row = {"name": "Ana", "department": "Safety", "registration": 1001}
        assert format_employee(row, DISPLAY) == (
            "Name: Ana             | Dept: Safety     | Registration: 001001"
        )

    def test_equipment(self) -> None:
        row = {"name": "Helmet", "quantity": 10, "expiry": "2026-01-01"}
        assert format_equipment(row, DISPLAY) == (
            "Name: Helmet          | Quantity:  10 | Expiry: 2026-01-01"
        )

    def test_equipment_without_expiry(self) -> None:
        row = {"name": "Gloves", "quantity": 3, "expiry": None}
        assert format_equipment(row, DISPLAY).endswith("Expiry:       none")

    def test_loan(self) -> None:
        row = {
            "employee_name": "Ana",
            "equipment_name": "Helmet",
            "loan_date": "2025-01-10",
            "expected_return": "2025-01-20",
        }
        line = format_loan(row, DISPLAY)
        assert line.startswith("Employee: Ana             | PPE: Helmet          |")
        assert line.endswith("Loaned: 2025-01-10 | Due: 2025-01-20")

    def test_return_without_note(self) -> None:
        row = {
            "employee_name": "Ana",
            "equipment_name": "Helmet",
            "return_date": "2025-01-15",
            "note": None,
        }
        assert format_return(row, DISPLAY).endswith("Returned: 2025-01-15 | Note: none")

    def test_long_names_are_not_truncated(self) -> None:
        row = {"name": "Bartholomew Jones", "department": "Maintenance", "registration": 7}
        line = format_employee(row, DISPLAY)
        assert "Bartholomew Jones |" in line
        assert "Maintenance |" in line

    def test_widths_from_config(self) -> None:
        display = DisplayConfig(registration_digits=4, name_width=5)
        row = {"kind": "employee", "name": "Ana", "department": "Safety", "registration": 7}
        assert format_row(row, display).startswith("Name: Ana   |")
        assert format_row(row, display).endswith("Registration: 0007")


    def test_expiry_width_from_config(self) -> None:
        display = DisplayConfig(expiry_width=12)
        row = {"kind": "equipment", "name": "Helmet", "quantity": 1, "expiry": "2026-01-01"}
        assert format_row(row, display).endswith("Expiry:   2026-01-01")


class TestFormatResult:
    def test_json(self) -> None:
        result = ServiceResult(ok=True, op="list_loans", data={"count": 0})
        payload = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert payload["op"] == "list_loans"
        assert payload["data"] == {"count": 0}

    def test_quiet(self) -> None:
        result = ServiceResult(ok=True, op="register_employee", data={"id": "EMP-0001"})
        assert format_result(result, settings=OutputSettings(quiet=True)) == "OK: register_employee"

    def test_default_is_rich(self) -> None:
        result = ServiceResult(
            ok=False,
            op="get_loan",
            error=ServiceError(code="OUT_OF_RANGE", message="No loan at index 0 (registered: 0)"),
        )
        out = format_result(result)
        assert "ERROR" in out
        assert "OUT_OF_RANGE" in out
