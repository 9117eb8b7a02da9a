"""EmployeeService — register, list, update, and remove employees."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ppectl.domain.records import Employee
from ppectl.domain.types import EntityKind
from ppectl.domain.validation import parse_int, require_text
from ppectl.services.base import RecordService
from ppectl.services.contracts import EmployeeRow, dump_validated
from ppectl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class EmployeeService(RecordService):
    """Employees who borrow equipment. Registration numbers need not be unique."""

    kind = EntityKind.EMPLOYEE

    def register(self, name: str, department: str, registration: str | int) -> ServiceResult:
        op = "register_employee"
        name_check = require_text(name, "name")
        if not name_check.ok:
            return self._invalid(op, name_check, field="name")
        dept_check = require_text(department, "department")
        if not dept_check.ok:
            return self._invalid(op, dept_check, field="department")
        reg_check = parse_int(registration, "registration")
        if not reg_check.ok:
            return self._invalid(op, reg_check, field="registration")

        employee = Employee(
            name=name_check.value,
            department=dept_check.value,
            registration=reg_check.value,
        )
        index = self._store.register(employee)
        stored = self._store.get(index)
        logger.debug("Registered employee %s at index %d", stored.id, index)
        return ServiceResult(ok=True, op=op, data=self._row(index, stored, []))

    def update(self, index: int, changes: Mapping[str, Any]) -> ServiceResult:
        """Apply the supplied fields; blank input leaves a field unchanged."""
        return self._apply_fields(
            "update_employee",
            index,
            changes,
            {
                "name": lambda raw: require_text(raw, "name", optional=True),
                "department": lambda raw: require_text(raw, "department", optional=True),
                "registration": lambda raw: parse_int(raw, "registration", optional=True),
            },
        )

    def _row(self, index: int, record: Employee, warnings: list[str]) -> dict[str, Any]:
        return dump_validated(
            EmployeeRow,
            {
                "index": index,
                "id": record.id,
                "name": record.name,
                "department": record.department,
                "registration": record.registration,
            },
        )

    def _dependents(self, record: Employee) -> list[str]:
        return [str(loan.id) for loan in self._inventory.loans_for_employee(record.id)]
