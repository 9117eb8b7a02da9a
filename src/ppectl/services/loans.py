"""LoanService — equipment checked out by employees.

INVARIANT: every stored loan satisfies ``expected_return >= loan_date``.
INVARIANT: moving a loan date never leaves one of its returns dated
before the loan.

Creation picks the employee and equipment by their current position;
the loan stores their stable IDs.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from ppectl.domain.errors import ErrorCode
from ppectl.domain.records import Loan
from ppectl.domain.types import EntityKind
from ppectl.domain.validation import UNCHANGED, check_date_order, parse_date, parse_int
from ppectl.services._helpers import loan_party_names
from ppectl.services.base import RecordService
from ppectl.services.contracts import LoanRow, dump_validated
from ppectl.services.result import ServiceResult

logger = logging.getLogger(__name__)

_FIELDS = {"employee", "equipment", "loan_date", "expected_return"}


class LoanService(RecordService):
    """Loans referencing one employee and one equipment item."""

    kind = EntityKind.LOAN

    def register(
        self,
        employee_index: int,
        equipment_index: int,
        loan_date: str | date,
        expected_return: str | date,
    ) -> ServiceResult:
        """Create a loan. Any failure aborts it; nothing is stored."""
        op = "register_loan"
        inv = self._inventory
        if not inv.employees.in_range(employee_index):
            return self._out_of_range(op, "employee", employee_index)
        if not inv.equipment.in_range(equipment_index):
            return self._out_of_range(op, "equipment", equipment_index)

        start = parse_date(loan_date, "loan date")
        if not start.ok:
            return self._invalid(op, start, field="loan_date")
        due = parse_date(expected_return, "expected return date")
        if not due.ok:
            return self._invalid(op, due, field="expected_return")
        order = check_date_order(
            start.value,
            due.value,
            earlier_field="loan date",
            later_field="expected return date",
        )
        if not order.ok:
            logger.info("Refused loan: %s", order.message)
            return self._invalid(op, order, field="expected_return")

        employee = inv.employees.get(employee_index)
        equipment = inv.equipment.get(equipment_index)
        index = self._store.register(
            Loan(
                employee_id=str(employee.id),
                equipment_id=str(equipment.id),
                loan_date=start.value,
                expected_return=due.value,
            )
        )
        stored = self._store.get(index)
        logger.debug("Registered loan %s at index %d", stored.id, index)
        return ServiceResult(ok=True, op=op, data=self._row(index, stored, []))

    def update(self, index: int, changes: Mapping[str, Any]) -> ServiceResult:
        """Update a loan's parties and/or dates.

        ``employee``/``equipment`` take a position in their store.
        ``loan_date``/``expected_return`` are checked as the resulting
        pair, so both can move in one call. Blank input leaves a field
        unchanged; a refused change keeps the stored value.
        """
        op = "update_loan"
        inv = self._inventory
        if not self._store.in_range(index):
            return self._out_of_range(op, self.kind, index)

        warnings = self._unknown_fields(changes, _FIELDS)
        fields_changed: list[str] = []
        record: Loan = self._store.get(index)

        for key, ref_store in (("employee", inv.employees), ("equipment", inv.equipment)):
            if key not in changes:
                continue
            check = parse_int(changes[key], f"{key} index", optional=True)
            if not check.ok:
                return self._invalid(
                    op, check, field=key, index=index, fields_changed=fields_changed
                )
            if check.unchanged:
                continue
            if not ref_store.in_range(check.value):
                return self._out_of_range(
                    op, key, check.value, field=key, fields_changed=fields_changed
                )
            target = ref_store.get(check.value)
            record = self._store.replace(
                index, record.model_copy(update={f"{key}_id": str(target.id)})
            )
            fields_changed.append(key)

        start = (
            parse_date(changes["loan_date"], "loan date", optional=True)
            if "loan_date" in changes
            else UNCHANGED
        )
        if not start.ok:
            return self._invalid(
                op, start, field="loan_date", index=index, fields_changed=fields_changed
            )
        due = (
            parse_date(changes["expected_return"], "expected return date", optional=True)
            if "expected_return" in changes
            else UNCHANGED
        )
        if not due.ok:
            return self._invalid(
                op, due, field="expected_return", index=index, fields_changed=fields_changed
            )

        if not (start.unchanged and due.unchanged):
            new_start: date = record.loan_date if start.unchanged else start.value
            new_due: date = record.expected_return if due.unchanged else due.value
            order = check_date_order(
                new_start,
                new_due,
                earlier_field="loan date",
                later_field="expected return date",
            )
            if not order.ok:
                logger.info("Refused update of %s: %s", record.id, order.message)
                return self._invalid(
                    op, order, field="expected_return", index=index, fields_changed=fields_changed
                )
            if not start.unchanged:
                early = [
                    ret
                    for ret in inv.returns_for_loan(record.id)
                    if ret.return_date < new_start
                ]
                if early:
                    return self._failure(
                        op,
                        ErrorCode.DATE_ORDER_VIOLATION,
                        f"loan date ({new_start.isoformat()}) is after the return date of "
                        + ", ".join(f"{ret.id} ({ret.return_date.isoformat()})" for ret in early),
                        field="loan_date",
                        index=index,
                        fields_changed=fields_changed,
                    )
            record = self._store.replace(
                index,
                record.model_copy(update={"loan_date": new_start, "expected_return": new_due}),
            )
            if not start.unchanged:
                fields_changed.append("loan_date")
            if not due.unchanged:
                fields_changed.append("expected_return")

        logger.debug("Updated loan %s: %s", record.id, fields_changed or "no changes")
        data = {**self._row(index, record, warnings), "fields_changed": fields_changed}
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def _row(self, index: int, record: Loan, warnings: list[str]) -> dict[str, Any]:
        inv = self._inventory
        employee_name, equipment_name = loan_party_names(inv, record, warnings)
        return dump_validated(
            LoanRow,
            {
                "index": index,
                "id": record.id,
                "employee_id": record.employee_id,
                "equipment_id": record.equipment_id,
                "employee_index": inv.employees.index_of(record.employee_id),
                "equipment_index": inv.equipment.index_of(record.equipment_id),
                "employee_name": employee_name,
                "equipment_name": equipment_name,
                "loan_date": record.loan_date.isoformat(),
                "expected_return": record.expected_return.isoformat(),
            },
        )

    def _dependents(self, record: Loan) -> list[str]:
        return [str(ret.id) for ret in self._inventory.returns_for_loan(record.id)]
