"""ReturnService — closing out loans.

INVARIANT: every stored return satisfies
``return_date >= loan.loan_date`` for the loan it references.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from ppectl.domain.errors import ErrorCode
from ppectl.domain.records import Loan, Return
from ppectl.domain.types import EntityKind
from ppectl.domain.validation import (
    UNCHANGED,
    FieldCheck,
    check_date_order,
    optional_text,
    parse_date,
    parse_int,
)
from ppectl.services._helpers import dangling_warning, loan_party_names
from ppectl.services.base import RecordService
from ppectl.services.contracts import ReturnRow, dump_validated
from ppectl.services.result import ServiceResult

logger = logging.getLogger(__name__)

_FIELDS = {"loan", "return_date", "note"}


def _check_against_loan(loan: Loan, returned: date) -> FieldCheck:
    return check_date_order(
        loan.loan_date,
        returned,
        earlier_field="loan date",
        later_field="return date",
    )


class ReturnService(RecordService):
    """Returns, each referencing one loan. The note is optional."""

    kind = EntityKind.RETURN

    def register(
        self,
        loan_index: int,
        return_date: str | date,
        note: str | None = None,
    ) -> ServiceResult:
        """Record a return. Any failure aborts it; nothing is stored."""
        op = "register_return"
        loans = self._inventory.loans
        if not loans.in_range(loan_index):
            return self._out_of_range(op, "loan", loan_index)

        returned = parse_date(return_date, "return date")
        if not returned.ok:
            return self._invalid(op, returned, field="return_date")
        loan = loans.get(loan_index)
        order = _check_against_loan(loan, returned.value)
        if not order.ok:
            logger.info("Refused return for %s: %s", loan.id, order.message)
            return self._invalid(op, order, field="return_date")

        note_check = optional_text(note)
        index = self._store.register(
            Return(
                loan_id=str(loan.id),
                return_date=returned.value,
                note=None if note_check.unchanged else note_check.value,
            )
        )
        stored = self._store.get(index)
        logger.debug("Registered return %s for %s at index %d", stored.id, loan.id, index)
        return ServiceResult(ok=True, op=op, data=self._row(index, stored, []))

    def update(self, index: int, changes: Mapping[str, Any]) -> ServiceResult:
        """Update a return's loan, date, and/or note.

        ``loan`` takes a position in the loan store. The loan and date are
        checked as the resulting pair; a loan that has since been removed
        cannot be checked and fails with ``DANGLING_REFERENCE``.
        """
        op = "update_return"
        inv = self._inventory
        if not self._store.in_range(index):
            return self._out_of_range(op, self.kind, index)

        warnings = self._unknown_fields(changes, _FIELDS)
        fields_changed: list[str] = []
        record: Return = self._store.get(index)

        loan_check = (
            parse_int(changes["loan"], "loan index", optional=True)
            if "loan" in changes
            else UNCHANGED
        )
        if not loan_check.ok:
            return self._invalid(
                op, loan_check, field="loan", index=index, fields_changed=fields_changed
            )
        date_check = (
            parse_date(changes["return_date"], "return date", optional=True)
            if "return_date" in changes
            else UNCHANGED
        )
        if not date_check.ok:
            return self._invalid(
                op, date_check, field="return_date", index=index, fields_changed=fields_changed
            )

        if not (loan_check.unchanged and date_check.unchanged):
            if loan_check.unchanged:
                loan = inv.loans.lookup(record.loan_id)
                if loan is None:
                    return self._failure(
                        op,
                        ErrorCode.DANGLING_REFERENCE,
                        f"{record.id} references a removed loan ({record.loan_id})",
                        field="return_date",
                        index=index,
                        fields_changed=fields_changed,
                    )
            elif not inv.loans.in_range(loan_check.value):
                return self._out_of_range(
                    op, "loan", loan_check.value, field="loan", fields_changed=fields_changed
                )
            else:
                loan = inv.loans.get(loan_check.value)

            returned: date = record.return_date if date_check.unchanged else date_check.value
            order = _check_against_loan(loan, returned)
            if not order.ok:
                logger.info("Refused update of %s: %s", record.id, order.message)
                return self._invalid(
                    op, order, field="return_date", index=index, fields_changed=fields_changed
                )
            record = self._store.replace(
                index,
                record.model_copy(update={"loan_id": str(loan.id), "return_date": returned}),
            )
            if not loan_check.unchanged:
                fields_changed.append("loan")
            if not date_check.unchanged:
                fields_changed.append("return_date")

        if "note" in changes:
            note_check = optional_text(changes["note"])
            if not note_check.unchanged:
                record = self._store.replace(
                    index, record.model_copy(update={"note": note_check.value})
                )
                fields_changed.append("note")

        logger.debug("Updated return %s: %s", record.id, fields_changed or "no changes")
        data = {**self._row(index, record, warnings), "fields_changed": fields_changed}
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def _row(self, index: int, record: Return, warnings: list[str]) -> dict[str, Any]:
        inv = self._inventory
        loan = inv.loans.lookup(record.loan_id)
        if loan is None:
            warnings.append(dangling_warning(record.id, "loan", record.loan_id))
            removed = inv.display.removed_label
            employee_name, equipment_name = removed, removed
        else:
            employee_name, equipment_name = loan_party_names(inv, loan, warnings)
        return dump_validated(
            ReturnRow,
            {
                "index": index,
                "id": record.id,
                "loan_id": record.loan_id,
                "loan_index": inv.loans.index_of(record.loan_id),
                "employee_name": employee_name,
                "equipment_name": equipment_name,
                "return_date": record.return_date.isoformat(),
                "note": record.note,
            },
        )
