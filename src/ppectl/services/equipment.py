"""EquipmentService — register, list, update, and remove PPE items.

Quantity carries no domain check (zero and negative are accepted).
The expiry date must parse as ``YYYY-MM-DD`` when given but is stored
as the text entered; nothing expires automatically.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ppectl.domain.records import Equipment
from ppectl.domain.types import EntityKind
from ppectl.domain.validation import FieldCheck, parse_date, parse_int, require_text
from ppectl.services.base import RecordService
from ppectl.services.contracts import EquipmentRow, dump_validated
from ppectl.services.result import ServiceResult

logger = logging.getLogger(__name__)


def check_expiry(raw: str | None, *, optional: bool = True) -> FieldCheck:
    """Validate an expiry date but keep the raw text as the value."""
    check = parse_date(raw, "expiry date", optional=optional)
    if not check.ok or check.unchanged:
        return check
    return FieldCheck(ok=True, value=(raw or "").strip())


class EquipmentService(RecordService):
    """PPE inventory items."""

    kind = EntityKind.EQUIPMENT

    def register(
        self,
        name: str,
        quantity: str | int,
        expiry: str | None = None,
    ) -> ServiceResult:
        op = "register_equipment"
        name_check = require_text(name, "name")
        if not name_check.ok:
            return self._invalid(op, name_check, field="name")
        qty_check = parse_int(quantity, "quantity")
        if not qty_check.ok:
            return self._invalid(op, qty_check, field="quantity")
        expiry_check = check_expiry(expiry)
        if not expiry_check.ok:
            return self._invalid(op, expiry_check, field="expiry")

        equipment = Equipment(
            name=name_check.value,
            quantity=qty_check.value,
            expiry=None if expiry_check.unchanged else expiry_check.value,
        )
        index = self._store.register(equipment)
        stored = self._store.get(index)
        logger.debug("Registered equipment %s at index %d", stored.id, index)
        return ServiceResult(ok=True, op=op, data=self._row(index, stored, []))

    def update(self, index: int, changes: Mapping[str, Any]) -> ServiceResult:
        """Apply the supplied fields; blank input leaves a field unchanged."""
        return self._apply_fields(
            "update_equipment",
            index,
            changes,
            {
                "name": lambda raw: require_text(raw, "name", optional=True),
                "quantity": lambda raw: parse_int(raw, "quantity", optional=True),
                "expiry": check_expiry,
            },
        )

    def _row(self, index: int, record: Equipment, warnings: list[str]) -> dict[str, Any]:
        return dump_validated(
            EquipmentRow,
            {
                "index": index,
                "id": record.id,
                "name": record.name,
                "quantity": record.quantity,
                "expiry": record.expiry,
            },
        )

    def _dependents(self, record: Equipment) -> list[str]:
        return [str(loan.id) for loan in self._inventory.loans_for_equipment(record.id)]
