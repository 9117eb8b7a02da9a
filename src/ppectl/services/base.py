"""BaseService and RecordService — foundation for the per-record services.

Every service receives an :class:`Inventory` at construction time and
reads/writes the stores through it. ``RecordService`` implements the
operations that are identical for all four record kinds (list, get,
remove, field-by-field update); subclasses add ``register`` and the
kind-specific rules.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from ppectl.domain.errors import ErrorCode
from ppectl.domain.types import PLURALS, EntityKind
from ppectl.services.contracts import ListResultData, dump_validated
from ppectl.services.result import ServiceResult

if TYPE_CHECKING:
    from ppectl.domain.records import Record
    from ppectl.domain.validation import FieldCheck
    from ppectl.infrastructure.inventory import Inventory
    from ppectl.infrastructure.store import EntityStore

logger = logging.getLogger(__name__)

FieldValidator = Callable[[Any], "FieldCheck"]


class BaseService:
    """Abstract base for all service-layer classes."""

    def __init__(self, inventory: Inventory) -> None:
        self._inventory = inventory

    @staticmethod
    def _failure(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return ServiceResult.failure(op, code, message, **detail)

    def _invalid(self, op: str, check: FieldCheck, **detail: Any) -> ServiceResult:
        """Turn a failed :class:`FieldCheck` into a failed result."""
        code = str(check.code) if check.code else "VALIDATION_FAILED"
        return self._failure(op, code, check.message, **detail)

    def _out_of_range(
        self, op: str, kind: EntityKind | str, index: int, **detail: Any
    ) -> ServiceResult:
        entity = EntityKind(kind)
        size = len(self._inventory.store(entity))
        return self._failure(
            op,
            ErrorCode.OUT_OF_RANGE,
            f"No {entity} at index {index} (registered: {size})",
            kind=entity.value,
            index=index,
            size=size,
            **detail,
        )


class RecordService(BaseService):
    """Operations shared by the four record kinds.

    Subclasses set ``kind`` and implement ``_row`` (render a stored
    record as a payload dict) and, for referenced kinds, ``_dependents``.
    """

    kind: ClassVar[EntityKind]

    @property
    def _store(self) -> EntityStore[Any]:
        return self._inventory.store(self.kind)

    @property
    def _plural(self) -> str:
        return PLURALS[self.kind]

    def _row(self, index: int, record: Any, warnings: list[str]) -> dict[str, Any]:
        raise NotImplementedError

    def _dependents(self, record: Any) -> list[str]:
        """IDs of records that reference *record*. None by default."""
        return []

    def _unknown_fields(self, changes: Mapping[str, Any], known: set[str]) -> list[str]:
        return [f"Unknown field ignored: {key}" for key in changes if key not in known]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list(self) -> ServiceResult:
        """List every record in insertion order.

        An empty store is a success with ``empty=True``, never an error.
        """
        warnings: list[str] = []
        items = [self._row(index, record, warnings) for index, record in self._store.list()]
        data = dump_validated(
            ListResultData,
            {"kind": self.kind, "count": len(items), "empty": not items, "items": items},
        )
        return ServiceResult(ok=True, op=f"list_{self._plural}", data=data, warnings=warnings)

    def get(self, index: int) -> ServiceResult:
        op = f"get_{self.kind}"
        if not self._store.in_range(index):
            return self._out_of_range(op, self.kind, index)
        warnings: list[str] = []
        row = self._row(index, self._store.get(index), warnings)
        return ServiceResult(ok=True, op=op, data=row, warnings=warnings)

    def remove(self, index: int, *, confirmed: bool) -> ServiceResult:
        """Remove the record at *index* once the caller has confirmed.

        A declined confirmation is a success with ``status="declined"``
        and leaves the store untouched. Records still referenced by a
        loan or return are handled per ``[references] on_delete``.
        """
        op = f"remove_{self.kind}"
        if not self._store.in_range(index):
            return self._out_of_range(op, self.kind, index)
        record: Record = self._store.get(index)

        if not confirmed:
            logger.info("Removal of %s %s declined", self.kind, record.id)
            return ServiceResult(
                ok=True,
                op=op,
                data={"status": "declined", "index": index, "id": record.id},
            )

        warnings: list[str] = []
        dependents = self._dependents(record)
        if dependents:
            if self._inventory.references.on_delete == "reject":
                logger.info("Refused to remove %s: referenced by %s", record.id, dependents)
                return self._failure(
                    op,
                    ErrorCode.REFERENCED,
                    f"{record.id} is still referenced by {', '.join(dependents)}",
                    index=index,
                    id=record.id,
                    dependents=dependents,
                )
            warnings.extend(f"{dep} now references a removed {self.kind}" for dep in dependents)

        self._store.remove(index)
        logger.debug("Removed %s %s from index %d", self.kind, record.id, index)
        return ServiceResult(
            ok=True,
            op=op,
            data={"status": "removed", "index": index, "id": record.id, "count": len(self._store)},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Update helpers
    # ------------------------------------------------------------------

    def _apply_fields(
        self,
        op: str,
        index: int,
        changes: Mapping[str, Any],
        validators: dict[str, FieldValidator],
    ) -> ServiceResult:
        """Validate and commit *changes* one field at a time.

        Fields are applied in ``validators`` order. The first failing
        field stops the call; fields committed before it stay committed
        and are listed in ``detail["fields_changed"]``.
        """
        if not self._store.in_range(index):
            return self._out_of_range(op, self.kind, index)

        warnings = self._unknown_fields(changes, set(validators))
        fields_changed: list[str] = []
        record = self._store.get(index)

        for key, validate in validators.items():
            if key not in changes:
                continue
            check = validate(changes[key])
            if not check.ok:
                return self._invalid(
                    op, check, field=key, index=index, fields_changed=fields_changed
                )
            if check.unchanged:
                continue
            record = self._store.replace(index, record.model_copy(update={key: check.value}))
            fields_changed.append(key)

        logger.debug("Updated %s %s: %s", self.kind, record.id, fields_changed or "no changes")
        data = {**self._row(index, record, warnings), "fields_changed": fields_changed}
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)
