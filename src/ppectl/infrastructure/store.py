"""Ordered in-memory store, generic over the record kinds.

Records are addressed two ways:

- by position (``index``), which is what the menu shows and what
  callers type. Positions shift down by one after a removal, so callers
  must re-resolve any position captured before a ``remove``.
- by stable ID (``EMP-0001`` ...), claimed from a per-store counter on
  ``register``. References between records use IDs.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from ppectl.domain.errors import OutOfRangeError
from ppectl.domain.ids import TYPE_PREFIXES, format_id
from ppectl.domain.types import EntityKind

if TYPE_CHECKING:
    from ppectl.domain.records import Record


class StoreView[T: Record]:
    """Lazy, restartable ``(index, record)`` view in insertion order.

    Each iteration walks the live store afresh. An empty view is falsy,
    which is how callers detect "nothing registered".
    """

    def __init__(self, records: list[T]) -> None:
        self._records = records

    def __iter__(self) -> Iterator[tuple[int, T]]:
        return iter(enumerate(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)


class EntityStore[T: Record]:
    """Positional store for one record kind."""

    def __init__(self, kind: EntityKind | str) -> None:
        self.kind = EntityKind(kind)
        self._prefix = TYPE_PREFIXES[kind]
        self._records: list[T] = []
        self._next_value = 1

    def __len__(self) -> int:
        return len(self._records)

    def in_range(self, index: int) -> bool:
        return 0 <= index < len(self._records)

    def _require(self, index: int) -> None:
        if not self.in_range(index):
            raise OutOfRangeError(self.kind, index, len(self._records))

    def _claim_id(self) -> str:
        record_id = format_id(self._prefix, self._next_value)
        self._next_value += 1
        return record_id

    # ------------------------------------------------------------------
    # Positional API
    # ------------------------------------------------------------------

    def register(self, record: T) -> int:
        """Assign the next ID, append, and return the new position."""
        stored = record.model_copy(update={"id": self._claim_id()})
        self._records.append(stored)
        return len(self._records) - 1

    def list(self) -> StoreView[T]:
        return StoreView(self._records)

    def get(self, index: int) -> T:
        self._require(index)
        return self._records[index]

    def replace(self, index: int, record: T) -> T:
        """Write back an updated copy. The stored ID is always preserved."""
        self._require(index)
        current = self._records[index]
        stored = record.model_copy(update={"id": current.id})
        self._records[index] = stored
        return stored

    def remove(self, index: int) -> T:
        self._require(index)
        return self._records.pop(index)

    # ------------------------------------------------------------------
    # Stable-ID API
    # ------------------------------------------------------------------

    def lookup(self, record_id: str | None) -> T | None:
        """Return the record with *record_id*, or None if it is gone."""
        if record_id is None:
            return None
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def index_of(self, record_id: str | None) -> int | None:
        """Current position of *record_id*, or None if it is gone."""
        if record_id is None:
            return None
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None
