"""Record models for the four stores.

References between records hold stable IDs (``employee_id``,
``loan_id``), never positions, so removing one record cannot silently
redirect another record's reference to an unrelated neighbour.
A reference whose target is gone is detected on lookup.

Records are frozen; updates produce a copy via ``model_copy``.
"""

from __future__ import annotations

from datetime import date
from typing import Self

from pydantic import BaseModel, model_validator


class Record(BaseModel):
    """Base for stored records. ``id`` is assigned by the store on register."""

    model_config = {"frozen": True}

    id: str | None = None


class Employee(Record):
    """An employee who may borrow equipment."""

    name: str
    department: str
    registration: int


class Equipment(Record):
    """A PPE item. ``expiry`` is informational and kept as entered."""

    name: str
    quantity: int
    expiry: str | None = None


class Loan(Record):
    """Equipment checked out by an employee."""

    employee_id: str
    equipment_id: str
    loan_date: date
    expected_return: date

    @model_validator(mode="after")
    def _check_dates(self) -> Self:
        if self.expected_return < self.loan_date:
            msg = (
                f"expected return {self.expected_return.isoformat()} "
                f"is before loan date {self.loan_date.isoformat()}"
            )
            raise ValueError(msg)
        return self


class Return(Record):
    """Closes out a loan with the actual return date."""

    loan_id: str
    return_date: date
    note: str | None = None
