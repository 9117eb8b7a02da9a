"""Inventory — the single owner of the four record stores.

Constructed once per process by the CLI's ``AppContext`` and handed to
every service, so there is no module-level shared state and tests can
build an isolated inventory per case.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ppectl.domain.records import Employee, Equipment, Loan, Return
from ppectl.domain.types import EntityKind
from ppectl.infrastructure.store import EntityStore

if TYPE_CHECKING:
    from ppectl.config.models import DisplayConfig, ReferencesConfig
    from ppectl.config.settings import PpeSettings

logger = logging.getLogger(__name__)


class Inventory:
    """In-memory repository: employees, equipment, loans, returns.

    Attributes:
        employees: Employee records.
        equipment: PPE records.
        loans: Loans, each referencing one employee and one equipment ID.
        returns: Returns, each referencing one loan ID.
    """

    def __init__(self, settings: PpeSettings | None = None) -> None:
        if settings is None:
            from ppectl.config.settings import PpeSettings

            settings = PpeSettings()
        self.settings = settings
        self.employees: EntityStore[Employee] = EntityStore(EntityKind.EMPLOYEE)
        self.equipment: EntityStore[Equipment] = EntityStore(EntityKind.EQUIPMENT)
        self.loans: EntityStore[Loan] = EntityStore(EntityKind.LOAN)
        self.returns: EntityStore[Return] = EntityStore(EntityKind.RETURN)
        logger.debug("Inventory initialized (on_delete=%s)", settings.references.on_delete)

    @property
    def display(self) -> DisplayConfig:
        return self.settings.display

    @property
    def references(self) -> ReferencesConfig:
        return self.settings.references

    def store(self, kind: EntityKind | str) -> EntityStore:  # type: ignore[type-arg]
        """Return the store for *kind* (``"employee"``, ``"loan"`` ...)."""
        stores: dict[EntityKind, EntityStore] = {  # type: ignore[type-arg]
            EntityKind.EMPLOYEE: self.employees,
            EntityKind.EQUIPMENT: self.equipment,
            EntityKind.LOAN: self.loans,
            EntityKind.RETURN: self.returns,
        }
        return stores[EntityKind(kind)]

    # ------------------------------------------------------------------
    # Reverse references
    # ------------------------------------------------------------------

    def loans_for_employee(self, employee_id: str | None) -> list[Loan]:
        return [loan for _, loan in self.loans.list() if loan.employee_id == employee_id]

    def loans_for_equipment(self, equipment_id: str | None) -> list[Loan]:
        return [loan for _, loan in self.loans.list() if loan.equipment_id == equipment_id]

    def returns_for_loan(self, loan_id: str | None) -> list[Return]:
        return [ret for _, ret in self.returns.list() if ret.loan_id == loan_id]
