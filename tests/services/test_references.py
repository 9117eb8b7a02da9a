"""Tests for removal of referenced records under both delete policies."""

from ppectl.domain.errors import ErrorCode
from ppectl.infrastructure.inventory import Inventory
from ppectl.services.employees import EmployeeService
from ppectl.services.equipment import EquipmentService
from ppectl.services.loans import LoanService
from ppectl.services.returns import ReturnService
from tests.conftest import register_return, seed_loan


class TestRejectPolicy:
    def test_employee_with_loan_is_kept(self, inventory: Inventory) -> None:
        seed_loan(inventory)
        result = EmployeeService(inventory).remove(0, confirmed=True)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == ErrorCode.REFERENCED
        assert result.error.detail["dependents"] == ["LOAN-0001"]
        assert len(inventory.employees) == 1

    def test_equipment_with_loan_is_kept(self, inventory: Inventory) -> None:
        seed_loan(inventory)
        result = EquipmentService(inventory).remove(0, confirmed=True)
        assert result.error is not None
        assert result.error.code == ErrorCode.REFERENCED

    def test_loan_with_return_is_kept(self, inventory: Inventory) -> None:
        seed_loan(inventory)
        register_return(inventory)
        result = LoanService(inventory).remove(0, confirmed=True)
        assert result.error is not None
        assert result.error.detail["dependents"] == ["RET-0001"]

    def test_decline_wins_over_reference(self, inventory: Inventory) -> None:
        seed_loan(inventory)
        result = EmployeeService(inventory).remove(0, confirmed=False)
        assert result.ok
        assert result.data["status"] == "declined"

    def test_return_removal_is_free(self, inventory: Inventory) -> None:
        seed_loan(inventory)
        register_return(inventory)
        assert ReturnService(inventory).remove(0, confirmed=True).ok
        assert LoanService(inventory).remove(0, confirmed=True).ok


class TestOrphanPolicy:
    def test_employee_removed_with_warning(self, orphan_inventory: Inventory) -> None:
        seed_loan(orphan_inventory)
        result = EmployeeService(orphan_inventory).remove(0, confirmed=True)
        assert result.ok
        assert result.warnings == ["LOAN-0001 now references a removed employee"]
        assert len(orphan_inventory.employees) == 0

    def test_loan_lists_with_removed_label(self, orphan_inventory: Inventory) -> None:
        seed_loan(orphan_inventory)
        EquipmentService(orphan_inventory).remove(0, confirmed=True)
        listing = LoanService(orphan_inventory).list()
        assert listing.ok
        row = listing.data["items"][0]
        assert row["equipment_name"] == "<removed>"
        assert row["equipment_index"] is None
        assert row["employee_name"] == "Ana"
        assert any(w.startswith("DANGLING_REFERENCE") for w in listing.warnings)

    def test_return_of_removed_loan(self, orphan_inventory: Inventory) -> None:
        seed_loan(orphan_inventory)
        register_return(orphan_inventory)
        LoanService(orphan_inventory).remove(0, confirmed=True)
        svc = ReturnService(orphan_inventory)

        row = svc.list().data["items"][0]
        assert row["loan_index"] is None
        assert row["employee_name"] == "<removed>"

        result = svc.update(0, {"return_date": "2025-01-16"})
        assert not result.ok
        assert result.error is not None
        assert result.error.code == ErrorCode.DANGLING_REFERENCE

        assert svc.update(0, {"note": "late"}).ok
