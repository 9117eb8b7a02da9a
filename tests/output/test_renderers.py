"""Tests for Rich renderers and quiet mode."""

from ppectl.infrastructure.inventory import Inventory
from ppectl.output.renderers import render_quiet, render_result
from ppectl.services.employees import EmployeeService
from ppectl.services.loans import LoanService
from ppectl.services.result import ServiceError, ServiceResult
from tests.conftest import register_employee, seed_loan


class TestRenderList:
    def test_empty_store(self, inventory: Inventory) -> None:
        out = render_result(EmployeeService(inventory).list())
        assert out == "No employees registered."

    def test_rows_prefixed_by_index(self, inventory: Inventory) -> None:
        register_employee(inventory)
        register_employee(inventory, "Bia", registration="22")
        lines = render_result(EmployeeService(inventory).list()).splitlines()
        assert lines[0].startswith("0 - Name: Ana")
        assert lines[0].endswith("Registration: 001001")
        assert lines[1].startswith("1 - Name: Bia")

    def test_loan_rows(self, inventory: Inventory) -> None:
        seed_loan(inventory)
        out = render_result(LoanService(inventory).list())
        assert out.startswith("0 - Employee: Ana")
        assert "Due: 2025-01-20" in out


class TestRenderMutation:
    def test_register(self, inventory: Inventory) -> None:
        out = render_result(EmployeeService(inventory).register("Ana", "Safety", "1001"))
        assert out.splitlines()[0] == "OK  register_employee"
        assert "id: EMP-0001" in out
        assert "index: 0" in out

    def test_update_lists_changed_fields(self, inventory: Inventory) -> None:
        register_employee(inventory)
        out = render_result(EmployeeService(inventory).update(0, {"name": "Ana Maria"}))
        assert "fields_changed: name" in out

    def test_update_nothing_changed(self, inventory: Inventory) -> None:
        register_employee(inventory)
        out = render_result(EmployeeService(inventory).update(0, {}))
        assert "fields_changed: none" in out


class TestRenderRemoval:
    def test_declined(self, inventory: Inventory) -> None:
        register_employee(inventory)
        out = render_result(EmployeeService(inventory).remove(0, confirmed=False))
        assert out.splitlines()[0] == "DECLINED  remove_employee"
        assert "EMP-0001 was not removed." in out

    def test_removed(self, inventory: Inventory) -> None:
        register_employee(inventory)
        out = render_result(EmployeeService(inventory).remove(0, confirmed=True))
        assert "OK  remove_employee" in out
        assert "status: removed" in out


class TestRenderError:
    def _failure(self) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op="register_loan",
            error=ServiceError(
                code="DATE_ORDER_VIOLATION",
                message="expected return date (2025-01-05) is before loan date (2025-01-10)",
                detail={"field": "expected_return"},
            ),
        )

    def test_error_line(self) -> None:
        out = render_result(self._failure())
        assert out.startswith("ERROR  register_loan [DATE_ORDER_VIOLATION]")
        assert "is before loan date" in out
        assert "detail" not in out

    def test_verbose_shows_detail(self) -> None:
        out = render_result(self._failure(), verbose=True)
        assert "field: expected_return" in out


class TestWarnings:
    def test_only_inline_when_verbose(self) -> None:
        result = ServiceResult(
            ok=True, op="update_employee", data={"id": "EMP-0001", "index": 0}, warnings=["careful"]
        )
        assert "careful" not in render_result(result)
        assert "WARNING careful" in render_result(result, verbose=True)


class TestRenderQuiet:
    def test_list_ids(self, inventory: Inventory) -> None:
        register_employee(inventory)
        register_employee(inventory, "Bia")
        assert render_quiet(EmployeeService(inventory).list()) == "EMP-0001\nEMP-0002"

    def test_empty_list(self, inventory: Inventory) -> None:
        assert render_quiet(EmployeeService(inventory).list()) == "EMPTY: list_employees"

    def test_declined(self, inventory: Inventory) -> None:
        register_employee(inventory)
        result = EmployeeService(inventory).remove(0, confirmed=False)
        assert render_quiet(result) == "DECLINED: remove_employee"

    def test_error(self) -> None:
        result = ServiceResult(
            ok=False, op="get_employee", error=ServiceError(code="OUT_OF_RANGE", message="nope")
        )
        assert render_quiet(result) == "ERROR: get_employee — nope"
