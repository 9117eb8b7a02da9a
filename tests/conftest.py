"""Shared pytest fixtures and test helpers for ppectl tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from ppectl.config.settings import PpeSettings
from ppectl.infrastructure.inventory import Inventory


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host PPECTL_* variables out of every test."""
    for var in ("PPECTL_CONFIG", "PPECTL_REFERENCES__ON_DELETE", "PPECTL_VERBOSE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> PpeSettings:
    """Default settings with config discovery rooted in a temp directory."""
    return PpeSettings.from_cli(start=tmp_path)


@pytest.fixture
def inventory(settings: PpeSettings) -> Inventory:
    """Empty inventory using the default ``reject`` delete policy."""
    return Inventory(settings)


@pytest.fixture
def orphan_inventory(tmp_path: Path) -> Inventory:
    """Empty inventory whose removals leave dependents dangling."""
    settings = PpeSettings.from_cli(start=tmp_path, references={"on_delete": "orphan"})
    return Inventory(settings)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI tests from an empty temp directory (no ppectl.toml)."""
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers (used across service test modules)
# ---------------------------------------------------------------------------


def register_employee(
    inventory: Inventory,
    name: str = "Ana",
    department: str = "Safety",
    registration: str | int = "1001",
) -> dict[str, Any]:
    """Register an employee via EmployeeService, asserting success."""
    from ppectl.services.employees import EmployeeService

    result = EmployeeService(inventory).register(name, department, registration)
    assert result.ok, result.error
    return result.data


def register_equipment(
    inventory: Inventory,
    name: str = "Helmet",
    quantity: str | int = "10",
    expiry: str | None = "2026-01-01",
) -> dict[str, Any]:
    """Register a PPE item via EquipmentService, asserting success."""
    from ppectl.services.equipment import EquipmentService

    result = EquipmentService(inventory).register(name, quantity, expiry)
    assert result.ok, result.error
    return result.data


def register_loan(
    inventory: Inventory,
    employee_index: int = 0,
    equipment_index: int = 0,
    loan_date: str = "2025-01-10",
    expected_return: str = "2025-01-20",
) -> dict[str, Any]:
    """Register a loan via LoanService, asserting success."""
    from ppectl.services.loans import LoanService

    result = LoanService(inventory).register(
        employee_index, equipment_index, loan_date, expected_return
    )
    assert result.ok, result.error
    return result.data


def register_return(
    inventory: Inventory,
    loan_index: int = 0,
    return_date: str = "2025-01-15",
    note: str | None = None,
) -> dict[str, Any]:
    """Register a return via ReturnService, asserting success."""
    from ppectl.services.returns import ReturnService

    result = ReturnService(inventory).register(loan_index, return_date, note)
    assert result.ok, result.error
    return result.data


def seed_loan(inventory: Inventory) -> dict[str, Any]:
    """Ana borrows a Helmet from 2025-01-10 to 2025-01-20."""
    register_employee(inventory)
    register_equipment(inventory)
    return register_loan(inventory)
