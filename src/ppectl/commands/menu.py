"""Command: interactive PPE management menu.

The shell owns every prompt. It collects raw text, runs the domain
validators while the user is still at the prompt (re-prompting on
field-level errors), then hands the raw values to the services and
emits their results. Cross-reference and date-order failures abort the
current operation and return to the sub-menu.

Menu options are dispatched through ``option -> handler`` mappings.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from functools import partial
from typing import TYPE_CHECKING, Any

import click

from ppectl.commands._base import PpeCommand
from ppectl.domain.errors import REPROMPT_CODES
from ppectl.domain.validation import (
    DATE_FORMAT_HINT,
    FieldCheck,
    optional_text,
    parse_date,
    parse_int,
    require_text,
)
from ppectl.services.employees import EmployeeService
from ppectl.services.equipment import EquipmentService, check_expiry
from ppectl.services.loans import LoanService
from ppectl.services.returns import ReturnService

if TYPE_CHECKING:
    from ppectl.commands._context import AppContext
    from ppectl.services.base import RecordService
    from ppectl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class MainOption(IntEnum):
    EXIT = 0
    EMPLOYEES = 1
    EQUIPMENT = 2
    LOANS = 3
    RETURNS = 4


class Action(IntEnum):
    BACK = 0
    REGISTER = 1
    LIST = 2
    UPDATE = 3
    REMOVE = 4


_MAIN_LABELS: dict[MainOption, str] = {
    MainOption.EMPLOYEES: "Manage employees",
    MainOption.EQUIPMENT: "Manage PPE",
    MainOption.LOANS: "Manage loans",
    MainOption.RETURNS: "Manage returns",
    MainOption.EXIT: "Exit",
}


@dataclass(frozen=True)
class Section:
    """One sub-menu: its title, the record noun, and its handlers."""

    title: str
    noun: str
    handlers: dict[Action, Callable[[], None]]


class MenuShell:
    """Interactive menu over one :class:`Inventory`."""

    def __init__(self, app: AppContext) -> None:
        self._app = app
        inventory = app.inventory
        self.employees = EmployeeService(inventory)
        self.equipment = EquipmentService(inventory)
        self.loans = LoanService(inventory)
        self.returns = ReturnService(inventory)

        self._sections: dict[MainOption, Section] = {
            MainOption.EMPLOYEES: Section(
                "EMPLOYEE MANAGEMENT",
                "employee",
                {
                    Action.REGISTER: self.register_employee,
                    Action.LIST: partial(self._list, self.employees, "EMPLOYEE LIST"),
                    Action.UPDATE: self.update_employee,
                    Action.REMOVE: partial(self._remove, self.employees, "employee"),
                },
            ),
            MainOption.EQUIPMENT: Section(
                "PPE MANAGEMENT",
                "PPE",
                {
                    Action.REGISTER: self.register_equipment,
                    Action.LIST: partial(self._list, self.equipment, "PPE LIST"),
                    Action.UPDATE: self.update_equipment,
                    Action.REMOVE: partial(self._remove, self.equipment, "PPE"),
                },
            ),
            MainOption.LOANS: Section(
                "LOAN MANAGEMENT",
                "loan",
                {
                    Action.REGISTER: self.register_loan,
                    Action.LIST: partial(self._list, self.loans, "LOAN LIST"),
                    Action.UPDATE: self.update_loan,
                    Action.REMOVE: partial(self._remove, self.loans, "loan"),
                },
            ),
            MainOption.RETURNS: Section(
                "RETURN MANAGEMENT",
                "return",
                {
                    Action.REGISTER: self.register_return,
                    Action.LIST: partial(self._list, self.returns, "RETURN LIST"),
                    Action.UPDATE: self.update_return,
                    Action.REMOVE: partial(self._remove, self.returns, "return"),
                },
            ),
        }

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Main menu loop; returns when the user picks Exit."""
        while True:
            click.echo("\n=== PPE MANAGEMENT SYSTEM ===")
            for option, label in _MAIN_LABELS.items():
                click.echo(f"{option.value}. {label}")
            choice = int(self._ask("Choose an option", lambda raw: parse_int(raw, "option")))
            if choice == MainOption.EXIT:
                click.echo("Exiting...")
                return
            section = self._sections.get(choice)
            if section is None:
                click.echo("Invalid option! Try again.")
                continue
            self._run_section(section)

    def _run_section(self, section: Section) -> None:
        while True:
            click.echo(f"\n=== {section.title} ===")
            click.echo(f"1. Register {section.noun}")
            click.echo(f"2. List {section.noun}")
            click.echo(f"3. Update {section.noun}")
            click.echo(f"4. Remove {section.noun}")
            click.echo("0. Back")
            choice = int(self._ask("Choose an option", lambda raw: parse_int(raw, "option")))
            if choice == Action.BACK:
                click.echo("Returning to main menu...")
                return
            handler = section.handlers.get(choice)
            if handler is None:
                click.echo("Invalid option!")
                continue
            handler()

    # ------------------------------------------------------------------
    # Prompt helpers
    # ------------------------------------------------------------------

    def _ask(self, label: str, validate: Callable[[str], FieldCheck]) -> str:
        """Prompt until *validate* accepts the input; return the raw text.

        Only field-level errors re-prompt.
        """
        while True:
            raw: str = click.prompt(label, default="", show_default=False)
            check = validate(raw)
            if check.ok or check.code not in REPROMPT_CODES:
                return raw
            click.echo(f"{check.message}. Try again.")

    def _emit(self, result: ServiceResult) -> None:
        self._app.emit(result, fatal=False)

    def _list(self, service: RecordService, title: str) -> ServiceResult:
        click.echo(f"\n--- {title} ---")
        result = service.list()
        self._emit(result)
        return result

    def _pick(self, service: RecordService, prompt: str) -> tuple[int, dict[str, Any]] | None:
        """Ask for a position and resolve it. None when empty or out of range."""
        listing = service.list()
        self._emit(listing)
        if listing.data.get("empty", True):
            return None
        index = int(self._ask(prompt, lambda raw: parse_int(raw, "index")))
        result = service.get(index)
        if not result.ok:
            self._emit(result)
            return None
        return index, result.data

    def _remove(self, service: RecordService, noun: str) -> None:
        picked = self._pick(service, f"Index of the {noun} to remove")
        if picked is None:
            return
        index, row = picked
        confirmed = click.confirm(f"Remove {noun} {row['id']}?", default=False)
        self._emit(service.remove(index, confirmed=confirmed))

    # ------------------------------------------------------------------
    # Employees
    # ------------------------------------------------------------------

    def register_employee(self) -> None:
        click.echo("\n--- REGISTER EMPLOYEE ---")
        name = self._ask("Name", lambda raw: require_text(raw, "name"))
        department = self._ask("Department", lambda raw: require_text(raw, "department"))
        registration = self._ask("Registration number", lambda raw: parse_int(raw, "registration"))
        self._emit(self.employees.register(name, department, registration))

    def update_employee(self) -> None:
        picked = self._pick(self.employees, "Index of the employee to update")
        if picked is None:
            return
        index, row = picked
        changes = {
            "name": self._ask(
                f"New name [{row['name']}]",
                lambda raw: require_text(raw, "name", optional=True),
            ),
            "department": self._ask(
                f"New department [{row['department']}]",
                lambda raw: require_text(raw, "department", optional=True),
            ),
            "registration": self._ask(
                f"New registration number [{row['registration']}]",
                lambda raw: parse_int(raw, "registration", optional=True),
            ),
        }
        self._emit(self.employees.update(index, changes))

    # ------------------------------------------------------------------
    # Equipment
    # ------------------------------------------------------------------

    def register_equipment(self) -> None:
        click.echo("\n--- REGISTER PPE ---")
        name = self._ask("Name", lambda raw: require_text(raw, "name"))
        quantity = self._ask("Quantity", lambda raw: parse_int(raw, "quantity"))
        expiry = self._ask(f"Expiry date ({DATE_FORMAT_HINT}, blank for none)", check_expiry)
        self._emit(self.equipment.register(name, quantity, expiry))

    def update_equipment(self) -> None:
        picked = self._pick(self.equipment, "Index of the PPE to update")
        if picked is None:
            return
        index, row = picked
        changes = {
            "name": self._ask(
                f"New name [{row['name']}]",
                lambda raw: require_text(raw, "name", optional=True),
            ),
            "quantity": self._ask(
                f"New quantity [{row['quantity']}]",
                lambda raw: parse_int(raw, "quantity", optional=True),
            ),
            "expiry": self._ask(f"New expiry date [{row['expiry'] or '-'}]", check_expiry),
        }
        self._emit(self.equipment.update(index, changes))

    # ------------------------------------------------------------------
    # Loans
    # ------------------------------------------------------------------

    def register_loan(self) -> None:
        click.echo("\n--- REGISTER LOAN ---")
        employee = self._pick(self.employees, "Employee index")
        if employee is None:
            return
        equipment = self._pick(self.equipment, "PPE index")
        if equipment is None:
            return
        loan_date = self._ask(
            f"Loan date ({DATE_FORMAT_HINT})", lambda raw: parse_date(raw, "loan date")
        )
        expected = self._ask(
            f"Expected return date ({DATE_FORMAT_HINT})",
            lambda raw: parse_date(raw, "expected return date"),
        )
        self._emit(self.loans.register(employee[0], equipment[0], loan_date, expected))

    def update_loan(self) -> None:
        picked = self._pick(self.loans, "Index of the loan to update")
        if picked is None:
            return
        index, row = picked
        changes: dict[str, str] = {}

        self._list(self.employees, "EMPLOYEE LIST")
        changes["employee"] = self._ask(
            f"New employee index [{_current(row['employee_index'])}]",
            lambda raw: parse_int(raw, "employee index", optional=True),
        )
        self._list(self.equipment, "PPE LIST")
        changes["equipment"] = self._ask(
            f"New PPE index [{_current(row['equipment_index'])}]",
            lambda raw: parse_int(raw, "PPE index", optional=True),
        )
        changes["loan_date"] = self._ask(
            f"New loan date [{row['loan_date']}]",
            lambda raw: parse_date(raw, "loan date", optional=True),
        )
        changes["expected_return"] = self._ask(
            f"New expected return date [{row['expected_return']}]",
            lambda raw: parse_date(raw, "expected return date", optional=True),
        )
        self._emit(self.loans.update(index, changes))

    # ------------------------------------------------------------------
    # Returns
    # ------------------------------------------------------------------

    def register_return(self) -> None:
        click.echo("\n--- REGISTER RETURN ---")
        loan = self._pick(self.loans, "Loan index")
        if loan is None:
            return
        return_date = self._ask(
            f"Return date ({DATE_FORMAT_HINT})", lambda raw: parse_date(raw, "return date")
        )
        note = self._ask("Note", optional_text)
        self._emit(self.returns.register(loan[0], return_date, note))

    def update_return(self) -> None:
        picked = self._pick(self.returns, "Index of the return to update")
        if picked is None:
            return
        index, row = picked
        changes: dict[str, str] = {}

        self._list(self.loans, "LOAN LIST")
        changes["loan"] = self._ask(
            f"New loan index [{_current(row['loan_index'])}]",
            lambda raw: parse_int(raw, "loan index", optional=True),
        )
        changes["return_date"] = self._ask(
            f"New return date [{row['return_date']}]",
            lambda raw: parse_date(raw, "return date", optional=True),
        )
        changes["note"] = self._ask(f"New note [{row['note'] or '-'}]", optional_text)
        self._emit(self.returns.update(index, changes))


def _current(index: int | None) -> str:
    """Bracketed current position; ``-`` when the reference is gone."""
    return "-" if index is None else str(index)


@click.command(
    cls=PpeCommand,
    examples="""\
  ppectl
  ppectl menu
  ppectl -v menu
  ppectl --config ./ppectl.toml menu""",
)
@click.pass_obj
def menu(app: AppContext) -> None:
    """Start the interactive PPE management menu."""
    logger.debug("Starting interactive menu")
    MenuShell(app).run()
