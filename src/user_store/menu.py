"""Interactive text menu over a :class:`UserRepository`.

Input and output are plain callables so the loop can be driven from tests
with a scripted list of answers.
"""

from __future__ import annotations

import logging
from typing import Callable

from user_store.codec import parse_float, parse_int
from user_store.render import format_table
from user_store.repository import UserRepository
from user_store.schemas.user import UserRecord, is_valid_email, normalize_gender

logger = logging.getLogger(__name__)

MENU = """\
============== USER RECORDS ==============
1) Add
2) List
3) Find by id
4) Update
5) Delete
6) Clear all
0) Exit
=========================================="""

MAX_AGE = 120


class MenuSession:
    """One run of the menu loop against a repository."""

    def __init__(
        self,
        repo: UserRepository,
        input_fn: Callable[[str], str] | None = None,
        output_fn: Callable[[str], None] | None = None,
        email_width: int = 30,
    ) -> None:
        self._repo = repo
        self._input = input_fn or input
        self._output = output_fn or print
        self._email_width = email_width
        self._actions: dict[str, Callable[[], None]] = {
            "1": self.add_user,
            "2": self.list_users,
            "3": self.find_user,
            "4": self.update_user,
            "5": self.delete_user,
            "6": self.clear_all,
        }

    def run(self) -> None:
        """Show the menu until the user picks 0 or input runs out."""
        try:
            while True:
                self._output(MENU)
                choice = self._input("Option: ").strip()
                if choice == "0":
                    break
                action = self._actions.get(choice)
                if action is None:
                    self._output("Invalid option.")
                    continue
                action()
        except EOFError:
            logger.debug("Input closed, leaving menu")
        self._output(f"Bye. Data is saved in '{self._repo.path}'.")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def add_user(self) -> None:
        self._output("\n-- Add user --")
        name = self._read_required("Name: ")
        email = self._read_email("Email: ")
        age = self._read_int(f"Age (0-{MAX_AGE}): ", 0, MAX_AGE)
        gender = self._read_gender("Gender (M/F): ")
        salary = self._read_salary("Salary: ", 0.0)

        record = self._repo.add(name, email, age, salary, gender)
        self._output(f"\nAdded with id {record.id}")

    def list_users(self) -> None:
        self._output("\n-- User list --")
        records = self._repo.list_users()
        if not records:
            self._output("(no records)")
            return
        self._show(records)

    def find_user(self) -> None:
        self._output("\n-- Find by id --")
        record = self._repo.get(self._read_id("Id: "))
        if record is None:
            self._output("Not found.")
        else:
            self._show([record])

    def update_user(self) -> None:
        self._output("\n-- Update user --")
        records = self._repo.list_users()
        if not records:
            self._output("There are no users to update.")
            return
        self._output("Available users:")
        self._show(records)

        record_id = self._read_id("Id of the user to update: ")
        current = self._repo.get(record_id)
        if current is None:
            self._output("No user with that id.")
            return

        self._output(f"\nUpdating: {current.name} (id {current.id})")
        self._output("Leave a field blank to keep its current value.")
        name = self._read_optional(f"Name [{current.name}]: ", current.name)
        email = self._read_email(f"Email [{current.email}]: ", current.email)
        age = self._read_int(f"Age [{current.age}]: ", 0, MAX_AGE, current.age)
        gender = self._read_gender(f"Gender [{current.gender}]: ", current.gender)
        salary = self._read_salary(f"Salary [{current.salary:.2f}]: ", current.salary)

        if self._repo.update(record_id, name, email, age, salary, gender):
            self._output("User updated.")
        else:
            self._output("Could not update.")

    def delete_user(self) -> None:
        self._output("\n-- Delete user --")
        record_id = self._read_id("Id to delete: ")
        record = self._repo.get(record_id)
        if record is None:
            self._output("No user with that id.")
            return
        if self._confirm(f'Delete "{record.name}"? (y/n): '):
            self._output("Deleted." if self._repo.delete(record_id) else "Could not delete.")
        else:
            self._output("Cancelled.")

    def clear_all(self) -> None:
        if self._confirm("\nThis deletes ALL records. Continue? (y/n): "):
            self._repo.clear()
            self._output("All records deleted.")
        else:
            self._output("Cancelled.")

    # ------------------------------------------------------------------
    # Prompt helpers (each re-asks until the answer is acceptable)
    # ------------------------------------------------------------------

    def _show(self, records: list[UserRecord]) -> None:
        self._output(format_table(records, email_width=self._email_width))

    def _confirm(self, prompt: str) -> bool:
        return self._input(prompt).strip().lower() in ("y", "yes")

    def _read_required(self, prompt: str) -> str:
        while True:
            value = self._input(prompt).strip()
            if value:
                return value
            self._output("A value is required.")

    def _read_optional(self, prompt: str, current: str) -> str:
        value = self._input(prompt).strip()
        return value or current

    def _read_email(self, prompt: str, current: str | None = None) -> str:
        while True:
            value = self._input(prompt).strip()
            if not value and current is not None:
                return current
            if is_valid_email(value):
                return value
            self._output("Invalid email.")

    def _read_int(self, prompt: str, low: int, high: int, current: int | None = None) -> int:
        while True:
            raw = self._input(prompt)
            if not raw.strip() and current is not None:
                return current
            value = parse_int(raw)
            if value is not None and low <= value <= high:
                return value
            self._output(f"Enter an integer between {low} and {high}.")

    def _read_id(self, prompt: str) -> int:
        while True:
            value = parse_int(self._input(prompt))
            if value is not None and value >= 1:
                return value
            self._output("Enter a positive integer id.")

    def _read_gender(self, prompt: str, current: str | None = None) -> str:
        while True:
            raw = self._input(prompt)
            if not raw.strip() and current is not None:
                return current
            try:
                return normalize_gender(raw)
            except ValueError:
                self._output("Invalid value. Enter M or F.")

    def _read_salary(self, prompt: str, current: float) -> float:
        while True:
            raw = self._input(prompt)
            if not raw.strip():
                return current
            value = parse_float(raw, default=-1.0)
            if value >= 0:
                return value
            self._output("Salary must be a number, zero or greater.")
