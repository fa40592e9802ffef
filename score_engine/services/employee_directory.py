"""
Employee Directory
score_engine/services/employee_directory.py

Read-only view of the user directory: who an employee is, who manages
them, and their current level.
"""

from typing import Dict, Iterable, List, Optional, Protocol, runtime_checkable

from score_engine.models.employee import EmployeeRecord


@runtime_checkable
class EmployeeDirectory(Protocol):

    async def get_employee(self, employee_id: str) -> Optional[EmployeeRecord]:
        ...

    async def find_direct_reports(self, manager_id: str) -> List[EmployeeRecord]:
        ...


class InMemoryEmployeeDirectory:
    """EmployeeDirectory backed by a dict. Direct reports keep insertion order."""

    def __init__(self, employees: Iterable[EmployeeRecord] = ()):
        self._employees: Dict[str, EmployeeRecord] = {}
        for employee in employees:
            self.add(employee)

    def add(self, employee: EmployeeRecord) -> None:
        self._employees[employee.id] = employee

    async def get_employee(self, employee_id: str) -> Optional[EmployeeRecord]:
        return self._employees.get(employee_id)

    async def find_direct_reports(self, manager_id: str) -> List[EmployeeRecord]:
        return [e for e in self._employees.values() if e.manager_id == manager_id]
