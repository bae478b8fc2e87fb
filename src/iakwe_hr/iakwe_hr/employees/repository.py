from __future__ import annotations

from typing import Optional, Protocol

from ..store.datasource import DataResult, map_items
from ..store.entity import EntityTable
from .model import Employee


class EmployeeRepository(Protocol):
    def get(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list(self, *, criteria: dict, order_by: Optional[str] = None, limit: Optional[int] = None) -> DataResult:
        """DataResult of Employee."""

        raise NotImplementedError

    def create(self, record: dict) -> Employee:
        raise NotImplementedError

    def update(self, employee_id: str, changes: dict, *, expected_version: int) -> Employee:
        raise NotImplementedError


class StoreEmployeeRepository(EmployeeRepository):
    def __init__(self, employees: EntityTable):
        self._employees = employees

    def get(self, employee_id: str) -> Optional[Employee]:
        r = self._employees.get(employee_id)
        return Employee.from_record(r) if r else None

    def list(self, *, criteria: dict, order_by: Optional[str] = None, limit: Optional[int] = None) -> DataResult:
        return map_items(self._employees.filter(criteria, order_by=order_by, limit=limit), Employee.from_record)

    def create(self, record: dict) -> Employee:
        return Employee.from_record(self._employees.create(record))

    def update(self, employee_id: str, changes: dict, *, expected_version: int) -> Employee:
        return Employee.from_record(self._employees.update(employee_id, changes, expected_version=expected_version))
