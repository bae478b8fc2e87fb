from __future__ import annotations

import logging
from typing import Optional

from ..common.datetime_utils import isoformat, to_date
from ..common.validators import require_non_empty, require_one_of, require_version
from ..core.enums import EmployeeStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..store.datasource import DataResult
from ..users.model import Actor
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

DIRECTORY_MANAGERS = {Role.GENERAL_MANAGER.value, Role.HR_MANAGER.value, Role.ADMIN.value}

EDITABLE_FIELDS = {
    "first_name",
    "last_name",
    "email",
    "department",
    "position",
    "employment_type",
    "status",
    "location",
    "start_date",
    "employee_id",
}


def company_scope(actor: Actor) -> dict:
    return {"company_id": actor.company_id} if actor.company_id else {}


class EmployeeService:
    """Use case: employee directory (read for selection lists, add/edit for HR)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_directory(self, actor: Actor, *, status: Optional[str] = None) -> DataResult:
        criteria = company_scope(actor)
        if status:
            criteria["status"] = require_one_of(status, "Status", [s.value for s in EmployeeStatus])
        return self._employees.list(criteria=criteria, order_by="last_name")

    def list_active(self, actor: Actor) -> DataResult:
        """Employees offered as leave request subjects."""
        return self.list_directory(actor, status=EmployeeStatus.ACTIVE.value)

    def get(self, actor: Actor, employee_id: str) -> Employee:
        emp = self._employees.get(str(employee_id))
        if not emp or (actor.company_id and emp.company_id != actor.company_id):
            raise NotFoundError("Employee not found")
        return emp

    def add_employee(self, actor: Actor, data: dict) -> Employee:
        self._require_manager(actor)

        record = self._clean(data)
        record["first_name"] = require_non_empty(data.get("first_name"), "First name")
        record["last_name"] = require_non_empty(data.get("last_name"), "Last name")
        record["email"] = self._require_email(data.get("email"))
        record["status"] = EmployeeStatus.ACTIVE.value
        record["company_id"] = actor.company_id

        emp = self._employees.create(record)
        logger.info("Employee %s added by %s", emp.id, actor.email)
        return emp

    def update_employee(self, actor: Actor, employee_id: str, changes: dict, *, version) -> Employee:
        self._require_manager(actor)
        expected = require_version(version)
        self.get(actor, employee_id)

        record = self._clean(changes)
        for field in ("first_name", "last_name"):
            if field in changes:
                record[field] = require_non_empty(changes.get(field), field.replace("_", " ").capitalize())
        if "email" in changes:
            record["email"] = self._require_email(changes.get("email"))
        if "status" in changes:
            record["status"] = require_one_of(changes.get("status"), "Status", [s.value for s in EmployeeStatus])
        if not record:
            raise ValidationError("Nothing to update")

        return self._employees.update(str(employee_id), record, expected_version=expected)

    @staticmethod
    def _require_manager(actor: Actor) -> None:
        if actor.role not in DIRECTORY_MANAGERS:
            raise AuthorizationError("You do not have permission to manage the employee directory")

    @staticmethod
    def _require_email(value: Optional[str]) -> str:
        email = require_non_empty(value, "Email")
        if "@" not in email:
            raise ValidationError("Email is not valid")
        return email

    @staticmethod
    def _clean(data: dict) -> dict:
        unknown = set(data) - EDITABLE_FIELDS - {"version"}
        if unknown:
            raise ValidationError(f"Unknown employee field(s): {', '.join(sorted(unknown))}")
        out = {k: (v.strip() if isinstance(v, str) else v) for k, v in data.items() if k in EDITABLE_FIELDS}
        if "start_date" in out:
            out["start_date"] = isoformat(to_date(out["start_date"]))
        return out
