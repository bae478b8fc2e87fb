from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import isoformat, to_date
from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Directory entry. ``employee_code`` is the badge number (EMP001...)."""

    id: str
    first_name: str
    last_name: str
    email: str
    status: EmployeeStatus
    employee_code: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    employment_type: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[date] = None
    company_id: Optional[str] = None
    version: int = 1

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE

    @classmethod
    def from_record(cls, r: dict) -> "Employee":
        return cls(
            id=str(r["id"]),
            first_name=r.get("first_name") or "",
            last_name=r.get("last_name") or "",
            email=r.get("email") or "",
            status=EmployeeStatus(r.get("status") or EmployeeStatus.ACTIVE.value),
            employee_code=r.get("employee_id"),
            department=r.get("department"),
            position=r.get("position"),
            employment_type=r.get("employment_type"),
            location=r.get("location"),
            start_date=to_date(r.get("start_date")),
            company_id=r.get("company_id"),
            version=int(r.get("version") or 1),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employee_id": self.employee_code,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "full_name": self.full_name,
            "email": self.email,
            "department": self.department,
            "position": self.position,
            "employment_type": self.employment_type,
            "status": self.status.value,
            "location": self.location,
            "start_date": isoformat(self.start_date),
            "company_id": self.company_id,
            "version": self.version,
        }
