from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..core.constants import (
    ANNUAL_ENTITLEMENT_FULL_TIME,
    ANNUAL_ENTITLEMENT_OTHER,
    CULTURAL_ENTITLEMENT,
    FULL_TIME,
    SICK_ENTITLEMENT,
)
from ..core.enums import LeaveStatus, LeaveType
from ..employees.model import Employee
from .model import LeaveRequest


@dataclass(frozen=True)
class LeaveSummary:
    pending: int
    approved: int
    rejected: int
    cancelled: int
    cultural: int

    def to_dict(self) -> dict:
        return {
            "pending": self.pending,
            "approved": self.approved,
            "rejected": self.rejected,
            "cancelled": self.cancelled,
            "cultural": self.cultural,
        }


def summarize_requests(requests: Iterable[LeaveRequest], *, leave_type: Optional[LeaveType] = None) -> LeaveSummary:
    """Status counts for the leave dashboard.

    ``leave_type`` narrows the status counts only; the cultural count always
    covers every request.
    """
    requests = list(requests)
    typed = [r for r in requests if leave_type is None or r.leave_type == leave_type]

    def count(status: LeaveStatus) -> int:
        return sum(1 for r in typed if r.status == status)

    return LeaveSummary(
        pending=count(LeaveStatus.PENDING),
        approved=count(LeaveStatus.APPROVED),
        rejected=count(LeaveStatus.REJECTED),
        cancelled=count(LeaveStatus.CANCELLED),
        cultural=sum(1 for r in requests if r.is_cultural),
    )


def month_calendar(year: int, month: int, requests: Iterable[LeaveRequest]) -> list[dict]:
    """One entry per day of the month with the requests covering that day."""
    requests = list(requests)
    _, days = calendar.monthrange(int(year), int(month))
    out: list[dict] = []
    for d in range(1, days + 1):
        day = date(int(year), int(month), d)
        out.append({"date": day.isoformat(), "leaves": [r for r in requests if r.covers(day)]})
    return out


def annual_entitlement(employee: Employee) -> int:
    return ANNUAL_ENTITLEMENT_FULL_TIME if employee.employment_type == FULL_TIME else ANNUAL_ENTITLEMENT_OTHER


def leave_balance(employee: Employee, requests: Iterable[LeaveRequest]) -> dict:
    used_annual = sum(
        r.total_days
        for r in requests
        if r.employee_id == employee.id and r.leave_type == LeaveType.ANNUAL and r.status == LeaveStatus.APPROVED
    )
    return {
        "employee_id": employee.id,
        "annual": max(0, annual_entitlement(employee) - used_annual),
        "annual_used": used_annual,
        "sick": SICK_ENTITLEMENT,
        "cultural": CULTURAL_ENTITLEMENT,
    }
