from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat, to_date, to_datetime
from ..core.constants import NOT_APPLICABLE
from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    id: str
    employee_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    total_days: int
    reason: str
    status: LeaveStatus
    cultural_context: str = NOT_APPLICABLE
    company_id: Optional[str] = None
    rejection_reason: Optional[str] = None
    approved_by: Optional[str] = None
    approved_date: Optional[datetime] = None
    cancelled_by: Optional[str] = None
    cancelled_date: Optional[datetime] = None
    version: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_cultural(self) -> bool:
        return bool(self.cultural_context) and self.cultural_context != NOT_APPLICABLE

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    @classmethod
    def from_record(cls, r: dict) -> "LeaveRequest":
        return cls(
            id=str(r["id"]),
            employee_id=str(r["employee_id"]),
            leave_type=LeaveType(r["leave_type"]),
            start_date=to_date(r["start_date"]),
            end_date=to_date(r["end_date"]),
            total_days=int(r["total_days"]),
            reason=r.get("reason") or "",
            status=LeaveStatus(r["status"]),
            cultural_context=r.get("cultural_context") or NOT_APPLICABLE,
            company_id=r.get("company_id"),
            rejection_reason=r.get("rejection_reason"),
            approved_by=r.get("approved_by"),
            approved_date=to_datetime(r.get("approved_date")),
            cancelled_by=r.get("cancelled_by"),
            cancelled_date=to_datetime(r.get("cancelled_date")),
            version=int(r.get("version") or 1),
            created_at=to_datetime(r.get("created_at")),
            updated_at=to_datetime(r.get("updated_at")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "leave_type": self.leave_type.value,
            "cultural_context": self.cultural_context,
            "start_date": isoformat(self.start_date),
            "end_date": isoformat(self.end_date),
            "total_days": self.total_days,
            "reason": self.reason,
            "status": self.status.value,
            "company_id": self.company_id,
            "rejection_reason": self.rejection_reason,
            "approved_by": self.approved_by,
            "approved_date": isoformat(self.approved_date),
            "cancelled_by": self.cancelled_by,
            "cancelled_date": isoformat(self.cancelled_date),
            "version": self.version,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }


@dataclass(frozen=True)
class LeaveComment:
    id: str
    leave_request_id: str
    author: str
    author_role: str
    comment: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, r: dict) -> "LeaveComment":
        return cls(
            id=str(r["id"]),
            leave_request_id=str(r["leave_request_id"]),
            author=r.get("author") or "",
            author_role=r.get("author_role") or "",
            comment=r.get("comment") or "",
            created_at=to_datetime(r.get("created_at")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "leave_request_id": self.leave_request_id,
            "author": self.author,
            "author_role": self.author_role,
            "comment": self.comment,
            "created_at": isoformat(self.created_at),
        }
