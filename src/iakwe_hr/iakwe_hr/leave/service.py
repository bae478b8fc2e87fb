from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import DateLike, isoformat, now_utc, to_date
from ..common.validators import require_limit, require_non_empty, require_one_of, require_version
from ..core.constants import (
    CULTURAL_CONTEXTS,
    DEFAULT_ORDER,
    NOT_APPLICABLE,
    PUBLIC_HOLIDAYS,
)
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..employees.service import company_scope
from ..store.datasource import DataResult, keep_items
from ..users.model import Actor
from . import reports
from .calendar import Holiday, RangeSummary, count_leave_days, summarize_range
from .model import LeaveComment, LeaveRequest
from .policy import GeneralManagerPolicy, LeavePolicy, available_actions
from .repository import LeaveRequestRepository

logger = logging.getLogger(__name__)

# Statuses shown on the team leave calendar.
CALENDAR_STATUSES = {LeaveStatus.PENDING, LeaveStatus.APPROVED}


@dataclass(frozen=True)
class LeaveRequestDetails:
    request: LeaveRequest
    actions: list[str]
    comments: list[LeaveComment]
    holidays: tuple[str, ...]
    # True when the comment thread could not be read; ``comments`` is then incomplete.
    comments_degraded: bool = False


class LeaveService:
    """Leave request lifecycle: create, review (approve/reject), withdraw, query."""

    def __init__(
        self,
        requests: LeaveRequestRepository,
        employees: EmployeeRepository,
        *,
        policy: Optional[LeavePolicy] = None,
        holidays: Iterable[Holiday] = PUBLIC_HOLIDAYS,
        clock: Callable = now_utc,
    ):
        self._requests = requests
        self._employees = employees
        self._policy = policy or GeneralManagerPolicy()
        self._holidays = tuple(holidays)
        self._clock = clock

    def preview(self, start_date: DateLike, end_date: DateLike) -> Optional[RangeSummary]:
        return summarize_range(start_date, end_date, self._holidays)

    # -------- Create --------
    def create_leave_request(
        self,
        actor: Actor,
        *,
        employee_id: str,
        leave_type: str,
        start_date: DateLike,
        end_date: DateLike,
        reason: str,
        cultural_context: Optional[str] = None,
    ) -> LeaveRequest:
        employee_id = require_non_empty(employee_id, "Employee")
        leave_type = require_one_of(leave_type, "Leave type", [t.value for t in LeaveType])
        context = require_one_of(cultural_context or NOT_APPLICABLE, "Cultural context", CULTURAL_CONTEXTS)
        reason = require_non_empty(reason, "Reason")

        start, end = to_date(start_date), to_date(end_date)
        if start is None or end is None:
            raise ValidationError("Start date and end date are required")
        if end < start:
            raise ValidationError("End date must be on or after the start date")

        employee = self._employees.get(employee_id)
        if not employee or (actor.company_id and employee.company_id != actor.company_id):
            raise ValidationError("Employee not found")
        if not employee.is_active:
            raise ValidationError("Leave can only be requested for Active employees")

        req = self._requests.create(
            {
                "employee_id": employee.id,
                "leave_type": leave_type,
                "cultural_context": context,
                "start_date": isoformat(start),
                "end_date": isoformat(end),
                "total_days": count_leave_days(start, end),
                "reason": reason,
                "status": LeaveStatus.PENDING.value,
                "company_id": actor.company_id or employee.company_id,
                "rejection_reason": None,
                "approved_by": None,
                "approved_date": None,
            }
        )
        logger.info("Leave request %s created for employee %s by %s", req.id, employee.id, actor.email)
        return req

    # -------- Query --------
    def get(self, actor: Actor, request_id: str) -> LeaveRequest:
        req = self._requests.get(str(request_id))
        if not req or (actor.company_id and req.company_id != actor.company_id):
            raise NotFoundError("Leave request not found")
        return req

    def get_details(self, actor: Actor, request_id: str) -> LeaveRequestDetails:
        req = self.get(actor, request_id)
        summary = summarize_range(req.start_date, req.end_date, self._holidays)
        comments = self._requests.list_comments(req.id)
        return LeaveRequestDetails(
            request=req,
            actions=available_actions(self._policy, actor, req),
            comments=list(comments.items),
            holidays=summary.holidays if summary else (),
            comments_degraded=comments.is_degraded,
        )

    def list_leave_requests(
        self,
        actor: Actor,
        *,
        order_by: Optional[str] = DEFAULT_ORDER,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        leave_type: Optional[str] = None,
    ) -> DataResult:
        limit = require_limit(limit)
        criteria = company_scope(actor)
        if status:
            criteria["status"] = require_one_of(status, "Status", [s.value for s in LeaveStatus])
        if leave_type:
            criteria["leave_type"] = require_one_of(leave_type, "Leave type", [t.value for t in LeaveType])
        return self._requests.list(criteria=criteria, order_by=order_by, limit=limit)

    def filter_leave_requests(
        self,
        actor: Actor,
        *,
        employee_id: str,
        order_by: Optional[str] = DEFAULT_ORDER,
    ) -> DataResult:
        """Self-service portal view: one employee's requests."""
        criteria = company_scope(actor)
        criteria["employee_id"] = require_non_empty(employee_id, "Employee")
        return self._requests.list(criteria=criteria, order_by=order_by)

    # -------- Transitions --------
    def approve(self, actor: Actor, request_id: str, *, version) -> LeaveRequest:
        expected = require_version(version)
        req = self._checked(actor, request_id, LeaveStatus.APPROVED)
        return self._apply(
            actor,
            req,
            LeaveStatus.APPROVED,
            expected,
            {"approved_by": actor.display_name, "approved_date": self._clock()},
        )

    def reject(self, actor: Actor, request_id: str, *, version, rejection_reason: str) -> LeaveRequest:
        expected = require_version(version)
        req = self._checked(actor, request_id, LeaveStatus.REJECTED)
        reason = require_non_empty(rejection_reason, "Rejection reason")
        return self._apply(
            actor,
            req,
            LeaveStatus.REJECTED,
            expected,
            {"rejection_reason": reason, "approved_by": actor.display_name, "approved_date": self._clock()},
        )

    def cancel(self, actor: Actor, request_id: str, *, version) -> LeaveRequest:
        """Self-service withdrawal of a Pending request by the employee who filed it."""
        expected = require_version(version)
        req = self._checked(actor, request_id, LeaveStatus.CANCELLED)
        return self._apply(
            actor,
            req,
            LeaveStatus.CANCELLED,
            expected,
            {"cancelled_by": actor.display_name, "cancelled_date": self._clock()},
        )

    def _checked(self, actor: Actor, request_id: str, target: LeaveStatus) -> LeaveRequest:
        req = self.get(actor, request_id)
        if req.status.is_terminal:
            raise ValidationError(f"Leave request has already been processed ({req.status.value})")
        if not self._policy.can_transition(actor, req, target):
            if target == LeaveStatus.CANCELLED:
                raise AuthorizationError("Only the employee who filed this request can cancel it")
            raise AuthorizationError("Only the General Manager has permission to take action on this request")
        return req

    def _apply(self, actor: Actor, req: LeaveRequest, target: LeaveStatus, expected: int, changes: dict) -> LeaveRequest:
        # Fails with ConflictError if anyone changed the request since it was read.
        updated = self._requests.update(req.id, {**changes, "status": target.value}, expected_version=expected)
        logger.info("Leave request %s %s by %s", req.id, target.value.lower(), actor.email)
        return updated

    # -------- Comments --------
    def add_comment(self, actor: Actor, request_id: str, comment: str) -> LeaveComment:
        text = require_non_empty(comment, "Comment")
        req = self.get(actor, request_id)
        return self._requests.add_comment(
            {
                "leave_request_id": req.id,
                "author": actor.display_name,
                "author_role": actor.role,
                "comment": text,
            }
        )

    # -------- Reports --------
    def summary(self, actor: Actor, *, leave_type: Optional[str] = None) -> tuple[reports.LeaveSummary, DataResult]:
        typed = None
        if leave_type:
            typed = LeaveType(require_one_of(leave_type, "Leave type", [t.value for t in LeaveType]))
        result = self.list_leave_requests(actor, order_by=None)
        return reports.summarize_requests(result.items, leave_type=typed), result

    def calendar(self, actor: Actor, *, year: int, month: int) -> tuple[list[dict], DataResult]:
        if not MINYEAR <= int(year) <= MAXYEAR:
            raise ValidationError(f"Year must be between {MINYEAR} and {MAXYEAR}")
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12")
        result = keep_items(self.list_leave_requests(actor, order_by="start_date"), lambda r: r.status in CALENDAR_STATUSES)
        return reports.month_calendar(int(year), int(month), result.items), result

    def leave_balance(self, actor: Actor, employee_id: str) -> tuple[dict, DataResult]:
        employee = self._employees.get(str(employee_id))
        if not employee or (actor.company_id and employee.company_id != actor.company_id):
            raise NotFoundError("Employee not found")
        result = self.filter_leave_requests(actor, employee_id=employee.id, order_by=None)
        return reports.leave_balance(employee, result.items), result
