from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.iakwe_hr.iakwe_hr.core.constants import EMPLOYEES_TABLE, LEAVE_COMMENTS_TABLE, LEAVE_REQUESTS_TABLE
from src.iakwe_hr.iakwe_hr.core.enums import ErrorKind, LeaveStatus, Role
from src.iakwe_hr.iakwe_hr.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from src.iakwe_hr.iakwe_hr.database.sample_data import SAMPLE_COMPANY_ID, SAMPLE_EMPLOYEES
from src.iakwe_hr.iakwe_hr.employees.repository import StoreEmployeeRepository
from src.iakwe_hr.iakwe_hr.leave.repository import StoreLeaveRequestRepository
from src.iakwe_hr.iakwe_hr.leave.service import LeaveService
from src.iakwe_hr.iakwe_hr.store.entity import EntityTable
from src.iakwe_hr.iakwe_hr.store.memory import InMemoryStore
from src.iakwe_hr.iakwe_hr.users.model import Actor

NOW = datetime(2024, 2, 20, 9, 30, tzinfo=timezone.utc)


def _actor(role, *, employee_id=None, company_id=SAMPLE_COMPANY_ID, name="Test User"):
    return Actor(role=role, full_name=name, email="t@example.mh", company_id=company_id, employee_id=employee_id)


GM = _actor(Role.GENERAL_MANAGER.value, name="Jeban Riklon")
HR = _actor(Role.HR_MANAGER.value, name="Lani Kabua")
FILER = _actor(Role.EMPLOYEE.value, employee_id="1", name="John Doe")


class UnavailableStore(InMemoryStore):
    """Reads of leave requests fail as if the backend were unreachable."""

    def select(self, table, **kwargs):
        if table == LEAVE_REQUESTS_TABLE and "id" not in (kwargs.get("filters") or {}):
            raise StoreError("GET leave_requests failed: unable to reach the backend", kind=ErrorKind.NETWORK)
        return super().select(table, **kwargs)


def _service(store=None):
    store = store or InMemoryStore()
    store.seed(EMPLOYEES_TABLE, SAMPLE_EMPLOYEES)
    requests = StoreLeaveRequestRepository(
        EntityTable(store, LEAVE_REQUESTS_TABLE),
        EntityTable(store, LEAVE_COMMENTS_TABLE),
    )
    employees = StoreEmployeeRepository(EntityTable(store, EMPLOYEES_TABLE))
    return LeaveService(requests, employees, clock=lambda: NOW), store


def _create(svc, actor=HR, **overrides):
    data = dict(
        employee_id="1",
        leave_type="Cultural Leave",
        cultural_context="Kemem Celebrations",
        start_date="2024-03-01",
        end_date="2024-03-03",
        reason="First birthday of my nephew",
    )
    data.update(overrides)
    return svc.create_leave_request(actor, **data)


def test_create_starts_pending_with_computed_days():
    svc, _ = _service()
    req = _create(svc)

    assert req.status == LeaveStatus.PENDING
    assert req.approved_by is None
    assert req.rejection_reason is None
    assert req.total_days == 3
    assert req.company_id == SAMPLE_COMPANY_ID
    assert req.version == 1


def test_create_then_fetch_returns_same_record():
    svc, _ = _service()
    created = _create(svc)
    fetched = svc.get(HR, created.id)
    assert fetched == created


def test_create_defaults_cultural_context():
    svc, _ = _service()
    req = _create(svc, leave_type="Annual Leave", cultural_context=None)
    assert req.cultural_context == "Not Applicable"
    assert not req.is_cultural


@pytest.mark.parametrize(
    "overrides",
    [
        {"reason": "   "},
        {"employee_id": ""},
        {"leave_type": "Holiday Leave"},
        {"cultural_context": "Birthday"},
        {"start_date": None},
        {"start_date": "2024-03-05", "end_date": "2024-03-01"},
        {"employee_id": "3"},
        {"employee_id": "999"},
    ],
)
def test_create_rejects_invalid_input(overrides):
    svc, store = _service()
    with pytest.raises(ValidationError):
        _create(svc, **overrides)
    assert store.select(LEAVE_REQUESTS_TABLE) == []


def test_create_rejects_employee_of_other_company():
    svc, _ = _service()
    with pytest.raises(ValidationError):
        _create(svc, actor=_actor(Role.HR_MANAGER.value, company_id="ebeye-co"))


def test_gm_approves_pending_request():
    svc, _ = _service()
    req = _create(svc)

    approved = svc.approve(GM, req.id, version=req.version)

    assert approved.status == LeaveStatus.APPROVED
    assert approved.approved_by == "Jeban Riklon"
    assert approved.approved_date == NOW
    assert approved.rejection_reason is None
    assert approved.version == req.version + 1


@pytest.mark.parametrize("role", [Role.HR_MANAGER.value, Role.ADMIN.value, Role.EMPLOYEE.value, "Owner"])
def test_non_gm_cannot_approve_or_reject(role):
    svc, _ = _service()
    req = _create(svc)
    actor = _actor(role)

    with pytest.raises(AuthorizationError):
        svc.approve(actor, req.id, version=req.version)
    with pytest.raises(AuthorizationError):
        svc.reject(actor, req.id, version=req.version, rejection_reason="No cover")

    assert svc.get(GM, req.id).status == LeaveStatus.PENDING


def test_reject_requires_reason_and_leaves_request_pending():
    svc, _ = _service()
    req = _create(svc)

    with pytest.raises(ValidationError):
        svc.reject(GM, req.id, version=req.version, rejection_reason="  ")

    current = svc.get(GM, req.id)
    assert current.status == LeaveStatus.PENDING
    assert current.version == req.version


def test_reject_records_reason_and_reviewer():
    svc, _ = _service()
    req = _create(svc)

    rejected = svc.reject(GM, req.id, version=req.version, rejection_reason="Peak season")

    assert rejected.status == LeaveStatus.REJECTED
    assert rejected.rejection_reason == "Peak season"
    assert rejected.approved_by == "Jeban Riklon"


def test_processed_request_cannot_change_again():
    svc, _ = _service()
    req = _create(svc)
    approved = svc.approve(GM, req.id, version=req.version)

    with pytest.raises(ValidationError):
        svc.reject(GM, req.id, version=approved.version, rejection_reason="Changed my mind")
    with pytest.raises(ValidationError):
        svc.approve(GM, req.id, version=approved.version)


def test_concurrent_decision_with_stale_version_raises_conflict():
    svc, store = _service()
    req = _create(svc)
    # Someone else edits the record between read and write.
    store.update(LEAVE_REQUESTS_TABLE, req.id, {"reason": "Edited"})

    with pytest.raises(ConflictError) as exc:
        svc.approve(GM, req.id, version=req.version)
    assert exc.value.current_version == req.version + 1
    assert svc.get(GM, req.id).status == LeaveStatus.PENDING


def test_version_is_required_for_transitions():
    svc, _ = _service()
    req = _create(svc)
    with pytest.raises(ValidationError):
        svc.approve(GM, req.id, version=None)


def test_filer_can_cancel_pending_request():
    svc, _ = _service()
    req = _create(svc, actor=FILER)

    cancelled = svc.cancel(FILER, req.id, version=req.version)

    assert cancelled.status == LeaveStatus.CANCELLED
    assert cancelled.cancelled_by == "John Doe"
    assert cancelled.cancelled_date == NOW


def test_others_cannot_cancel():
    svc, _ = _service()
    req = _create(svc)
    with pytest.raises(AuthorizationError):
        svc.cancel(GM, req.id, version=req.version)


def test_request_of_other_company_is_not_found():
    svc, _ = _service()
    req = _create(svc)
    with pytest.raises(NotFoundError):
        svc.get(_actor(Role.GENERAL_MANAGER.value, company_id="ebeye-co"), req.id)


def test_details_include_actions_comments_and_holidays():
    svc, _ = _service()
    req = _create(svc, start_date="2024-04-29", end_date="2024-05-02")
    svc.add_comment(HR, req.id, "Checked with the team lead")

    details = svc.get_details(HR, req.id)
    assert details.actions == ["comment"]
    assert [c.comment for c in details.comments] == ["Checked with the team lead"]
    assert details.comments[0].author_role == Role.HR_MANAGER.value
    assert details.holidays == ("Constitution Day",)

    assert svc.get_details(GM, req.id).actions == ["approve", "reject", "comment"]


def test_list_is_company_scoped_and_filterable():
    svc, _ = _service()
    first = _create(svc)
    second = _create(svc, employee_id="2", leave_type="Sick Leave", cultural_context=None)
    svc.approve(GM, first.id, version=first.version)

    result = svc.list_leave_requests(HR)
    assert not result.is_degraded
    assert {r.id for r in result.items} == {first.id, second.id}

    pending = svc.list_leave_requests(HR, status="Pending")
    assert [r.id for r in pending.items] == [second.id]

    limited = svc.list_leave_requests(HR, limit=1)
    assert len(limited.items) == 1

    outsider = _actor(Role.GENERAL_MANAGER.value, company_id="ebeye-co")
    assert svc.list_leave_requests(outsider).items == []


def test_filter_by_employee():
    svc, _ = _service()
    mine = _create(svc, actor=FILER)
    _create(svc, employee_id="2")

    result = svc.filter_leave_requests(FILER, employee_id="1")
    assert [r.id for r in result.items] == [mine.id]


def test_list_degrades_to_empty_when_store_is_unreachable():
    svc, _ = _service(UnavailableStore())

    result = svc.list_leave_requests(HR)

    assert result.is_degraded
    assert result.items == []
    assert result.error.kind == ErrorKind.NETWORK
    assert result.error.retryable


def test_summary_counts():
    svc, _ = _service()
    a = _create(svc)
    b = _create(svc, leave_type="Annual Leave", cultural_context=None)
    _create(svc, leave_type="Annual Leave", cultural_context=None)
    svc.approve(GM, a.id, version=a.version)
    svc.reject(GM, b.id, version=b.version, rejection_reason="Busy")

    summary, result = svc.summary(HR)
    assert summary.to_dict() == {"pending": 1, "approved": 1, "rejected": 1, "cancelled": 0, "cultural": 1}
    assert not result.is_degraded

    annual, _ = svc.summary(HR, leave_type="Annual Leave")
    assert (annual.pending, annual.approved, annual.rejected) == (1, 0, 1)


def test_calendar_shows_pending_and_approved_only():
    svc, _ = _service()
    shown = _create(svc, start_date="2024-03-01", end_date="2024-03-02")
    hidden = _create(svc, employee_id="2", start_date="2024-03-01", end_date="2024-03-01")
    svc.reject(GM, hidden.id, version=hidden.version, rejection_reason="Busy")

    days, _ = svc.calendar(HR, year=2024, month=3)

    assert len(days) == 31
    assert [r.id for r in days[0]["leaves"]] == [shown.id]
    assert [r.id for r in days[1]["leaves"]] == [shown.id]
    assert days[2]["leaves"] == []


def test_calendar_rejects_bad_month():
    svc, _ = _service()
    with pytest.raises(ValidationError):
        svc.calendar(HR, year=2024, month=13)


def test_leave_balance_subtracts_approved_annual_leave():
    svc, _ = _service()
    annual = _create(svc, leave_type="Annual Leave", cultural_context=None, start_date="2024-06-03", end_date="2024-06-07")
    _create(svc, leave_type="Annual Leave", cultural_context=None, start_date="2024-07-01", end_date="2024-07-02")
    svc.approve(GM, annual.id, version=annual.version)

    balance, _ = svc.leave_balance(HR, "1")

    assert balance == {"employee_id": "1", "annual": 15, "annual_used": 5, "sick": 10, "cultural": 5}


def test_leave_balance_unknown_employee():
    svc, _ = _service()
    with pytest.raises(NotFoundError):
        svc.leave_balance(HR, "999")


class CommentsUnavailableStore(InMemoryStore):
    """The comment thread cannot be read; everything else works."""

    def select(self, table, **kwargs):
        if table == LEAVE_COMMENTS_TABLE:
            raise StoreError("GET leave_comments failed: unable to reach the backend", kind=ErrorKind.NETWORK)
        return super().select(table, **kwargs)


def test_details_mark_unreadable_comments():
    store = CommentsUnavailableStore()
    svc, _ = _service(store)
    req = _create(svc)
    svc.add_comment(HR, req.id, "Family event confirmed")

    details = svc.get_details(HR, req.id)

    assert details.comments == []
    assert details.comments_degraded is True


def test_details_with_readable_comments_are_not_degraded():
    svc, _ = _service()
    req = _create(svc)
    assert svc.get_details(HR, req.id).comments_degraded is False


@pytest.mark.parametrize("limit", [0, -1, "x"])
def test_list_rejects_non_positive_limit(limit):
    svc, _ = _service()
    _create(svc)
    with pytest.raises(ValidationError):
        svc.list_leave_requests(HR, limit=limit)


@pytest.mark.parametrize("year", [0, 10000])
def test_calendar_rejects_bad_year(year):
    svc, _ = _service()
    with pytest.raises(ValidationError):
        svc.calendar(HR, year=year, month=1)
