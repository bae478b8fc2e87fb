from __future__ import annotations

from typing import Optional, Protocol

from ..store.datasource import DataResult, map_items
from ..store.entity import EntityTable
from .model import LeaveComment, LeaveRequest


class LeaveRequestRepository(Protocol):
    def create(self, record: dict) -> LeaveRequest:
        raise NotImplementedError

    def get(self, request_id: str) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list(self, *, criteria: dict, order_by: Optional[str] = None, limit: Optional[int] = None) -> DataResult:
        """DataResult of LeaveRequest."""

        raise NotImplementedError

    def update(self, request_id: str, changes: dict, *, expected_version: int) -> LeaveRequest:
        raise NotImplementedError

    # Comments
    def add_comment(self, record: dict) -> LeaveComment:
        raise NotImplementedError

    def list_comments(self, request_id: str) -> DataResult:
        """DataResult of LeaveComment, oldest first."""

        raise NotImplementedError


class StoreLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, requests: EntityTable, comments: EntityTable):
        self._requests = requests
        self._comments = comments

    def create(self, record: dict) -> LeaveRequest:
        return LeaveRequest.from_record(self._requests.create(record))

    def get(self, request_id: str) -> Optional[LeaveRequest]:
        r = self._requests.get(request_id)
        return LeaveRequest.from_record(r) if r else None

    def list(self, *, criteria: dict, order_by: Optional[str] = None, limit: Optional[int] = None) -> DataResult:
        return map_items(self._requests.filter(criteria, order_by=order_by, limit=limit), LeaveRequest.from_record)

    def update(self, request_id: str, changes: dict, *, expected_version: int) -> LeaveRequest:
        return LeaveRequest.from_record(self._requests.update(request_id, changes, expected_version=expected_version))

    def add_comment(self, record: dict) -> LeaveComment:
        return LeaveComment.from_record(self._comments.create(record))

    def list_comments(self, request_id: str) -> DataResult:
        result = self._comments.filter({"leave_request_id": str(request_id)}, order_by="created_at")
        return map_items(result, LeaveComment.from_record)
