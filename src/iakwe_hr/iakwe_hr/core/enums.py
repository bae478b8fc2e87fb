from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Actor roles known to the HR dashboard."""

    GENERAL_MANAGER = "General Manager"
    HR_MANAGER = "HR Manager"
    ADMIN = "Admin"
    EMPLOYEE = "Employee"


class LeaveType(str, Enum):
    ANNUAL = "Annual Leave"
    SICK = "Sick Leave"
    CULTURAL = "Cultural Leave"
    BEREAVEMENT = "Bereavement Leave"
    MATERNITY = "Maternity Leave"
    PATERNITY = "Paternity Leave"
    EMERGENCY = "Emergency Leave"
    UNPAID = "Unpaid Leave"


class LeaveStatus(str, Enum):
    """Approval workflow states of a leave request."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not LeaveStatus.PENDING


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    ON_LEAVE = "On Leave"
    TERMINATED = "Terminated"


class ErrorKind(str, Enum):
    """Classification of persistence failures (drives retry hints)."""

    NETWORK = "network"
    AUTH = "auth"
    SERVER = "server"
    CLIENT = "client"
