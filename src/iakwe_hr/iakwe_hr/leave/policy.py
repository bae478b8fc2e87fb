from __future__ import annotations

from typing import Protocol

from ..core.enums import LeaveStatus, Role
from ..users.model import Actor
from .model import LeaveRequest

# Allowed moves of the approval workflow; every non-Pending state is terminal.
TRANSITIONS: dict[LeaveStatus, frozenset[LeaveStatus]] = {
    LeaveStatus.PENDING: frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED, LeaveStatus.CANCELLED}),
    LeaveStatus.APPROVED: frozenset(),
    LeaveStatus.REJECTED: frozenset(),
    LeaveStatus.CANCELLED: frozenset(),
}

ACTION_APPROVE = "approve"
ACTION_REJECT = "reject"
ACTION_CANCEL = "cancel"
ACTION_COMMENT = "comment"


class LeavePolicy(Protocol):
    """Who may move a leave request to which status.

    The same check hides controls in the UI (``available_actions``) and is
    enforced by the service before anything is written.
    """

    def can_transition(self, actor: Actor, request: LeaveRequest, target: LeaveStatus) -> bool:
        raise NotImplementedError


class GeneralManagerPolicy(LeavePolicy):
    """Only the General Manager decides; the filing employee may withdraw."""

    reviewer_role = Role.GENERAL_MANAGER.value

    def can_transition(self, actor: Actor, request: LeaveRequest, target: LeaveStatus) -> bool:
        if target not in TRANSITIONS.get(request.status, frozenset()):
            return False
        if actor.company_id and request.company_id and actor.company_id != request.company_id:
            return False
        if target == LeaveStatus.CANCELLED:
            return bool(actor.employee_id) and actor.employee_id == request.employee_id
        return actor.role == self.reviewer_role


def available_actions(policy: LeavePolicy, actor: Actor, request: LeaveRequest) -> list[str]:
    """Controls to offer ``actor`` when viewing ``request``."""
    actions: list[str] = []
    if policy.can_transition(actor, request, LeaveStatus.APPROVED):
        actions.append(ACTION_APPROVE)
    if policy.can_transition(actor, request, LeaveStatus.REJECTED):
        actions.append(ACTION_REJECT)
    if policy.can_transition(actor, request, LeaveStatus.CANCELLED):
        actions.append(ACTION_CANCEL)
    if request.status == LeaveStatus.PENDING:
        actions.append(ACTION_COMMENT)
    return actions
