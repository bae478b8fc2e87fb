from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Actor:
    """The signed-in user acting on the system.

    ``role`` is kept as the raw string from the auth provider so unknown
    roles are carried through (and simply fail the approval gate).
    """

    role: str
    full_name: str
    email: str
    company_id: Optional[str] = None
    employee_id: Optional[str] = None
    user_id: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "role": self.role,
            "full_name": self.full_name,
            "email": self.email,
            "company_id": self.company_id,
            "employee_id": self.employee_id,
        }
