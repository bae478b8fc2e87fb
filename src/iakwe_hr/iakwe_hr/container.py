from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import EMPLOYEES_TABLE, LEAVE_COMMENTS_TABLE, LEAVE_REQUESTS_TABLE
from .database.connection import DatabaseConnection, DBConfig
from .database.sample_data import SAMPLE_EMPLOYEES
from .employees.repository import StoreEmployeeRepository
from .employees.service import EmployeeService
from .leave.repository import StoreLeaveRequestRepository
from .leave.service import LeaveService
from .store.base import EntityStore
from .store.entity import EntityTable
from .store.memory import InMemoryStore
from .store.mysql_store import MySQLStore
from .store.supabase_store import SupabaseStore
from .users.session import SessionProvider, SupabaseSessionProvider


@dataclass(frozen=True)
class Container:
    store: EntityStore
    session_provider: SessionProvider

    employees_table: EntityTable
    leave_requests_table: EntityTable
    leave_comments_table: EntityTable

    employees_repo: StoreEmployeeRepository
    leave_repo: StoreLeaveRequestRepository

    employee_service: EmployeeService
    leave_service: LeaveService


def build_store(settings) -> EntityStore:
    backend = str(getattr(settings, "STORE_BACKEND", "supabase")).lower()
    if backend == "supabase":
        return SupabaseStore(
            settings.SUPABASE_URL,
            settings.SUPABASE_KEY,
            timeout=float(getattr(settings, "HTTP_TIMEOUT", 10)),
        )
    if backend == "mysql":
        return MySQLStore(DatabaseConnection.get_instance(DBConfig.from_dict(settings.DB_CONFIG)))
    if backend == "memory":
        store = InMemoryStore()
        store.seed(EMPLOYEES_TABLE, SAMPLE_EMPLOYEES)
        return store
    raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")


def build_container(
    *,
    settings,
    store: Optional[EntityStore] = None,
    session_provider: Optional[SessionProvider] = None,
) -> Container:
    store = store or build_store(settings)
    session_provider = session_provider or SupabaseSessionProvider(
        getattr(settings, "SUPABASE_URL", ""),
        getattr(settings, "SUPABASE_KEY", ""),
        timeout=float(getattr(settings, "HTTP_TIMEOUT", 10)),
    )

    samples = SAMPLE_EMPLOYEES if getattr(settings, "SAMPLE_DATA_FALLBACK", False) else None
    employees_table = EntityTable(store, EMPLOYEES_TABLE, sample_records=samples)
    leave_requests_table = EntityTable(store, LEAVE_REQUESTS_TABLE)
    leave_comments_table = EntityTable(store, LEAVE_COMMENTS_TABLE)

    employees_repo = StoreEmployeeRepository(employees_table)
    leave_repo = StoreLeaveRequestRepository(leave_requests_table, leave_comments_table)

    employee_service = EmployeeService(employees_repo)
    leave_service = LeaveService(leave_repo, employees_repo)

    return Container(
        store=store,
        session_provider=session_provider,
        employees_table=employees_table,
        leave_requests_table=leave_requests_table,
        leave_comments_table=leave_comments_table,
        employees_repo=employees_repo,
        leave_repo=leave_repo,
        employee_service=employee_service,
        leave_service=leave_service,
    )
