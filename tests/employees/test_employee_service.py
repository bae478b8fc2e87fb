import pytest

from src.iakwe_hr.iakwe_hr.core.constants import EMPLOYEES_TABLE
from src.iakwe_hr.iakwe_hr.core.enums import EmployeeStatus, Role
from src.iakwe_hr.iakwe_hr.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from src.iakwe_hr.iakwe_hr.database.sample_data import SAMPLE_COMPANY_ID, SAMPLE_EMPLOYEES
from src.iakwe_hr.iakwe_hr.employees.repository import StoreEmployeeRepository
from src.iakwe_hr.iakwe_hr.employees.service import EmployeeService
from src.iakwe_hr.iakwe_hr.store.entity import EntityTable
from src.iakwe_hr.iakwe_hr.store.memory import InMemoryStore
from src.iakwe_hr.iakwe_hr.users.model import Actor

HR = Actor(role=Role.HR_MANAGER.value, full_name="Lani Kabua", email="lani@example.mh", company_id=SAMPLE_COMPANY_ID)
STAFF = Actor(role=Role.EMPLOYEE.value, full_name="John Doe", email="john@example.mh", company_id=SAMPLE_COMPANY_ID)


def _service():
    store = InMemoryStore()
    store.seed(EMPLOYEES_TABLE, SAMPLE_EMPLOYEES)
    return EmployeeService(StoreEmployeeRepository(EntityTable(store, EMPLOYEES_TABLE)))


def test_directory_is_sorted_by_last_name():
    result = _service().list_directory(STAFF)
    assert [e.last_name for e in result.items] == sorted(e.last_name for e in result.items)
    assert len(result.items) == len(SAMPLE_EMPLOYEES)


def test_active_list_excludes_inactive_employees():
    result = _service().list_active(STAFF)
    assert result.items
    assert all(e.status == EmployeeStatus.ACTIVE for e in result.items)
    assert "3" not in {e.id for e in result.items}


def test_other_company_sees_nobody():
    outsider = Actor(role=Role.HR_MANAGER.value, full_name="X", email="x@example.mh", company_id="ebeye-co")
    svc = _service()
    assert svc.list_directory(outsider).items == []
    with pytest.raises(NotFoundError):
        svc.get(outsider, "1")


def test_add_employee_sets_active_and_company():
    emp = _service().add_employee(
        HR,
        {"first_name": " Mary ", "last_name": "Lanki", "email": "mary@example.mh", "start_date": "2024-02-01"},
    )
    assert emp.first_name == "Mary"
    assert emp.status == EmployeeStatus.ACTIVE
    assert emp.company_id == SAMPLE_COMPANY_ID
    assert emp.start_date.isoformat() == "2024-02-01"


@pytest.mark.parametrize(
    "data",
    [
        {"last_name": "Lanki", "email": "mary@example.mh"},
        {"first_name": "Mary", "last_name": "Lanki", "email": "not-an-email"},
        {"first_name": "Mary", "last_name": "Lanki", "email": "mary@example.mh", "salary": 1},
    ],
)
def test_add_employee_validates(data):
    with pytest.raises(ValidationError):
        _service().add_employee(HR, data)


def test_staff_cannot_manage_directory():
    svc = _service()
    with pytest.raises(AuthorizationError):
        svc.add_employee(STAFF, {"first_name": "A", "last_name": "B", "email": "a@b.c"})
    with pytest.raises(AuthorizationError):
        svc.update_employee(STAFF, "1", {"position": "CEO"}, version=1)


def test_update_employee_uses_version():
    svc = _service()
    emp = svc.update_employee(HR, "1", {"position": "Tech Lead"}, version=1)
    assert emp.position == "Tech Lead"
    assert emp.version == 2

    with pytest.raises(ConflictError):
        svc.update_employee(HR, "1", {"position": "CTO"}, version=1)


def test_update_employee_validates_status():
    with pytest.raises(ValidationError):
        _service().update_employee(HR, "1", {"status": "Retired"}, version=1)
