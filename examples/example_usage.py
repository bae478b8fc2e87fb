"""Example: drive the leave workflow through the service layer (no Flask).

Runs against the in-memory store seeded with the sample directory.
"""

import importlib

from config import get_settings_module

from src.iakwe_hr.iakwe_hr.container import build_container
from src.iakwe_hr.iakwe_hr.core.constants import EMPLOYEES_TABLE
from src.iakwe_hr.iakwe_hr.database.sample_data import SAMPLE_COMPANY_ID, SAMPLE_EMPLOYEES
from src.iakwe_hr.iakwe_hr.store.memory import InMemoryStore
from src.iakwe_hr.iakwe_hr.users.model import Actor


def main():
    settings = importlib.import_module(get_settings_module())
    store = InMemoryStore()
    store.seed(EMPLOYEES_TABLE, SAMPLE_EMPLOYEES)
    container = build_container(settings=settings, store=store)
    hr = Actor(role="HR Manager", full_name="Lani Kabua", email="lani@example.mh", company_id=SAMPLE_COMPANY_ID)
    gm = Actor(role="General Manager", full_name="Jeban Riklon", email="gm@example.mh", company_id=SAMPLE_COMPANY_ID)

    req = container.leave_service.create_leave_request(
        hr,
        employee_id="1",
        leave_type="Cultural Leave",
        cultural_context="Kemem Celebrations",
        start_date="2024-12-23",
        end_date="2024-12-27",
        reason="Family kemem on Arno",
    )
    print(container.leave_service.preview(req.start_date, req.end_date).holiday_notice)

    approved = container.leave_service.approve(gm, req.id, version=req.version)
    print(approved.status.value, approved.approved_by)


if __name__ == "__main__":
    main()
