"""Sample directory used to seed development stores and for degraded reads in development."""

from __future__ import annotations

SAMPLE_COMPANY_ID = "majuro-demo"

SAMPLE_EMPLOYEES: list[dict] = [
    {
        "id": "1",
        "employee_id": "EMP001",
        "first_name": "John",
        "last_name": "Doe",
        "email": "john.doe@company.com",
        "department": "Engineering",
        "position": "Senior Developer",
        "employment_type": "Full-time",
        "status": "Active",
        "location": "Majuro",
        "start_date": "2023-01-15",
        "company_id": SAMPLE_COMPANY_ID,
    },
    {
        "id": "2",
        "employee_id": "EMP002",
        "first_name": "Sarah",
        "last_name": "Johnson",
        "email": "sarah.johnson@company.com",
        "department": "Human Resources",
        "position": "HR Manager",
        "employment_type": "Full-time",
        "status": "Active",
        "location": "Ebeye",
        "start_date": "2022-08-20",
        "company_id": SAMPLE_COMPANY_ID,
    },
    {
        "id": "3",
        "employee_id": "EMP003",
        "first_name": "David",
        "last_name": "Kabua",
        "email": "david.kabua@company.com",
        "department": "Operations",
        "position": "Logistics Coordinator",
        "employment_type": "Part-time",
        "status": "On Leave",
        "location": "Majuro",
        "start_date": "2021-03-02",
        "company_id": SAMPLE_COMPANY_ID,
    },
]
