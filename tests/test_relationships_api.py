from __future__ import annotations

import pytest

from factories import (
    EMPLOYEE_USER,
    InMemoryClientCountsRepository,
    InMemoryCoachingNotesRepository,
    InMemoryDailyActivitiesRepository,
    InMemoryEmployeesRepository,
    InMemoryRealtorPartnersRepository,
    make_employee,
)
from src.api.dependencies import (
    get_client_counts_service,
    get_coaching_notes_service,
    get_current_user,
    get_daily_activities_service,
    get_employees_service,
    get_realtor_partners_service,
)
from src.services.client_counts_service import ClientCountsService
from src.services.coaching_notes_service import CoachingNotesService
from src.services.daily_activities_service import DailyActivitiesService
from src.services.employees_service import EmployeesService
from src.services.realtor_partners_service import RealtorPartnersService


@pytest.fixture()
def daily(app) -> InMemoryDailyActivitiesRepository:
    repository = InMemoryDailyActivitiesRepository()
    app.dependency_overrides[get_daily_activities_service] = lambda: DailyActivitiesService(repository)
    return repository


@pytest.fixture()
def partners(app) -> InMemoryRealtorPartnersRepository:
    repository = InMemoryRealtorPartnersRepository()
    app.dependency_overrides[get_realtor_partners_service] = lambda: RealtorPartnersService(repository)
    return repository


@pytest.fixture()
def counts(app) -> InMemoryClientCountsRepository:
    repository = InMemoryClientCountsRepository()
    app.dependency_overrides[get_client_counts_service] = lambda: ClientCountsService(repository)
    return repository


@pytest.fixture()
def employees(app) -> InMemoryEmployeesRepository:
    repository = InMemoryEmployeesRepository(
        [make_employee("employee-1", "Sarah Johnson"), make_employee("admin-1", "System Admin", role="admin")]
    )
    app.dependency_overrides[get_employees_service] = lambda: EmployeesService(repository)
    return repository


@pytest.fixture()
def notes(app, employees) -> InMemoryCoachingNotesRepository:
    repository = InMemoryCoachingNotesRepository()
    app.dependency_overrides[get_coaching_notes_service] = lambda: CoachingNotesService(
        repository=repository, employees_repository=employees
    )
    return repository


def test_daily_activity_day_lookup_and_upsert(client, daily) -> None:
    empty = client.get("/api/v1/employee/daily-activities/2025-03-05")
    created = client.post(
        "/api/v1/employee/daily-activities", json={"activityDate": "2025-03-05", "callsMade": 12}
    )
    again = client.post(
        "/api/v1/employee/daily-activities", json={"activityDate": "2025-03-05", "callsMade": 20}
    )
    found = client.get("/api/v1/employee/daily-activities/2025-03-05")

    assert empty.status_code == 200
    assert empty.json()["data"] is None
    assert created.status_code == 201
    assert again.status_code == 200
    assert found.json()["data"]["callsMade"] == 20
    assert found.json()["data"]["employeeId"] == "employee-1"


def test_daily_activity_put_and_list(client, daily) -> None:
    created = client.post("/api/v1/employee/daily-activities", json={"activityDate": "2025-03-05"}).json()
    activity_id = created["data"]["id"]

    updated = client.put(f"/api/v1/employee/daily-activities/{activity_id}", json={"followUps": 6})
    missing = client.put("/api/v1/employee/daily-activities/missing", json={"followUps": 1})
    listed = client.get(
        "/api/v1/employee/daily-activities", params={"start_date": "2025-03-01", "end_date": "2025-03-31"}
    )

    assert updated.status_code == 200
    assert updated.json()["data"]["followUps"] == 6
    assert missing.status_code == 404
    assert listed.json()["pagination"]["totalItems"] == 1


def test_daily_activity_rejects_unknown_fields(client, daily) -> None:
    response = client.post(
        "/api/v1/employee/daily-activities",
        json={"activityDate": "2025-03-05", "employeeId": "employee-2"},
    )

    assert response.status_code == 422
    assert daily.activities == []


def test_realtor_partner_lifecycle(client, partners) -> None:
    created = client.post(
        "/api/v1/employee/realtor-partners",
        json={"name": "Dana Reyes", "company": "Harbor Realty", "relationshipStrength": "developing"},
    )
    partner_id = created.json()["data"]["id"]
    updated = client.put(f"/api/v1/employee/realtor-partners/{partner_id}", json={"loansReferred": 3})
    listed = client.get("/api/v1/employee/realtor-partners")
    deleted = client.delete(f"/api/v1/employee/realtor-partners/{partner_id}")
    deleted_again = client.delete(f"/api/v1/employee/realtor-partners/{partner_id}")

    assert created.status_code == 201
    assert updated.json()["data"]["loansReferred"] == 3
    assert [row["name"] for row in listed.json()["data"]] == ["Dana Reyes"]
    assert deleted.json()["data"] == {"id": partner_id, "deleted": True}
    assert deleted_again.status_code == 404


def test_realtor_partner_rejects_unknown_strength(client, partners) -> None:
    response = client.post(
        "/api/v1/employee/realtor-partners", json={"name": "Dana", "relationshipStrength": "besties"}
    )
    assert response.status_code == 422


def test_past_clients_and_top_realtors_counts(client, counts) -> None:
    assert client.get("/api/v1/employee/past-clients").json()["data"] is None

    created = client.put("/api/v1/employee/past-clients", json={"totalCount": 120})
    updated = client.put("/api/v1/employee/past-clients", json={"totalCount": 130})
    realtors = client.put("/api/v1/employee/top-realtors", json={"totalCount": 8})

    assert created.status_code == 201
    assert updated.status_code == 200
    assert client.get("/api/v1/employee/past-clients").json()["data"]["totalCount"] == 130
    assert realtors.json()["data"]["totalCount"] == 8
    assert client.put("/api/v1/employee/top-realtors", json={"totalCount": -1}).status_code == 422


def test_coaching_note_visibility(app, admin_client, notes) -> None:
    public = admin_client.post(
        "/api/v1/admin/coaching-notes",
        json={"employeeId": "employee-1", "noteType": "praise", "subject": "Great month", "content": "18 units"},
    )
    private = admin_client.post(
        "/api/v1/admin/coaching-notes",
        json={"employeeId": "employee-1", "subject": "Watch locks", "content": "...", "isPrivate": True},
    )

    assert public.status_code == 201
    assert public.json()["data"]["managerId"] == "admin-1"
    assert private.json()["data"]["isPrivate"] is True
    assert len(admin_client.get("/api/v1/admin/coaching-notes/employee-1").json()["data"]) == 2

    app.dependency_overrides[get_current_user] = lambda: EMPLOYEE_USER
    visible = admin_client.get("/api/v1/employee/coaching-notes").json()["data"]
    assert [note["subject"] for note in visible] == ["Great month"]


def test_employees_cannot_write_coaching_notes(client, notes) -> None:
    response = client.post(
        "/api/v1/admin/coaching-notes", json={"employeeId": "employee-1", "subject": "x", "content": "y"}
    )
    assert response.status_code == 403
    assert notes.notes == []


def test_admin_manages_employee_accounts(admin_client, employees) -> None:
    created = admin_client.post(
        "/api/v1/admin/employees",
        json={
            "username": "mchen",
            "email": "mchen@example.com",
            "employeeName": "Mike Chen",
            "password": "secret1",
        },
    )
    employee_id = created.json()["data"]["id"]
    updated = admin_client.put(f"/api/v1/admin/employees/{employee_id}", json={"password": "another1"})
    missing = admin_client.put("/api/v1/admin/employees/ghost", json={"employeeName": "Nobody"})
    self_delete = admin_client.delete("/api/v1/admin/employees/admin-1")
    deleted = admin_client.delete(f"/api/v1/admin/employees/{employee_id}")

    assert created.status_code == 201
    assert created.json()["data"]["role"] == "employee"
    assert "password" not in created.json()["data"]
    assert updated.status_code == 200
    assert employees.passwords[employee_id] == "another1"
    assert missing.status_code == 404
    assert self_delete.status_code == 400
    assert deleted.json()["data"]["deleted"] is True
    assert admin_client.delete(f"/api/v1/admin/employees/{employee_id}").status_code == 404


def test_short_password_is_rejected(admin_client, employees) -> None:
    response = admin_client.post(
        "/api/v1/admin/employees",
        json={"username": "x", "email": "x@example.com", "employeeName": "X", "password": "123"},
    )
    assert response.status_code == 422


def test_employee_accounts_are_admin_only(client, employees) -> None:
    response = client.delete("/api/v1/admin/employees/employee-1")
    assert response.status_code == 403
    assert len(employees.employees) == 2
