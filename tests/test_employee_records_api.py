from __future__ import annotations

from decimal import Decimal

import pytest

from factories import InMemoryActivitiesRepository, InMemoryLoansRepository, make_loan
from src.api.dependencies import get_loans_service, get_weekly_activities_service
from src.services.loans_service import LoansService
from src.services.weekly_activities_service import WeeklyActivitiesService


@pytest.fixture()
def activities(app) -> InMemoryActivitiesRepository:
    repository = InMemoryActivitiesRepository()
    app.dependency_overrides[get_weekly_activities_service] = lambda: WeeklyActivitiesService(repository)
    return repository


@pytest.fixture()
def loans(app) -> InMemoryLoansRepository:
    repository = InMemoryLoansRepository(
        [make_loan("250000.00", status="application", loan_id="loan-1", employee_id="employee-2")]
    )
    app.dependency_overrides[get_loans_service] = lambda: LoansService(repository)
    return repository


def test_weekly_activity_post_creates_then_updates(client, activities) -> None:
    body = {"weekStartDate": "2025-03-03", "faceToFaceMeetings": 2, "hoursProspected": "3.50"}

    created = client.post("/api/v1/employee/weekly-activities", json=body)
    updated = client.post("/api/v1/employee/weekly-activities", json={**body, "faceToFaceMeetings": 4})

    assert created.status_code == 201
    assert created.json()["data"]["weekEndDate"] == "2025-03-09"
    assert created.json()["data"]["employeeId"] == "employee-1"
    assert updated.status_code == 200
    assert updated.json()["data"]["faceToFaceMeetings"] == 4
    assert len(activities.activities) == 1


def test_weekly_activity_post_rejects_non_monday(client, activities) -> None:
    response = client.post("/api/v1/employee/weekly-activities", json={"weekStartDate": "2025-03-05"})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "validation_error"
    assert activities.activities == []


def test_weekly_activity_list_is_paginated(client, activities) -> None:
    for week_start in ("2025-03-03", "2025-03-10", "2025-03-17"):
        client.post("/api/v1/employee/weekly-activities", json={"weekStartDate": week_start})

    response = client.get("/api/v1/employee/weekly-activities", params={"page_size": 2})

    assert response.status_code == 200
    payload = response.json()
    assert [row["weekStartDate"] for row in payload["data"]] == ["2025-03-17", "2025-03-10"]
    assert payload["pagination"]["totalItems"] == 3
    assert payload["pagination"]["totalPages"] == 2


def test_weekly_activity_list_rejects_half_open_range(client, activities) -> None:
    response = client.get("/api/v1/employee/weekly-activities", params={"start_date": "2025-03-01"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "bad_request"


def test_weekly_activity_put_unknown_id(client, activities) -> None:
    response = client.put("/api/v1/employee/weekly-activities/missing", json={"events": 1})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "not_found"


def test_loan_create_and_pipeline(client, loans) -> None:
    created = client.post(
        "/api/v1/employee/loans",
        json={"borrowerName": "Pat Lee", "loanAmount": "425000.00", "status": "closed"},
    )

    assert created.status_code == 201
    data = created.json()["data"]
    assert data["employeeId"] == "employee-1"
    assert data["closedDate"] is not None
    assert Decimal(data["loanAmount"]) == Decimal("425000.00")

    pipeline = client.get("/api/v1/employee/loans/pipeline").json()["data"]
    closed = next(stage for stage in pipeline["stages"] if stage["status"] == "closed")
    assert closed["loanCount"] == 1
    assert pipeline["totalLoanCount"] == 1


def test_loan_create_rejects_unknown_status(client, loans) -> None:
    response = client.post("/api/v1/employee/loans", json={"loanAmount": "1000.00", "status": "funded"})
    assert response.status_code == 422


def test_loan_update_of_another_employees_loan_is_not_found(client, loans) -> None:
    response = client.put("/api/v1/employee/loans/loan-1", json={"status": "processing"})

    assert response.status_code == 404
    assert loans.loans[0].status == "application"


def test_employee_endpoints_require_session(anonymous_client, activities, loans) -> None:
    assert anonymous_client.get("/api/v1/employee/weekly-activities").status_code == 401
    assert anonymous_client.get("/api/v1/employee/loans").status_code == 401
    assert anonymous_client.get("/api/v1/auth/me").status_code == 401


def test_auth_me_returns_session_user(client) -> None:
    response = client.get("/api/v1/auth/me")

    assert response.status_code == 200
    assert response.json()["data"]["username"] == "sjohnson"
