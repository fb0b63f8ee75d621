from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from factories import InMemoryActivitiesRepository, make_activity
from src.core.errors import BadRequestError, NotFoundError
from src.schemas.weekly_activities import WeeklyActivityUpdateRequest, WeeklyActivityUpsertRequest
from src.services.weekly_activities_service import WeeklyActivitiesService


def test_upsert_request_requires_monday_start() -> None:
    with pytest.raises(ValidationError):
        WeeklyActivityUpsertRequest(week_start_date=date(2025, 3, 4))


def test_upsert_request_defaults_week_end_to_sunday() -> None:
    request = WeeklyActivityUpsertRequest.model_validate({"weekStartDate": "2025-03-03", "faceToFaceMeetings": 2})
    assert request.week_end_date == date(2025, 3, 9)
    assert request.face_to_face_meetings == 2


def test_upsert_request_rejects_end_before_start_and_negative_counts() -> None:
    with pytest.raises(ValidationError):
        WeeklyActivityUpsertRequest(week_start_date=date(2025, 3, 3), week_end_date=date(2025, 3, 2))
    with pytest.raises(ValidationError):
        WeeklyActivityUpsertRequest(week_start_date=date(2025, 3, 3), events=-1)


def test_upsert_request_rejects_employee_id_in_body() -> None:
    with pytest.raises(ValidationError):
        WeeklyActivityUpsertRequest.model_validate({"weekStartDate": "2025-03-03", "employeeId": "someone-else"})


def test_upsert_creates_then_updates_the_same_week() -> None:
    repository = InMemoryActivitiesRepository()
    service = WeeklyActivitiesService(repository)

    first = service.upsert_activity(
        "employee-1", WeeklyActivityUpsertRequest(week_start_date=date(2025, 3, 3), face_to_face_meetings=2)
    )
    second = service.upsert_activity(
        "employee-1", WeeklyActivityUpsertRequest(week_start_date=date(2025, 3, 3), face_to_face_meetings=5)
    )

    assert first.created is True
    assert second.created is False
    assert second.activity.id == first.activity.id
    assert second.activity.face_to_face_meetings == 5
    assert second.activity.employee_id == "employee-1"
    assert len(repository.activities) == 1


def test_list_filters_by_range_and_requires_both_bounds() -> None:
    repository = InMemoryActivitiesRepository(
        [
            make_activity("2025-02-24"),
            make_activity("2025-03-03"),
            make_activity("2025-03-10"),
            make_activity("2025-03-10", employee_id="employee-2"),
        ]
    )
    service = WeeklyActivitiesService(repository)

    all_rows = service.list_activities("employee-1")
    march = service.list_activities("employee-1", date(2025, 3, 1), date(2025, 3, 31))

    assert [row.week_start_date for row in all_rows] == [
        date(2025, 3, 10),
        date(2025, 3, 3),
        date(2025, 2, 24),
    ]
    assert [row.week_start_date for row in march] == [date(2025, 3, 10), date(2025, 3, 3)]
    with pytest.raises(BadRequestError):
        service.list_activities("employee-1", start_date=date(2025, 3, 1))
    with pytest.raises(BadRequestError):
        service.list_activities("employee-1", date(2025, 3, 31), date(2025, 3, 1))


def test_update_activity_only_touches_own_rows() -> None:
    repository = InMemoryActivitiesRepository([make_activity("2025-03-03", meetings=1)])
    service = WeeklyActivitiesService(repository)

    updated = service.update_activity(
        "employee-1", "wa-2025-03-03", WeeklyActivityUpdateRequest(events=4)
    )
    assert updated.events == 4
    assert updated.face_to_face_meetings == 1

    with pytest.raises(NotFoundError):
        service.update_activity("employee-2", "wa-2025-03-03", WeeklyActivityUpdateRequest(events=1))
    with pytest.raises(BadRequestError):
        service.update_activity("employee-1", "wa-2025-03-03", WeeklyActivityUpdateRequest())
