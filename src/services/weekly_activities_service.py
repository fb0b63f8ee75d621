from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from src.core.errors import BadRequestError, NotFoundError
from src.repositories.weekly_activities_repository import WeeklyActivitiesRepository
from src.schemas.weekly_activities import (
    WeeklyActivity,
    WeeklyActivityUpdateRequest,
    WeeklyActivityUpsertRequest,
    WeeklyActivityUpsertResult,
)
from src.shared.time import parse_date_range

logger = logging.getLogger(__name__)


class WeeklyActivitiesService:
    def __init__(self, repository: WeeklyActivitiesRepository) -> None:
        self.repository = repository

    def list_activities(
        self,
        employee_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[WeeklyActivity]:
        start_date, end_date = parse_date_range(start_date, end_date)
        records = self.repository.list_for_employee(employee_id, start_date, end_date)
        return [WeeklyActivity.model_validate(record.model_dump()) for record in records]

    def upsert_activity(
        self, employee_id: str, request: WeeklyActivityUpsertRequest
    ) -> WeeklyActivityUpsertResult:
        payload = request.model_dump(mode="json")
        existing = self.repository.get_by_week(employee_id, request.week_start_date)
        if existing:
            record = self.repository.update(existing.id, employee_id, payload)
            if record is None:
                raise NotFoundError("Weekly activity not found")
            logger.debug("Updated week %s for employee %s", request.week_start_date, employee_id)
            return WeeklyActivityUpsertResult(
                activity=WeeklyActivity.model_validate(record.model_dump()), created=False
            )

        record = self.repository.create({**payload, "employee_id": employee_id})
        logger.debug("Logged week %s for employee %s", request.week_start_date, employee_id)
        return WeeklyActivityUpsertResult(
            activity=WeeklyActivity.model_validate(record.model_dump()), created=True
        )

    def update_activity(
        self, employee_id: str, activity_id: str, request: WeeklyActivityUpdateRequest
    ) -> WeeklyActivity:
        payload = request.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        if not payload:
            raise BadRequestError("No activity fields to update")
        record = self.repository.update(activity_id, employee_id, payload)
        if record is None:
            raise NotFoundError("Weekly activity not found")
        return WeeklyActivity.model_validate(record.model_dump())
