from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from src.core.errors import BadRequestError, NotFoundError
from src.repositories.daily_activities_repository import DailyActivitiesRepository
from src.schemas.daily_activities import (
    DailyActivity,
    DailyActivityUpdateRequest,
    DailyActivityUpsertRequest,
    DailyActivityUpsertResult,
)
from src.shared.time import parse_date_range

logger = logging.getLogger(__name__)


class DailyActivitiesService:
    def __init__(self, repository: DailyActivitiesRepository) -> None:
        self.repository = repository

    def list_activities(
        self,
        employee_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[DailyActivity]:
        start_date, end_date = parse_date_range(start_date, end_date)
        records = self.repository.list_for_employee(employee_id, start_date, end_date)
        return [DailyActivity.model_validate(record.model_dump()) for record in records]

    def get_activity(self, employee_id: str, activity_date: date) -> Optional[DailyActivity]:
        record = self.repository.get_by_date(employee_id, activity_date)
        return DailyActivity.model_validate(record.model_dump()) if record else None

    def upsert_activity(
        self, employee_id: str, request: DailyActivityUpsertRequest
    ) -> DailyActivityUpsertResult:
        """One row per (employee, day): a second post for the same day overwrites it."""
        payload = request.model_dump(mode="json")
        existing = self.repository.get_by_date(employee_id, request.activity_date)
        if existing:
            record = self.repository.update(existing.id, employee_id, _stamp(payload))
            if record is None:
                raise NotFoundError("Daily activity not found")
            logger.debug("Updated day %s for employee %s", request.activity_date, employee_id)
            return DailyActivityUpsertResult(
                activity=DailyActivity.model_validate(record.model_dump()), created=False
            )

        record = self.repository.create({**payload, "employee_id": employee_id})
        logger.debug("Logged day %s for employee %s", request.activity_date, employee_id)
        return DailyActivityUpsertResult(
            activity=DailyActivity.model_validate(record.model_dump()), created=True
        )

    def update_activity(
        self, employee_id: str, activity_id: str, request: DailyActivityUpdateRequest
    ) -> DailyActivity:
        payload = request.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        if not payload:
            raise BadRequestError("No activity fields to update")
        record = self.repository.update(activity_id, employee_id, _stamp(payload))
        if record is None:
            raise NotFoundError("Daily activity not found")
        return DailyActivity.model_validate(record.model_dump())


def _stamp(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {**payload, "updated_at": datetime.now(timezone.utc).isoformat()}
