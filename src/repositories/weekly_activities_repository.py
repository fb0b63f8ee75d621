from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from src.core.supabase import SupabaseClient
from src.models.kpi import WeeklyActivityRecord

TABLE = "weekly_activities"
MAX_QUERY_ROWS = 2000


class WeeklyActivitiesRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_for_employee(
        self,
        employee_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[WeeklyActivityRecord]:
        """Newest week first. A range keeps only weeks lying fully inside it."""
        filters: List[Tuple[str, str]] = [("employee_id", f"eq.{employee_id}")]
        if start_date and end_date:
            filters.append(("week_start_date", f"gte.{start_date.isoformat()}"))
            filters.append(("week_end_date", f"lte.{end_date.isoformat()}"))
        rows = self.client.select(
            TABLE, filters=filters, limit=MAX_QUERY_ROWS, order="week_start_date.desc"
        )
        return [WeeklyActivityRecord.model_validate(row) for row in rows]

    def get_by_week(self, employee_id: str, week_start_date: date) -> Optional[WeeklyActivityRecord]:
        row = self.client.select_one(
            TABLE,
            filters=[
                ("employee_id", f"eq.{employee_id}"),
                ("week_start_date", f"eq.{week_start_date.isoformat()}"),
            ],
        )
        return WeeklyActivityRecord.model_validate(row) if row else None

    def create(self, payload: Dict[str, Any]) -> WeeklyActivityRecord:
        return WeeklyActivityRecord.model_validate(self.client.insert(TABLE, payload))

    def update(
        self, activity_id: str, employee_id: str, payload: Dict[str, Any]
    ) -> Optional[WeeklyActivityRecord]:
        row = self.client.update(
            TABLE,
            payload,
            filters=[("id", f"eq.{activity_id}"), ("employee_id", f"eq.{employee_id}")],
        )
        return WeeklyActivityRecord.model_validate(row) if row else None
