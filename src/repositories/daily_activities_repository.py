from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from src.core.supabase import Filters, SupabaseClient
from src.models.kpi import DailyActivityRecord

TABLE = "daily_activities"
MAX_QUERY_ROWS = 2000


class DailyActivitiesRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_for_employee(
        self,
        employee_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[DailyActivityRecord]:
        filters: Filters = [("employee_id", f"eq.{employee_id}")]
        if start_date and end_date:
            filters.append(("activity_date", f"gte.{start_date.isoformat()}"))
            filters.append(("activity_date", f"lte.{end_date.isoformat()}"))
        rows = self.client.select(TABLE, filters=filters, limit=MAX_QUERY_ROWS, order="activity_date.desc")
        return [DailyActivityRecord.model_validate(row) for row in rows]

    def get_by_date(self, employee_id: str, activity_date: date) -> Optional[DailyActivityRecord]:
        row = self.client.select_one(
            TABLE,
            filters=[
                ("employee_id", f"eq.{employee_id}"),
                ("activity_date", f"eq.{activity_date.isoformat()}"),
            ],
        )
        return DailyActivityRecord.model_validate(row) if row else None

    def create(self, payload: Dict[str, Any]) -> DailyActivityRecord:
        return DailyActivityRecord.model_validate(self.client.insert(TABLE, payload))

    def update(
        self, activity_id: str, employee_id: str, payload: Dict[str, Any]
    ) -> Optional[DailyActivityRecord]:
        row = self.client.update(
            TABLE,
            payload,
            filters=[("id", f"eq.{activity_id}"), ("employee_id", f"eq.{employee_id}")],
        )
        return DailyActivityRecord.model_validate(row) if row else None
