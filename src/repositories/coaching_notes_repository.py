from __future__ import annotations

from typing import Any, Dict, List

from src.core.supabase import Filters, SupabaseClient
from src.models.kpi import CoachingNoteRecord

TABLE = "coaching_notes"


class CoachingNotesRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_for_employee(self, employee_id: str, include_private: bool = False) -> List[CoachingNoteRecord]:
        """Newest first."""
        filters: Filters = [("employee_id", f"eq.{employee_id}")]
        if not include_private:
            filters.append(("is_private", "eq.0"))
        rows = self.client.select(TABLE, filters=filters, order="created_at.desc")
        return [CoachingNoteRecord.model_validate(row) for row in rows]

    def create(self, payload: Dict[str, Any]) -> CoachingNoteRecord:
        row = {**payload, "is_private": 1 if payload.get("is_private") else 0}
        return CoachingNoteRecord.model_validate(self.client.insert(TABLE, row))
