from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from src.core.supabase import SupabaseClient
from src.models.kpi import LoanRecord
from src.shared.time import year_bounds

MAX_QUERY_ROWS = 2000


class LoansRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_for_employee_year(self, employee_id: str, year: int) -> List[LoanRecord]:
        """Loans opened, locked or closed during the year."""
        start, end = year_bounds(year)
        start_text, end_text = start.isoformat(), end.isoformat()
        next_year_text = year_bounds(year + 1)[0].isoformat()
        in_year = (
            f"(and(closed_date.gte.{start_text},closed_date.lte.{end_text}),"
            f"and(locked_date.gte.{start_text},locked_date.lte.{end_text}),"
            f"and(created_at.gte.{start_text},created_at.lt.{next_year_text}))"
        )
        rows = self.client.select(
            "loans",
            filters=[("employee_id", f"eq.{employee_id}"), ("or", in_year)],
            limit=MAX_QUERY_ROWS,
            order="created_at.desc",
        )
        return [LoanRecord.model_validate(row) for row in rows]

    def get_by_id(self, loan_id: str, employee_id: str) -> Optional[LoanRecord]:
        row = self.client.select_one("loans", filters=self._owned(loan_id, employee_id))
        return LoanRecord.model_validate(row) if row else None

    def create(self, payload: Dict[str, Any]) -> LoanRecord:
        return LoanRecord.model_validate(self.client.insert("loans", payload))

    def update(self, loan_id: str, employee_id: str, payload: Dict[str, Any]) -> Optional[LoanRecord]:
        row = self.client.update("loans", payload, filters=self._owned(loan_id, employee_id))
        return LoanRecord.model_validate(row) if row else None

    @staticmethod
    def _owned(loan_id: str, employee_id: str) -> List[Tuple[str, str]]:
        return [("id", f"eq.{loan_id}"), ("employee_id", f"eq.{employee_id}")]
