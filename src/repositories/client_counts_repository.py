from __future__ import annotations

from typing import Optional

from src.core.supabase import SupabaseClient
from src.models.kpi import ClientCountRecord

PAST_CLIENTS_TABLE = "past_clients"
TOP_REALTORS_TABLE = "top_realtors"
COUNT_TABLES = (PAST_CLIENTS_TABLE, TOP_REALTORS_TABLE)


class ClientCountsRepository:
    """Per-employee running totals; each table holds at most one row per employee_id."""

    def __init__(self) -> None:
        self.client = SupabaseClient()

    def get(self, table: str, employee_id: str) -> Optional[ClientCountRecord]:
        row = self.client.select_one(table, filters=[("employee_id", f"eq.{employee_id}")])
        return ClientCountRecord.model_validate(row) if row else None

    def create(self, table: str, employee_id: str, total_count: int) -> ClientCountRecord:
        row = self.client.insert(table, {"employee_id": employee_id, "total_count": total_count})
        return ClientCountRecord.model_validate(row)

    def update(
        self, table: str, employee_id: str, total_count: int, updated_at: str
    ) -> Optional[ClientCountRecord]:
        row = self.client.update(
            table,
            {"total_count": total_count, "updated_at": updated_at},
            filters=[("employee_id", f"eq.{employee_id}")],
        )
        return ClientCountRecord.model_validate(row) if row else None
