from __future__ import annotations

from typing import Any, Dict, Optional

from src.core.supabase import SupabaseClient
from src.models.kpi import KpiTargetRecord, SalesTargetRecord

KPI_TARGETS_TABLE = "employee_kpi_targets"
SALES_TARGETS_TABLE = "employee_sales_targets"


class TargetsRepository:
    """Yearly targets; at most one row per (employee_id, year) in each table."""

    def __init__(self) -> None:
        self.client = SupabaseClient()

    def get_kpi_target(self, employee_id: str, year: int) -> Optional[KpiTargetRecord]:
        row = self._get_for_year(KPI_TARGETS_TABLE, employee_id, year)
        return KpiTargetRecord.model_validate(row) if row else None

    def create_kpi_target(self, payload: Dict[str, Any]) -> KpiTargetRecord:
        return KpiTargetRecord.model_validate(self.client.insert(KPI_TARGETS_TABLE, payload))

    def update_kpi_target(self, target_id: str, payload: Dict[str, Any]) -> Optional[KpiTargetRecord]:
        row = self.client.update(KPI_TARGETS_TABLE, payload, filters=[("id", f"eq.{target_id}")])
        return KpiTargetRecord.model_validate(row) if row else None

    def get_sales_target(self, employee_id: str, year: int) -> Optional[SalesTargetRecord]:
        row = self._get_for_year(SALES_TARGETS_TABLE, employee_id, year)
        return SalesTargetRecord.model_validate(row) if row else None

    def create_sales_target(self, payload: Dict[str, Any]) -> SalesTargetRecord:
        return SalesTargetRecord.model_validate(self.client.insert(SALES_TARGETS_TABLE, payload))

    def update_sales_target(
        self, target_id: str, payload: Dict[str, Any]
    ) -> Optional[SalesTargetRecord]:
        row = self.client.update(SALES_TARGETS_TABLE, payload, filters=[("id", f"eq.{target_id}")])
        return SalesTargetRecord.model_validate(row) if row else None

    def _get_for_year(self, table: str, employee_id: str, year: int) -> Optional[Dict[str, Any]]:
        return self.client.select_one(
            table, filters=[("employee_id", f"eq.{employee_id}"), ("year", f"eq.{year}")]
        )
