from __future__ import annotations

from typing import Any, Dict, List, Optional

from src.core.supabase import Filters, SupabaseClient
from src.models.kpi import RealtorPartnerRecord

TABLE = "realtor_partners"


class RealtorPartnersRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_for_employee(self, employee_id: str) -> List[RealtorPartnerRecord]:
        rows = self.client.select(TABLE, filters=[("employee_id", f"eq.{employee_id}")], order="name.asc")
        return [RealtorPartnerRecord.model_validate(row) for row in rows]

    def create(self, payload: Dict[str, Any]) -> RealtorPartnerRecord:
        return RealtorPartnerRecord.model_validate(self.client.insert(TABLE, payload))

    def update(
        self, partner_id: str, employee_id: str, payload: Dict[str, Any]
    ) -> Optional[RealtorPartnerRecord]:
        row = self.client.update(TABLE, payload, filters=self._owned(partner_id, employee_id))
        return RealtorPartnerRecord.model_validate(row) if row else None

    def delete(self, partner_id: str, employee_id: str) -> bool:
        return bool(self.client.delete(TABLE, filters=self._owned(partner_id, employee_id)))

    @staticmethod
    def _owned(partner_id: str, employee_id: str) -> Filters:
        return [("id", f"eq.{partner_id}"), ("employee_id", f"eq.{employee_id}")]
