from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel

from src.core.errors import BadRequestError, NotFoundError
from src.repositories.targets_repository import TargetsRepository
from src.schemas.targets import (
    KpiTarget,
    KpiTargetCreateRequest,
    KpiTargetUpdateRequest,
    SalesTarget,
    SalesTargetCreateRequest,
    SalesTargetUpdateRequest,
)

logger = logging.getLogger(__name__)


class TargetsService:
    def __init__(self, repository: TargetsRepository) -> None:
        self.repository = repository

    def get_kpi_target(self, employee_id: str, year: int) -> Optional[KpiTarget]:
        record = self.repository.get_kpi_target(employee_id, year)
        return KpiTarget.model_validate(record.model_dump()) if record else None

    def save_kpi_target(self, request: KpiTargetCreateRequest) -> Tuple[KpiTarget, bool]:
        """Create the target for (employee, year), or overwrite the one already there."""
        payload = request.model_dump(mode="json")
        existing = self.repository.get_kpi_target(request.employee_id, request.year)
        if existing:
            record = self.repository.update_kpi_target(existing.id, self._stamp(payload))
            if record is None:
                raise NotFoundError("KPI target not found")
            logger.info("Replaced KPI target %s for employee %s", existing.id, request.employee_id)
            return KpiTarget.model_validate(record.model_dump()), False
        record = self.repository.create_kpi_target(payload)
        logger.info("Created KPI target %s for employee %s", record.id, request.employee_id)
        return KpiTarget.model_validate(record.model_dump()), True

    def update_kpi_target(self, target_id: str, request: KpiTargetUpdateRequest) -> KpiTarget:
        payload = self._update_payload(request)
        record = self.repository.update_kpi_target(target_id, payload)
        if record is None:
            raise NotFoundError("KPI target not found")
        return KpiTarget.model_validate(record.model_dump())

    def get_sales_target(self, employee_id: str, year: int) -> Optional[SalesTarget]:
        record = self.repository.get_sales_target(employee_id, year)
        return SalesTarget.model_validate(record.model_dump()) if record else None

    def save_sales_target(self, request: SalesTargetCreateRequest) -> Tuple[SalesTarget, bool]:
        payload = request.model_dump(mode="json")
        existing = self.repository.get_sales_target(request.employee_id, request.year)
        if existing:
            record = self.repository.update_sales_target(existing.id, self._stamp(payload))
            if record is None:
                raise NotFoundError("Sales target not found")
            return SalesTarget.model_validate(record.model_dump()), False
        record = self.repository.create_sales_target(payload)
        return SalesTarget.model_validate(record.model_dump()), True

    def update_sales_target(self, target_id: str, request: SalesTargetUpdateRequest) -> SalesTarget:
        payload = self._update_payload(request)
        record = self.repository.update_sales_target(target_id, payload)
        if record is None:
            raise NotFoundError("Sales target not found")
        return SalesTarget.model_validate(record.model_dump())

    def _update_payload(self, request: BaseModel) -> Dict[str, Any]:
        payload = request.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        if not payload:
            raise BadRequestError("No target fields to update")
        return self._stamp(payload)

    @staticmethod
    def _stamp(payload: Dict[str, Any]) -> Dict[str, Any]:
        return {**payload, "updated_at": datetime.now(timezone.utc).isoformat()}
