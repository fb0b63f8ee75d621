from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

from src.core.errors import BadRequestError, NotFoundError
from src.repositories.realtor_partners_repository import RealtorPartnersRepository
from src.schemas.realtor_partners import (
    RealtorPartner,
    RealtorPartnerCreateRequest,
    RealtorPartnerUpdateRequest,
)
from src.shared.response import DeleteResult

logger = logging.getLogger(__name__)


class RealtorPartnersService:
    def __init__(self, repository: RealtorPartnersRepository) -> None:
        self.repository = repository

    def list_partners(self, employee_id: str) -> List[RealtorPartner]:
        records = self.repository.list_for_employee(employee_id)
        return [RealtorPartner.model_validate(record.model_dump()) for record in records]

    def create_partner(self, employee_id: str, request: RealtorPartnerCreateRequest) -> RealtorPartner:
        record = self.repository.create({**request.model_dump(mode="json"), "employee_id": employee_id})
        logger.info("Added realtor partner %s for employee %s", record.id, employee_id)
        return RealtorPartner.model_validate(record.model_dump())

    def update_partner(
        self, employee_id: str, partner_id: str, request: RealtorPartnerUpdateRequest
    ) -> RealtorPartner:
        payload = request.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        if not payload:
            raise BadRequestError("No partner fields to update")
        payload["updated_at"] = datetime.now(timezone.utc).isoformat()
        record = self.repository.update(partner_id, employee_id, payload)
        if record is None:
            raise NotFoundError("Realtor partner not found")
        return RealtorPartner.model_validate(record.model_dump())

    def delete_partner(self, employee_id: str, partner_id: str) -> DeleteResult:
        if not self.repository.delete(partner_id, employee_id):
            raise NotFoundError("Realtor partner not found")
        logger.info("Removed realtor partner %s for employee %s", partner_id, employee_id)
        return DeleteResult(id=partner_id, deleted=True)
