from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from src.core.errors import BadRequestError, NotFoundError
from src.models.kpi import LOAN_STATUSES
from src.repositories.loans_repository import LoansRepository
from src.schemas.loans import (
    Loan,
    LoanCreateRequest,
    LoanPipelineResponse,
    LoanPipelineStage,
    LoanUpdateRequest,
)
from src.shared.numbers import ZERO, parse_decimal

logger = logging.getLogger(__name__)

STAGE_LABELS = {
    "lead": "Leads",
    "pre_qualified": "Pre-Qualified",
    "application": "Application",
    "processing": "Processing",
    "locked": "Locked",
    "closed": "Closed",
}
# Moving a loan into one of these stages stamps the matching date when none is supplied.
STAGE_DATE_FIELDS = {"locked": "locked_date", "closed": "closed_date"}
REQUIRED_COLUMNS = ("loan_amount", "loan_type", "status")


class LoansService:
    def __init__(self, repository: LoansRepository) -> None:
        self.repository = repository

    def list_loans(self, employee_id: str, year: int) -> List[Loan]:
        records = self.repository.list_for_employee_year(employee_id, year)
        return [Loan.model_validate(record.model_dump()) for record in records]

    def get_pipeline(self, employee_id: str, year: int) -> LoanPipelineResponse:
        records = self.repository.list_for_employee_year(employee_id, year)
        totals: Dict[str, Tuple[int, Decimal]] = defaultdict(lambda: (0, ZERO))
        for record in records:
            count, amount = totals[record.status]
            totals[record.status] = (count + 1, amount + parse_decimal(record.loan_amount))

        stages: List[LoanPipelineStage] = []
        for status in LOAN_STATUSES:
            count, amount = totals.get(status, (0, ZERO))
            stages.append(
                LoanPipelineStage(
                    status=status,
                    display_label=STAGE_LABELS[status],
                    loan_count=count,
                    total_amount=amount,
                )
            )
        return LoanPipelineResponse(
            year=year,
            stages=stages,
            total_loan_count=sum(stage.loan_count for stage in stages),
            total_amount=sum((stage.total_amount for stage in stages), ZERO),
        )

    def create_loan(
        self, employee_id: str, request: LoanCreateRequest, as_of: Optional[date] = None
    ) -> Loan:
        payload = request.model_dump(mode="json")
        self._stamp_stage_date(payload, request.status, previous_status=None, as_of=as_of)
        record = self.repository.create({**payload, "employee_id": employee_id})
        return Loan.model_validate(record.model_dump())

    def update_loan(
        self,
        employee_id: str,
        loan_id: str,
        request: LoanUpdateRequest,
        as_of: Optional[date] = None,
    ) -> Loan:
        payload = request.model_dump(mode="json", exclude_unset=True)
        for column in REQUIRED_COLUMNS:
            if column in payload and payload[column] is None:
                del payload[column]
        if not payload:
            raise BadRequestError("No loan fields to update")
        existing = self.repository.get_by_id(loan_id, employee_id)
        if existing is None:
            raise NotFoundError("Loan not found")
        if request.status:
            self._stamp_stage_date(payload, request.status, existing.status, as_of)
        payload["updated_at"] = datetime.now(timezone.utc).isoformat()
        record = self.repository.update(loan_id, employee_id, payload)
        if record is None:
            raise NotFoundError("Loan not found")
        return Loan.model_validate(record.model_dump())

    @staticmethod
    def _stamp_stage_date(
        payload: Dict[str, Any],
        status: str,
        previous_status: Optional[str],
        as_of: Optional[date],
    ) -> None:
        date_field = STAGE_DATE_FIELDS.get(status)
        if not date_field or status == previous_status or payload.get(date_field):
            return
        stamp = (as_of or date.today()).isoformat()
        payload[date_field] = stamp
        logger.info("Stamped %s=%s on move to %s", date_field, stamp, status)
