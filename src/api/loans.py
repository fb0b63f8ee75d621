from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user, get_loans_service
from src.schemas.employees import CurrentUser
from src.schemas.loans import Loan, LoanCreateRequest, LoanPipelineResponse, LoanUpdateRequest
from src.services.loans_service import LoansService
from src.shared.response import ResponseEnvelope, build_meta, paginate_list

router = APIRouter(prefix="/employee/loans", tags=["loans"])


def _resolve_year(year: Optional[int]) -> int:
    return year or date.today().year


@router.get("")
def list_loans(
    year: Optional[int] = Query(default=None, ge=2000, le=2100),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=100, ge=1, le=500),
    user: CurrentUser = Depends(get_current_user),
    service: LoansService = Depends(get_loans_service),
) -> ResponseEnvelope[List[Loan]]:
    resolved_year = _resolve_year(year)
    data = service.list_loans(user.id, resolved_year)
    paged_data, pagination = paginate_list(data, page, page_size)
    meta = build_meta(source="loans", time_window=str(resolved_year))
    return ResponseEnvelope(data=paged_data, pagination=pagination, meta=meta)


@router.get("/pipeline")
def loan_pipeline(
    year: Optional[int] = Query(default=None, ge=2000, le=2100),
    user: CurrentUser = Depends(get_current_user),
    service: LoansService = Depends(get_loans_service),
) -> ResponseEnvelope[LoanPipelineResponse]:
    resolved_year = _resolve_year(year)
    data = service.get_pipeline(user.id, resolved_year)
    meta = build_meta(source="loans", time_window=str(resolved_year))
    return ResponseEnvelope(data=data, meta=meta)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_loan(
    request: LoanCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    service: LoansService = Depends(get_loans_service),
) -> ResponseEnvelope[Loan]:
    data = service.create_loan(user.id, request)
    return ResponseEnvelope(data=data, meta=build_meta(source="loans", time_window="na"))


@router.put("/{loan_id}")
def update_loan(
    loan_id: str,
    request: LoanUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    service: LoansService = Depends(get_loans_service),
) -> ResponseEnvelope[Loan]:
    data = service.update_loan(user.id, loan_id, request)
    return ResponseEnvelope(data=data, meta=build_meta(source="loans", time_window="na"))
