from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from src.shared.base import BaseSchema, BaseWriteSchema

LOAN_STATUS_PATTERN = "^(lead|pre_qualified|application|processing|locked|closed)$"
LOAN_TYPE_PATTERN = "^(purchase|refinance|heloc|construction|reverse)$"


class Loan(BaseSchema):
    id: str
    employee_id: str
    borrower_name: Optional[str] = None
    loan_amount: Decimal
    loan_type: str
    status: str
    locked_date: Optional[date] = None
    closed_date: Optional[date] = None
    expected_close_date: Optional[date] = None
    referral_source: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoanCreateRequest(BaseWriteSchema):
    borrower_name: Optional[str] = Field(default=None, max_length=200)
    loan_amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    loan_type: str = Field(default="purchase", pattern=LOAN_TYPE_PATTERN)
    status: str = Field(default="lead", pattern=LOAN_STATUS_PATTERN)
    locked_date: Optional[date] = None
    closed_date: Optional[date] = None
    expected_close_date: Optional[date] = None
    referral_source: Optional[str] = Field(default=None, max_length=200)


class LoanUpdateRequest(BaseWriteSchema):
    borrower_name: Optional[str] = Field(default=None, max_length=200)
    loan_amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    loan_type: Optional[str] = Field(default=None, pattern=LOAN_TYPE_PATTERN)
    status: Optional[str] = Field(default=None, pattern=LOAN_STATUS_PATTERN)
    locked_date: Optional[date] = None
    closed_date: Optional[date] = None
    expected_close_date: Optional[date] = None
    referral_source: Optional[str] = Field(default=None, max_length=200)


class LoanPipelineStage(BaseSchema):
    status: str
    display_label: str
    loan_count: int
    total_amount: Decimal


class LoanPipelineResponse(BaseSchema):
    year: int
    stages: List[LoanPipelineStage]
    total_loan_count: int
    total_amount: Decimal
