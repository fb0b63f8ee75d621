from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from src.shared.base import BaseSchema, BaseWriteSchema


class KpiTarget(BaseSchema):
    id: str
    employee_id: str
    year: int
    annual_volume_goal: Decimal
    avg_loan_amount: Decimal
    required_units_monthly: int
    lock_percentage: Decimal
    locked_loans_monthly: int
    new_file_to_locked_percentage: Decimal
    new_files_monthly: Decimal
    updated_at: Optional[datetime] = None


class KpiTargetFields(BaseWriteSchema):
    annual_volume_goal: Decimal = Field(gt=0, max_digits=15, decimal_places=2)
    avg_loan_amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    required_units_monthly: int = Field(gt=0)
    lock_percentage: Decimal = Field(ge=0, le=100, decimal_places=2)
    locked_loans_monthly: int = Field(gt=0)
    new_file_to_locked_percentage: Decimal = Field(ge=0, le=100, decimal_places=2)
    new_files_monthly: Decimal = Field(gt=0, max_digits=8, decimal_places=2)


class KpiTargetCreateRequest(KpiTargetFields):
    employee_id: str = Field(min_length=1)
    year: int = Field(ge=2000, le=2100)


class KpiTargetUpdateRequest(BaseWriteSchema):
    annual_volume_goal: Optional[Decimal] = Field(default=None, gt=0, max_digits=15, decimal_places=2)
    avg_loan_amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    required_units_monthly: Optional[int] = Field(default=None, gt=0)
    lock_percentage: Optional[Decimal] = Field(default=None, ge=0, le=100, decimal_places=2)
    locked_loans_monthly: Optional[int] = Field(default=None, gt=0)
    new_file_to_locked_percentage: Optional[Decimal] = Field(
        default=None, ge=0, le=100, decimal_places=2
    )
    new_files_monthly: Optional[Decimal] = Field(default=None, gt=0, max_digits=8, decimal_places=2)


class SalesTarget(BaseSchema):
    id: str
    employee_id: str
    year: int
    events_target: int
    meetings_target: int
    thankyou_target: int
    prospecting_target: int
    videos_target: int
    updated_at: Optional[datetime] = None


class SalesTargetCreateRequest(BaseWriteSchema):
    employee_id: str = Field(min_length=1)
    year: int = Field(ge=2000, le=2100)
    events_target: int = Field(default=52, gt=0)
    meetings_target: int = Field(default=240, gt=0)
    thankyou_target: int = Field(default=365, gt=0)
    prospecting_target: int = Field(default=365, gt=0)
    videos_target: int = Field(default=365, gt=0)


class SalesTargetUpdateRequest(BaseWriteSchema):
    events_target: Optional[int] = Field(default=None, gt=0)
    meetings_target: Optional[int] = Field(default=None, gt=0)
    thankyou_target: Optional[int] = Field(default=None, gt=0)
    prospecting_target: Optional[int] = Field(default=None, gt=0)
    videos_target: Optional[int] = Field(default=None, gt=0)
