from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, field_validator

from src.shared.numbers import ZERO, parse_decimal

LOAN_STATUSES = ("lead", "pre_qualified", "application", "processing", "locked", "closed")
ROLE_ADMIN = "admin"
ROLE_EMPLOYEE = "employee"


class EmployeeRecord(BaseModel):
    id: str
    username: str
    role: str = ROLE_EMPLOYEE
    employee_name: str
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


class WeeklyActivityRecord(BaseModel):
    id: str
    employee_id: str
    week_start_date: date
    week_end_date: date
    face_to_face_meetings: int = 0
    events: int = 0
    videos: int = 0
    # numeric(5,2) arrives as a number or as text depending on the PostgREST config
    hours_prospected: Optional[str] = None
    thank_you_cards: int = 0
    leads_received: int = 0
    daily_breakdown: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None

    @field_validator(
        "face_to_face_meetings",
        "events",
        "videos",
        "thank_you_cards",
        "leads_received",
        mode="before",
    )
    @classmethod
    def _null_counter_is_zero(cls, value: object) -> object:
        return 0 if value is None else value

    @field_validator("hours_prospected", mode="before")
    @classmethod
    def _hours_as_text(cls, value: object) -> object:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class LoanRecord(BaseModel):
    id: str
    employee_id: str
    borrower_name: Optional[str] = None
    loan_amount: Decimal = ZERO
    loan_type: str = "purchase"
    status: str = "lead"
    locked_date: Optional[date] = None
    closed_date: Optional[date] = None
    expected_close_date: Optional[date] = None
    referral_source: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("loan_amount", mode="before")
    @classmethod
    def _parse_amount(cls, value: object) -> Decimal:
        return parse_decimal(value)


class KpiTargetRecord(BaseModel):
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
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SalesTargetRecord(BaseModel):
    id: str
    employee_id: str
    year: int
    events_target: int = 52
    meetings_target: int = 240
    thankyou_target: int = 365
    prospecting_target: int = 365
    videos_target: int = 365
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DailyActivityRecord(BaseModel):
    id: str
    employee_id: str
    activity_date: date
    calls_made: int = 0
    appointments_scheduled: int = 0
    appointments_completed: int = 0
    applications_submitted: int = 0
    pre_quals_completed: int = 0
    credit_pulls: int = 0
    follow_ups: int = 0
    realtor_meetings: int = 0
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator(
        "calls_made",
        "appointments_scheduled",
        "appointments_completed",
        "applications_submitted",
        "pre_quals_completed",
        "credit_pulls",
        "follow_ups",
        "realtor_meetings",
        mode="before",
    )
    @classmethod
    def _null_counter_is_zero(cls, value: object) -> object:
        return 0 if value is None else value


class RealtorPartnerRecord(BaseModel):
    id: str
    employee_id: str
    name: str
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    last_contact_date: Optional[date] = None
    relationship_strength: str = "new"
    loans_referred: int = 0
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("loans_referred", mode="before")
    @classmethod
    def _null_referrals_is_zero(cls, value: object) -> object:
        return 0 if value is None else value


class CoachingNoteRecord(BaseModel):
    id: str
    employee_id: str
    manager_id: str
    note_type: str = "feedback"
    subject: str
    content: str
    action_items: Optional[str] = None
    # Stored as integer 0/1
    is_private: bool = False
    created_at: Optional[datetime] = None

    @field_validator("is_private", mode="before")
    @classmethod
    def _flag_as_bool(cls, value: object) -> object:
        return False if value is None else bool(value)


class ClientCountRecord(BaseModel):
    """One running total per employee, used for both past clients and top realtors."""

    id: str
    employee_id: str
    total_count: int = 0
    updated_at: Optional[datetime] = None

    @field_validator("total_count", mode="before")
    @classmethod
    def _null_count_is_zero(cls, value: object) -> object:
        return 0 if value is None else value
