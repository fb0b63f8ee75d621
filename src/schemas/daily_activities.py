from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import ConfigDict, Field

from src.shared.base import BaseSchema, BaseWriteSchema


class DailyActivityFilters(BaseSchema):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=31, ge=1, le=366)


class DailyActivity(BaseSchema):
    id: str
    employee_id: str
    activity_date: date
    calls_made: int
    appointments_scheduled: int
    appointments_completed: int
    applications_submitted: int
    pre_quals_completed: int
    credit_pulls: int
    follow_ups: int
    realtor_meetings: int
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DailyActivityCounters(BaseWriteSchema):
    calls_made: int = Field(default=0, ge=0)
    appointments_scheduled: int = Field(default=0, ge=0)
    appointments_completed: int = Field(default=0, ge=0)
    applications_submitted: int = Field(default=0, ge=0)
    pre_quals_completed: int = Field(default=0, ge=0)
    credit_pulls: int = Field(default=0, ge=0)
    follow_ups: int = Field(default=0, ge=0)
    realtor_meetings: int = Field(default=0, ge=0)
    notes: Optional[str] = None


class DailyActivityUpsertRequest(DailyActivityCounters):
    activity_date: date


class DailyActivityUpdateRequest(BaseWriteSchema):
    calls_made: Optional[int] = Field(default=None, ge=0)
    appointments_scheduled: Optional[int] = Field(default=None, ge=0)
    appointments_completed: Optional[int] = Field(default=None, ge=0)
    applications_submitted: Optional[int] = Field(default=None, ge=0)
    pre_quals_completed: Optional[int] = Field(default=None, ge=0)
    credit_pulls: Optional[int] = Field(default=None, ge=0)
    follow_ups: Optional[int] = Field(default=None, ge=0)
    realtor_meetings: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None


class DailyActivityUpsertResult(BaseSchema):
    activity: DailyActivity
    created: bool
