from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import ConfigDict, Field, field_validator, model_validator

from src.shared.base import BaseSchema, BaseWriteSchema
from src.shared.time import default_week_end


class WeeklyActivityFilters(BaseSchema):
    # Keep query parameter names in snake_case for API contract consistency.
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=52, ge=1, le=200)


class WeeklyActivity(BaseSchema):
    id: str
    employee_id: str
    week_start_date: date
    week_end_date: date
    face_to_face_meetings: int
    events: int
    videos: int
    hours_prospected: Optional[str] = None
    thank_you_cards: int
    leads_received: int
    daily_breakdown: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None


class WeeklyActivityCounters(BaseWriteSchema):
    face_to_face_meetings: int = Field(default=0, ge=0)
    events: int = Field(default=0, ge=0)
    videos: int = Field(default=0, ge=0)
    hours_prospected: Decimal = Field(default=Decimal("0"), ge=0, max_digits=5, decimal_places=2)
    thank_you_cards: int = Field(default=0, ge=0)
    leads_received: int = Field(default=0, ge=0)
    daily_breakdown: Optional[Dict[str, Any]] = None


class WeeklyActivityUpsertRequest(WeeklyActivityCounters):
    week_start_date: date
    week_end_date: Optional[date] = None

    @field_validator("week_start_date")
    @classmethod
    def _starts_on_monday(cls, value: date) -> date:
        if value.weekday() != 0:
            raise ValueError("week_start_date must be a Monday")
        return value

    @model_validator(mode="after")
    def _fill_week_end(self) -> "WeeklyActivityUpsertRequest":
        if self.week_end_date is None:
            self.week_end_date = default_week_end(self.week_start_date)
        elif self.week_end_date < self.week_start_date:
            raise ValueError("week_end_date must not be before week_start_date")
        return self


class WeeklyActivityUpdateRequest(BaseWriteSchema):
    face_to_face_meetings: Optional[int] = Field(default=None, ge=0)
    events: Optional[int] = Field(default=None, ge=0)
    videos: Optional[int] = Field(default=None, ge=0)
    hours_prospected: Optional[Decimal] = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    thank_you_cards: Optional[int] = Field(default=None, ge=0)
    leads_received: Optional[int] = Field(default=None, ge=0)
    daily_breakdown: Optional[Dict[str, Any]] = None


class WeeklyActivityUpsertResult(BaseSchema):
    activity: WeeklyActivity
    created: bool
