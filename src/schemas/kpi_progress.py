from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from src.shared.base import BaseSchema


class ActivityTotals(BaseSchema):
    events: int = 0
    meetings: int = 0
    videos: int = 0
    thankyou_cards: int = 0
    leads_received: int = 0
    hours_prospected: float = 0.0


class WeeklyActivityBucket(ActivityTotals):
    week_number: int = Field(ge=1)


class MonthlyActivityBucket(ActivityTotals):
    month: int = Field(ge=1, le=12)
    activity_count: int = 0


class ProgressReport(BaseSchema):
    volume_completed: Decimal
    units_this_month: int
    locked_loans_this_month: int
    year_totals: ActivityTotals
    month_totals: ActivityTotals
    weekly_breakdown: List[WeeklyActivityBucket]
    monthly_breakdown: List[MonthlyActivityBucket]
    activities_this_year: int
    activities_this_month: int


class MetricProgress(BaseSchema):
    actual: Decimal
    target: Decimal
    progress: int
    status: str


class ProgressScorecard(BaseSchema):
    volume: MetricProgress
    units: MetricProgress
    locked_loans: MetricProgress


class ActivityGoalProgress(BaseSchema):
    key: str
    display_label: str
    actual: float
    target: int
    progress: int
    status: str


class KpiProgressResponse(BaseSchema):
    year: int
    month: int
    progress: Optional[ProgressReport] = None
    scorecard: Optional[ProgressScorecard] = None
    activity_goals: List[ActivityGoalProgress] = Field(default_factory=list)
