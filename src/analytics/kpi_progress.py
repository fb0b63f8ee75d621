from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

from src.models.kpi import KpiTargetRecord, LoanRecord, SalesTargetRecord, WeeklyActivityRecord
from src.schemas.kpi_progress import (
    ActivityGoalProgress,
    ActivityTotals,
    MetricProgress,
    MonthlyActivityBucket,
    ProgressReport,
    ProgressScorecard,
    WeeklyActivityBucket,
)
from src.shared.numbers import ZERO, parse_decimal, round_half_up
from src.shared.time import is_same_month, week_of_month

ON_TRACK_THRESHOLD = 80
AT_RISK_THRESHOLD = 60
EXCEEDED_THRESHOLD = 100
WEEKS_IN_BREAKDOWN = 4
MONTHS_IN_YEAR = 12
HOURS_PRECISION = Decimal("0.01")

STATUS_BEHIND = "behind"
STATUS_AT_RISK = "at-risk"
STATUS_ON_TRACK = "on-track"
STATUS_EXCEEDED = "exceeded"


class LoanMetrics(NamedTuple):
    volume_completed: Decimal
    units_this_month: int
    locked_loans_this_month: int


def reduce_counters(activities: Iterable[WeeklyActivityRecord]) -> ActivityTotals:
    totals = ActivityTotals()
    hours = ZERO
    for activity in activities:
        totals.events += activity.events
        totals.meetings += activity.face_to_face_meetings
        totals.videos += activity.videos
        totals.thankyou_cards += activity.thank_you_cards
        totals.leads_received += activity.leads_received
        hours += parse_decimal(activity.hours_prospected)
    # Hours are summed as Decimal and leave rounded to two places.
    totals.hours_prospected = float(hours.quantize(HOURS_PRECISION, rounding=ROUND_HALF_UP))
    return totals


def activities_in_year(
    activities: Iterable[WeeklyActivityRecord], as_of: date
) -> List[WeeklyActivityRecord]:
    return [activity for activity in activities if activity.week_start_date.year == as_of.year]


def activities_in_month(
    activities: Iterable[WeeklyActivityRecord], as_of: date
) -> List[WeeklyActivityRecord]:
    return [activity for activity in activities if is_same_month(activity.week_start_date, as_of)]


def bucket_by_week(
    activities: Iterable[WeeklyActivityRecord],
) -> Dict[int, List[WeeklyActivityRecord]]:
    """Group one month's activities by ceil(week-start day / 7).

    Weeks starting on day 29-31 land in bucket 5; callers emitting the
    four-week breakdown leave that bucket out.
    """
    buckets: Dict[int, List[WeeklyActivityRecord]] = defaultdict(list)
    for activity in activities:
        buckets[week_of_month(activity.week_start_date)].append(activity)
    return dict(buckets)


def bucket_by_month(
    activities: Iterable[WeeklyActivityRecord],
) -> Dict[int, List[WeeklyActivityRecord]]:
    buckets: Dict[int, List[WeeklyActivityRecord]] = {month: [] for month in range(1, MONTHS_IN_YEAR + 1)}
    for activity in activities:
        buckets[activity.week_start_date.month].append(activity)
    return buckets


def build_weekly_breakdown(month_activities: Sequence[WeeklyActivityRecord]) -> List[WeeklyActivityBucket]:
    buckets = bucket_by_week(month_activities)
    breakdown: List[WeeklyActivityBucket] = []
    for week_number in range(1, WEEKS_IN_BREAKDOWN + 1):
        totals = reduce_counters(buckets.get(week_number, []))
        breakdown.append(WeeklyActivityBucket(week_number=week_number, **totals.model_dump()))
    return breakdown


def build_monthly_breakdown(year_activities: Sequence[WeeklyActivityRecord]) -> List[MonthlyActivityBucket]:
    breakdown: List[MonthlyActivityBucket] = []
    for month, month_activities in sorted(bucket_by_month(year_activities).items()):
        totals = reduce_counters(month_activities)
        breakdown.append(
            MonthlyActivityBucket(
                month=month,
                activity_count=len(month_activities),
                **totals.model_dump(),
            )
        )
    return breakdown


def derive_loan_metrics(loans: Iterable[LoanRecord], as_of: date) -> LoanMetrics:
    # Dates are trusted over status: a "closed" loan with no closed_date counts nowhere,
    # and the closed_date year alone decides which year's volume a loan feeds.
    volume_completed = ZERO
    units_this_month = 0
    locked_loans_this_month = 0
    for loan in loans:
        if loan.closed_date is not None and loan.closed_date.year == as_of.year:
            volume_completed += parse_decimal(loan.loan_amount)
            if is_same_month(loan.closed_date, as_of):
                units_this_month += 1
        if loan.locked_date is not None and is_same_month(loan.locked_date, as_of):
            locked_loans_this_month += 1
    return LoanMetrics(
        volume_completed=volume_completed,
        units_this_month=units_this_month,
        locked_loans_this_month=locked_loans_this_month,
    )


def compute_progress(
    as_of: date,
    activities: Sequence[WeeklyActivityRecord],
    loans_this_year: Sequence[LoanRecord],
    target: Optional[KpiTargetRecord],
) -> Optional[ProgressReport]:
    if target is None:
        return None
    return build_progress_report(as_of, activities, loans_this_year)


def build_progress_report(
    as_of: date,
    activities: Sequence[WeeklyActivityRecord],
    loans_this_year: Sequence[LoanRecord],
) -> ProgressReport:
    year_activities = activities_in_year(activities, as_of)
    month_activities = activities_in_month(year_activities, as_of)
    loan_metrics = derive_loan_metrics(loans_this_year, as_of)

    return ProgressReport(
        volume_completed=loan_metrics.volume_completed,
        units_this_month=loan_metrics.units_this_month,
        locked_loans_this_month=loan_metrics.locked_loans_this_month,
        year_totals=reduce_counters(year_activities),
        month_totals=reduce_counters(month_activities),
        weekly_breakdown=build_weekly_breakdown(month_activities),
        monthly_breakdown=build_monthly_breakdown(year_activities),
        activities_this_year=len(year_activities),
        activities_this_month=len(month_activities),
    )


def percent_of(actual: object, goal: object) -> int:
    goal_value = parse_decimal(goal)
    if goal_value <= 0:
        return 0
    return round_half_up(parse_decimal(actual) / goal_value * 100)


def status_of(progress: float, include_exceeded: bool = False) -> str:
    if include_exceeded and progress > EXCEEDED_THRESHOLD:
        return STATUS_EXCEEDED
    if progress >= ON_TRACK_THRESHOLD:
        return STATUS_ON_TRACK
    if progress >= AT_RISK_THRESHOLD:
        return STATUS_AT_RISK
    return STATUS_BEHIND


def _metric(actual: object, goal: object, include_exceeded: bool) -> MetricProgress:
    progress = percent_of(actual, goal)
    return MetricProgress(
        actual=parse_decimal(actual),
        target=parse_decimal(goal),
        progress=progress,
        status=status_of(progress, include_exceeded),
    )


def build_scorecard(
    report: ProgressReport, target: KpiTargetRecord, include_exceeded: bool = False
) -> ProgressScorecard:
    return ProgressScorecard(
        volume=_metric(report.volume_completed, target.annual_volume_goal, include_exceeded),
        units=_metric(report.units_this_month, target.required_units_monthly, include_exceeded),
        locked_loans=_metric(
            report.locked_loans_this_month, target.locked_loans_monthly, include_exceeded
        ),
    )


def build_activity_goals(
    year_totals: ActivityTotals, sales_target: Optional[SalesTargetRecord]
) -> List[ActivityGoalProgress]:
    if sales_target is None:
        return []
    goals = [
        ("events", "Events", year_totals.events, sales_target.events_target),
        ("meetings", "Face-to-Face Meetings", year_totals.meetings, sales_target.meetings_target),
        ("thankyou_cards", "Thank-You Cards", year_totals.thankyou_cards, sales_target.thankyou_target),
        (
            "hours_prospected",
            "Hours Prospected",
            year_totals.hours_prospected,
            sales_target.prospecting_target,
        ),
        ("videos", "Videos", year_totals.videos, sales_target.videos_target),
    ]
    results: List[ActivityGoalProgress] = []
    for key, label, actual, target in goals:
        progress = percent_of(actual, target)
        results.append(
            ActivityGoalProgress(
                key=key,
                display_label=label,
                actual=float(actual),
                target=target,
                progress=progress,
                status=status_of(progress),
            )
        )
    return results
