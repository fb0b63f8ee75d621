from __future__ import annotations

from datetime import date
from decimal import Decimal

from factories import make_activity, make_kpi_target, make_loan, make_sales_target
from src.analytics.kpi_progress import (
    bucket_by_month,
    bucket_by_week,
    build_activity_goals,
    build_scorecard,
    compute_progress,
    derive_loan_metrics,
    percent_of,
    reduce_counters,
    status_of,
)

AS_OF = date(2025, 3, 20)


def test_no_target_returns_none_whatever_the_records() -> None:
    activities = [make_activity("2025-03-03", meetings=4)]
    loans = [make_loan("450000.00", status="closed", closed="2025-03-15")]
    assert compute_progress(AS_OF, activities, loans, None) is None
    assert compute_progress(AS_OF, [], [], None) is None


def test_weekly_breakdown_buckets_by_week_start_day() -> None:
    activities = [
        make_activity("2025-03-03", meetings=2, events=1),
        make_activity("2025-03-10", meetings=1, events=0),
    ]
    report = compute_progress(AS_OF, activities, [], make_kpi_target())

    assert report is not None
    weeks = report.weekly_breakdown
    assert [week.week_number for week in weeks] == [1, 2, 3, 4]
    assert (weeks[0].meetings, weeks[0].events) == (2, 1)
    assert (weeks[1].meetings, weeks[1].events) == (1, 0)
    for week in weeks[2:]:
        assert week.meetings == 0
        assert week.events == 0
        assert week.hours_prospected == 0.0


def test_weekly_buckets_add_up_to_month_totals() -> None:
    activities = [
        make_activity("2025-03-03", meetings=2, videos=1, hours="3.50"),
        make_activity("2025-03-10", meetings=5, cards=4, hours="1.25"),
        make_activity("2025-03-17", meetings=1, leads=2),
        make_activity("2025-03-24", meetings=3, events=2, hours="2.00"),
    ]
    report = compute_progress(AS_OF, activities, [], make_kpi_target())

    assert report is not None
    assert sum(week.meetings for week in report.weekly_breakdown) == report.month_totals.meetings == 11
    assert sum(week.hours_prospected for week in report.weekly_breakdown) == 6.75
    assert report.activities_this_month == 4


def test_week_starting_on_the_31st_counts_for_the_month_but_not_the_weeks() -> None:
    activities = [
        make_activity("2025-03-24", meetings=1),
        make_activity("2025-03-31", meetings=5),
    ]
    report = compute_progress(date(2025, 3, 31), activities, [], make_kpi_target())

    assert report is not None
    assert report.month_totals.meetings == 6
    assert sum(week.meetings for week in report.weekly_breakdown) == 1
    assert len(report.weekly_breakdown) == 4
    assert sorted(bucket_by_week(activities)) == [4, 5]


def test_year_and_month_partitions() -> None:
    activities = [
        make_activity("2024-03-04", meetings=9),
        make_activity("2025-02-03", meetings=2, events=1),
        make_activity("2025-02-10", meetings=1),
        make_activity("2025-03-03", meetings=4),
    ]
    report = compute_progress(AS_OF, activities, [], make_kpi_target())

    assert report is not None
    assert report.activities_this_year == 3
    assert report.activities_this_month == 1
    assert report.year_totals.meetings == 7
    assert report.month_totals.meetings == 4

    months = report.monthly_breakdown
    assert [month.month for month in months] == list(range(1, 13))
    assert (months[1].meetings, months[1].events, months[1].activity_count) == (3, 1, 2)
    assert (months[2].meetings, months[2].activity_count) == (4, 1)
    assert all(month.activity_count == 0 for month in months[3:])


def test_bucket_by_month_always_has_twelve_months() -> None:
    buckets = bucket_by_month([make_activity("2025-07-07")])
    assert sorted(buckets) == list(range(1, 13))
    assert len(buckets[7]) == 1
    assert buckets[1] == []


def test_volume_scenario_from_closed_loans() -> None:
    target = make_kpi_target(annual_volume_goal="100000000", required_units_monthly=24, locked_loans_monthly=26)
    loans = [
        make_loan("45000000", status="closed", closed="2025-03-15"),
        make_loan("10000000", status="closed", closed=None),
    ]
    report = compute_progress(AS_OF, [], loans, target)

    assert report is not None
    assert report.volume_completed == Decimal("45000000")
    assert percent_of(report.volume_completed, target.annual_volume_goal) == 45
    assert build_scorecard(report, target).volume.progress == 45


def test_volume_trusts_closed_date_over_status() -> None:
    base = [make_loan("300000.00", status="closed", closed="2025-01-20")]
    with_noise = base + [
        make_loan("999999.00", status="closed"),
        make_loan("123456.00", status="locked", locked="2025-03-02"),
        make_loan("50000.00", status="lead"),
    ]
    assert derive_loan_metrics(base, AS_OF).volume_completed == Decimal("300000.00")
    assert derive_loan_metrics(with_noise, AS_OF).volume_completed == Decimal("300000.00")

    processing_with_date = [make_loan("200000.00", status="processing", closed="2025-02-11")]
    assert derive_loan_metrics(processing_with_date, AS_OF).volume_completed == Decimal("200000.00")


def test_units_and_locks_count_only_the_current_month() -> None:
    loans = [
        make_loan("100.00", status="closed", closed="2025-03-01", locked="2025-02-20"),
        make_loan("200.00", status="closed", closed="2025-03-19", locked="2025-03-05"),
        make_loan("300.00", status="closed", closed="2025-02-28"),
        make_loan("400.00", status="locked", locked="2025-03-12"),
        make_loan("500.00", status="locked", locked="2024-03-12"),
    ]
    metrics = derive_loan_metrics(loans, AS_OF)

    assert metrics.units_this_month == 2
    assert metrics.locked_loans_this_month == 2
    assert metrics.volume_completed == Decimal("600.00")


def test_unparsable_hours_reduce_as_zero() -> None:
    totals = reduce_counters(
        [
            make_activity("2025-03-03", hours="abc"),
            make_activity("2025-03-10", hours="2.50"),
            make_activity("2025-03-17", hours=None),
            make_activity("2025-03-24", hours=""),
        ]
    )
    assert totals.hours_prospected == 2.5


def test_compute_progress_is_idempotent() -> None:
    activities = [make_activity("2025-03-03", meetings=2, hours="1.10"), make_activity("2025-01-06", events=3)]
    loans = [make_loan("250000.00", status="closed", closed="2025-03-04", locked="2025-02-21")]
    target = make_kpi_target()

    first = compute_progress(AS_OF, activities, loans, target)
    second = compute_progress(AS_OF, activities, loans, target)

    assert first is not None
    assert first == second
    assert first.model_dump_json() == second.model_dump_json()


def test_target_without_records_gives_all_zero_report() -> None:
    target = make_kpi_target()
    report = compute_progress(AS_OF, [], [], target)

    assert report is not None
    assert report.volume_completed == Decimal("0")
    assert report.units_this_month == 0
    assert report.locked_loans_this_month == 0
    assert report.year_totals.model_dump() == report.month_totals.model_dump()
    assert report.year_totals.meetings == 0
    assert report.year_totals.hours_prospected == 0.0
    assert report.activities_this_year == 0

    scorecard = build_scorecard(report, target)
    assert scorecard.volume.progress == 0
    assert scorecard.units.progress == 0
    assert scorecard.locked_loans.progress == 0
    assert status_of(0) == "behind"
    assert scorecard.volume.status == "behind"


def test_status_thresholds() -> None:
    assert status_of(80) == "on-track"
    assert status_of(79) == "at-risk"
    assert status_of(60) == "at-risk"
    assert status_of(59) == "behind"
    assert status_of(150) == "on-track"
    assert status_of(150, include_exceeded=True) == "exceeded"
    assert status_of(101, include_exceeded=True) == "exceeded"
    assert status_of(100, include_exceeded=True) == "on-track"
    assert status_of(45, include_exceeded=True) == "behind"


def test_percent_of_guards_missing_denominators_and_rounds_half_up() -> None:
    assert percent_of(5, 0) == 0
    assert percent_of(5, None) == 0
    assert percent_of(5, "not-a-number") == 0
    assert percent_of(1, 8) == 13
    assert percent_of(18, 24) == 75
    assert percent_of(Decimal("45000000"), Decimal("100000000.00")) == 45


def test_scorecard_uses_monthly_unit_and_lock_targets() -> None:
    target = make_kpi_target(required_units_monthly=24, locked_loans_monthly=26)
    loans = [make_loan("1.00", status="closed", closed=f"2025-03-{day:02d}") for day in range(1, 19)]
    loans += [make_loan("1.00", status="locked", locked=f"2025-03-{day:02d}") for day in range(1, 23)]
    report = compute_progress(AS_OF, [], loans, target)

    assert report is not None
    scorecard = build_scorecard(report, target)
    assert scorecard.units.progress == 75
    assert scorecard.units.status == "at-risk"
    assert scorecard.locked_loans.progress == 85
    assert scorecard.locked_loans.status == "on-track"


def test_activity_goals_against_sales_target() -> None:
    totals = reduce_counters(
        [
            make_activity("2025-01-06", events=26, meetings=200, cards=100, hours="365", videos=10),
        ]
    )
    goals = {goal.key: goal for goal in build_activity_goals(totals, make_sales_target())}

    assert goals["events"].progress == 50
    assert goals["events"].status == "behind"
    assert goals["meetings"].progress == 83
    assert goals["meetings"].status == "on-track"
    assert goals["hours_prospected"].actual == 365.0
    assert goals["hours_prospected"].progress == 100
    assert goals["videos"].target == 365
    assert build_activity_goals(totals, None) == []


def test_volume_counts_only_loans_closed_in_the_report_year() -> None:
    loans = [
        make_loan("400000.00", status="closed", closed="2024-12-28", created="2025-01-03T10:00:00+00:00"),
        make_loan("250000.00", status="closed", closed="2026-01-09", locked="2025-12-15"),
        make_loan("300000.00", status="closed", closed="2025-01-10"),
    ]

    metrics = derive_loan_metrics(loans, date(2025, 1, 15))

    assert metrics.volume_completed == Decimal("300000.00")
    assert metrics.units_this_month == 1
    assert derive_loan_metrics(loans, date(2024, 12, 31)).volume_completed == Decimal("400000.00")


def test_hours_totals_are_rounded_to_cents() -> None:
    totals = reduce_counters(
        [
            make_activity("2025-03-03", hours="1.10"),
            make_activity("2025-03-10", hours="2.20"),
            make_activity("2025-03-17", hours="0.10"),
        ]
    )

    assert totals.hours_prospected == 3.4
    assert totals.model_dump_json(by_alias=True).count('"hoursProspected":3.4') == 1
