from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from src.analytics.kpi_progress import build_activity_goals, build_progress_report, build_scorecard
from src.repositories.loans_repository import LoansRepository
from src.repositories.targets_repository import TargetsRepository
from src.repositories.weekly_activities_repository import WeeklyActivitiesRepository
from src.schemas.kpi_progress import KpiProgressResponse

logger = logging.getLogger(__name__)


class KpiProgressService:
    def __init__(
        self,
        activities_repository: WeeklyActivitiesRepository,
        loans_repository: LoansRepository,
        targets_repository: TargetsRepository,
    ) -> None:
        self.activities_repository = activities_repository
        self.loans_repository = loans_repository
        self.targets_repository = targets_repository

    def get_progress(self, employee_id: str, as_of: Optional[date] = None) -> KpiProgressResponse:
        as_of = as_of or date.today()
        target = self.targets_repository.get_kpi_target(employee_id, as_of.year)
        if target is None:
            logger.info("No KPI target configured for employee %s in %s", employee_id, as_of.year)
            return KpiProgressResponse(year=as_of.year, month=as_of.month, progress=None)

        activities = self.activities_repository.list_for_employee(employee_id)
        loans = self.loans_repository.list_for_employee_year(employee_id, as_of.year)
        report = build_progress_report(as_of, activities, loans)

        sales_target = self.targets_repository.get_sales_target(employee_id, as_of.year)
        return KpiProgressResponse(
            year=as_of.year,
            month=as_of.month,
            progress=report,
            scorecard=build_scorecard(report, target),
            activity_goals=build_activity_goals(report.year_totals, sales_target),
        )
