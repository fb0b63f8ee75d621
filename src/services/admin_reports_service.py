from __future__ import annotations

from datetime import date
from typing import List, Optional

from src.analytics.kpi_progress import build_progress_report, build_scorecard
from src.repositories.employees_repository import EmployeesRepository
from src.repositories.loans_repository import LoansRepository
from src.repositories.targets_repository import TargetsRepository
from src.repositories.weekly_activities_repository import WeeklyActivitiesRepository
from src.schemas.admin_reports import AdminOverviewResponse, EmployeeReportRow, TeamSummary
from src.schemas.employees import EmployeeSummary
from src.schemas.targets import KpiTarget, SalesTarget
from src.shared.numbers import ZERO, round_half_up


class AdminReportsService:
    def __init__(
        self,
        employees_repository: EmployeesRepository,
        targets_repository: TargetsRepository,
        activities_repository: WeeklyActivitiesRepository,
        loans_repository: LoansRepository,
    ) -> None:
        self.employees_repository = employees_repository
        self.targets_repository = targets_repository
        self.activities_repository = activities_repository
        self.loans_repository = loans_repository

    def list_employees(self) -> List[EmployeeSummary]:
        return [
            EmployeeSummary.model_validate(record.model_dump())
            for record in self.employees_repository.list_employees()
        ]

    def get_overview(self, as_of: Optional[date] = None) -> AdminOverviewResponse:
        as_of = as_of or date.today()
        rows: List[EmployeeReportRow] = []
        for employee in self.employees_repository.list_employees():
            kpi_target = self.targets_repository.get_kpi_target(employee.id, as_of.year)
            sales_target = self.targets_repository.get_sales_target(employee.id, as_of.year)
            activities = self.activities_repository.list_for_employee(employee.id)
            row = EmployeeReportRow(
                id=employee.id,
                name=employee.employee_name,
                username=employee.username,
                kpi_target=KpiTarget.model_validate(kpi_target.model_dump()) if kpi_target else None,
                sales_target=(
                    SalesTarget.model_validate(sales_target.model_dump()) if sales_target else None
                ),
                weekly_activity_count=len(activities),
            )
            if kpi_target is not None:
                loans = self.loans_repository.list_for_employee_year(employee.id, as_of.year)
                report = build_progress_report(as_of, activities, loans)
                # The team table shows the four-tier status, keyed on volume.
                scorecard = build_scorecard(report, kpi_target, include_exceeded=True)
                row.volume_progress = scorecard.volume.progress
                row.units_progress = scorecard.units.progress
                row.locked_progress = scorecard.locked_loans.progress
                row.status = scorecard.volume.status
            rows.append(row)
        return AdminOverviewResponse(year=as_of.year, summary=self._summarize(rows), employees=rows)

    @staticmethod
    def _summarize(rows: List[EmployeeReportRow]) -> TeamSummary:
        targets = [row.kpi_target for row in rows if row.kpi_target is not None]
        total_volume_goal = sum((target.annual_volume_goal for target in targets), ZERO)
        avg_units_target = (
            round_half_up(sum(target.required_units_monthly for target in targets) / len(targets))
            if targets
            else 0
        )
        return TeamSummary(
            total_volume_goal=total_volume_goal,
            avg_units_target=avg_units_target,
            employees_with_targets=len(targets),
            employee_count=len(rows),
        )
