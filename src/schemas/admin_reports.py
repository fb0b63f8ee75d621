from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from src.schemas.targets import KpiTarget, SalesTarget
from src.shared.base import BaseSchema


class EmployeeReportRow(BaseSchema):
    id: str
    name: str
    username: str
    kpi_target: Optional[KpiTarget] = None
    sales_target: Optional[SalesTarget] = None
    weekly_activity_count: int
    volume_progress: Optional[int] = None
    units_progress: Optional[int] = None
    locked_progress: Optional[int] = None
    status: Optional[str] = None


class TeamSummary(BaseSchema):
    total_volume_goal: Decimal
    avg_units_target: int
    employees_with_targets: int
    employee_count: int


class AdminOverviewResponse(BaseSchema):
    year: int
    summary: TeamSummary
    employees: List[EmployeeReportRow]
