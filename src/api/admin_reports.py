from __future__ import annotations

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_admin_reports_service, get_employees_service, require_admin
from src.schemas.admin_reports import AdminOverviewResponse
from src.schemas.employees import (
    CurrentUser,
    EmployeeCreateRequest,
    EmployeeSummary,
    EmployeeUpdateRequest,
)
from src.services.admin_reports_service import AdminReportsService
from src.services.employees_service import EmployeesService
from src.shared.response import DeleteResult, ResponseEnvelope, build_meta, build_pagination

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/employees")
def list_employees(
    service: AdminReportsService = Depends(get_admin_reports_service),
) -> ResponseEnvelope[List[EmployeeSummary]]:
    data = service.list_employees()
    pagination = build_pagination(page=1, page_size=max(len(data), 1), total_items=len(data))
    return ResponseEnvelope(
        data=data, pagination=pagination, meta=build_meta(source="users", time_window="now")
    )


@router.post("/employees", status_code=status.HTTP_201_CREATED)
def create_employee(
    request: EmployeeCreateRequest,
    service: EmployeesService = Depends(get_employees_service),
) -> ResponseEnvelope[EmployeeSummary]:
    data = service.create_employee(request)
    return ResponseEnvelope(data=data, meta=build_meta(source="users", time_window="now"))


@router.put("/employees/{employee_id}")
def update_employee(
    employee_id: str,
    request: EmployeeUpdateRequest,
    service: EmployeesService = Depends(get_employees_service),
) -> ResponseEnvelope[EmployeeSummary]:
    data = service.update_employee(employee_id, request)
    return ResponseEnvelope(data=data, meta=build_meta(source="users", time_window="now"))


@router.delete("/employees/{employee_id}")
def delete_employee(
    employee_id: str,
    user: CurrentUser = Depends(require_admin),
    service: EmployeesService = Depends(get_employees_service),
) -> ResponseEnvelope[DeleteResult]:
    data = service.delete_employee(employee_id, acting_user_id=user.id)
    return ResponseEnvelope(data=data, meta=build_meta(source="users", time_window="now"))


@router.get("/reports/overview")
def reports_overview(
    service: AdminReportsService = Depends(get_admin_reports_service),
) -> ResponseEnvelope[AdminOverviewResponse]:
    as_of = date.today()
    data = service.get_overview(as_of)
    meta = build_meta(
        source="users,employee_kpi_targets,employee_sales_targets,weekly_activities,loans",
        time_window="ytd",
        as_of=as_of,
    )
    return ResponseEnvelope(data=data, meta=meta)
