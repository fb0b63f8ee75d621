from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Path, Response, status

from src.api.dependencies import get_current_user, get_targets_service, require_admin
from src.schemas.employees import CurrentUser
from src.schemas.targets import SalesTarget, SalesTargetCreateRequest, SalesTargetUpdateRequest
from src.services.targets_service import TargetsService
from src.shared.response import ResponseEnvelope, build_meta

router = APIRouter(tags=["sales-targets"])

SOURCE = "employee_sales_targets"


@router.get("/admin/sales-targets/{employee_id}/{year}", dependencies=[Depends(require_admin)])
def admin_get_sales_target(
    employee_id: str,
    year: int = Path(ge=2000, le=2100),
    service: TargetsService = Depends(get_targets_service),
) -> ResponseEnvelope[Optional[SalesTarget]]:
    data = service.get_sales_target(employee_id, year)
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window=str(year)))


@router.post("/admin/sales-targets", dependencies=[Depends(require_admin)])
def admin_save_sales_target(
    request: SalesTargetCreateRequest,
    response: Response,
    service: TargetsService = Depends(get_targets_service),
) -> ResponseEnvelope[SalesTarget]:
    data, created = service.save_sales_target(request)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window=str(request.year)))


@router.put("/admin/sales-targets/{target_id}", dependencies=[Depends(require_admin)])
def admin_update_sales_target(
    target_id: str,
    request: SalesTargetUpdateRequest,
    service: TargetsService = Depends(get_targets_service),
) -> ResponseEnvelope[SalesTarget]:
    data = service.update_sales_target(target_id, request)
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window=str(data.year)))


@router.get("/employee/sales-targets/{year}")
def employee_get_sales_target(
    year: int = Path(ge=2000, le=2100),
    user: CurrentUser = Depends(get_current_user),
    service: TargetsService = Depends(get_targets_service),
) -> ResponseEnvelope[Optional[SalesTarget]]:
    data = service.get_sales_target(user.id, year)
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window=str(year)))
