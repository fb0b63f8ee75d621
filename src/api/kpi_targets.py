from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Path, Response, status

from src.api.dependencies import get_current_user, get_targets_service, require_admin
from src.schemas.employees import CurrentUser
from src.schemas.targets import KpiTarget, KpiTargetCreateRequest, KpiTargetUpdateRequest
from src.services.targets_service import TargetsService
from src.shared.response import ResponseEnvelope, build_meta

router = APIRouter(tags=["kpi-targets"])

SOURCE = "employee_kpi_targets"


@router.get("/admin/kpi-targets/{employee_id}/{year}", dependencies=[Depends(require_admin)])
def admin_get_kpi_target(
    employee_id: str,
    year: int = Path(ge=2000, le=2100),
    service: TargetsService = Depends(get_targets_service),
) -> ResponseEnvelope[Optional[KpiTarget]]:
    data = service.get_kpi_target(employee_id, year)
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window=str(year)))


@router.post("/admin/kpi-targets", dependencies=[Depends(require_admin)])
def admin_save_kpi_target(
    request: KpiTargetCreateRequest,
    response: Response,
    service: TargetsService = Depends(get_targets_service),
) -> ResponseEnvelope[KpiTarget]:
    data, created = service.save_kpi_target(request)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window=str(request.year)))


@router.put("/admin/kpi-targets/{target_id}", dependencies=[Depends(require_admin)])
def admin_update_kpi_target(
    target_id: str,
    request: KpiTargetUpdateRequest,
    service: TargetsService = Depends(get_targets_service),
) -> ResponseEnvelope[KpiTarget]:
    data = service.update_kpi_target(target_id, request)
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window=str(data.year)))


@router.get("/employee/kpi-targets/{year}")
def employee_get_kpi_target(
    year: int = Path(ge=2000, le=2100),
    user: CurrentUser = Depends(get_current_user),
    service: TargetsService = Depends(get_targets_service),
) -> ResponseEnvelope[Optional[KpiTarget]]:
    data = service.get_kpi_target(user.id, year)
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window=str(year)))
