from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_user, get_kpi_progress_service
from src.schemas.employees import CurrentUser
from src.schemas.kpi_progress import KpiProgressResponse
from src.services.kpi_progress_service import KpiProgressService
from src.shared.response import ResponseEnvelope, build_meta

router = APIRouter(prefix="/employee", tags=["kpi-progress"])


@router.get("/kpi-progress")
def employee_kpi_progress(
    user: CurrentUser = Depends(get_current_user),
    service: KpiProgressService = Depends(get_kpi_progress_service),
) -> ResponseEnvelope[KpiProgressResponse]:
    # The employee always comes from the session; there is no employee_id parameter.
    as_of = date.today()
    data = service.get_progress(user.id, as_of)
    meta = build_meta(
        source="weekly_activities,loans,employee_kpi_targets,employee_sales_targets",
        time_window="ytd",
        as_of=as_of,
    )
    return ResponseEnvelope(data=data, pagination=None, meta=meta)
