from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import get_current_user, get_weekly_activities_service
from src.schemas.employees import CurrentUser
from src.schemas.weekly_activities import (
    WeeklyActivity,
    WeeklyActivityFilters,
    WeeklyActivityUpdateRequest,
    WeeklyActivityUpsertRequest,
)
from src.services.weekly_activities_service import WeeklyActivitiesService
from src.shared.response import ResponseEnvelope, build_meta, paginate_list

router = APIRouter(prefix="/employee/weekly-activities", tags=["weekly-activities"])


def get_weekly_activity_filters(
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=52, ge=1, le=200),
) -> WeeklyActivityFilters:
    return WeeklyActivityFilters(
        start_date=start_date,
        end_date=end_date,
        page=page,
        page_size=page_size,
    )


@router.get("")
def list_weekly_activities(
    filters: WeeklyActivityFilters = Depends(get_weekly_activity_filters),
    user: CurrentUser = Depends(get_current_user),
    service: WeeklyActivitiesService = Depends(get_weekly_activities_service),
) -> ResponseEnvelope[List[WeeklyActivity]]:
    data = service.list_activities(user.id, filters.start_date, filters.end_date)
    paged_data, pagination = paginate_list(data, filters.page, filters.page_size)
    time_window = (
        f"{filters.start_date.isoformat()}..{filters.end_date.isoformat()}"
        if filters.start_date and filters.end_date
        else "all"
    )
    meta = build_meta(source="weekly_activities", time_window=time_window)
    return ResponseEnvelope(data=paged_data, pagination=pagination, meta=meta)


@router.post("")
def upsert_weekly_activity(
    request: WeeklyActivityUpsertRequest,
    response: Response,
    user: CurrentUser = Depends(get_current_user),
    service: WeeklyActivitiesService = Depends(get_weekly_activities_service),
) -> ResponseEnvelope[WeeklyActivity]:
    result = service.upsert_activity(user.id, request)
    response.status_code = status.HTTP_201_CREATED if result.created else status.HTTP_200_OK
    meta = build_meta(source="weekly_activities", time_window="week")
    return ResponseEnvelope(data=result.activity, meta=meta)


@router.put("/{activity_id}")
def update_weekly_activity(
    activity_id: str,
    request: WeeklyActivityUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    service: WeeklyActivitiesService = Depends(get_weekly_activities_service),
) -> ResponseEnvelope[WeeklyActivity]:
    data = service.update_activity(user.id, activity_id, request)
    meta = build_meta(source="weekly_activities", time_window="week")
    return ResponseEnvelope(data=data, meta=meta)
