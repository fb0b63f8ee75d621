from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import get_current_user, get_daily_activities_service
from src.schemas.daily_activities import (
    DailyActivity,
    DailyActivityFilters,
    DailyActivityUpdateRequest,
    DailyActivityUpsertRequest,
)
from src.schemas.employees import CurrentUser
from src.services.daily_activities_service import DailyActivitiesService
from src.shared.response import ResponseEnvelope, build_meta, paginate_list

router = APIRouter(prefix="/employee/daily-activities", tags=["daily-activities"])

SOURCE = "daily_activities"


def get_daily_activity_filters(
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=31, ge=1, le=366),
) -> DailyActivityFilters:
    return DailyActivityFilters(start_date=start_date, end_date=end_date, page=page, page_size=page_size)


@router.get("")
def list_daily_activities(
    filters: DailyActivityFilters = Depends(get_daily_activity_filters),
    user: CurrentUser = Depends(get_current_user),
    service: DailyActivitiesService = Depends(get_daily_activities_service),
) -> ResponseEnvelope[List[DailyActivity]]:
    data = service.list_activities(user.id, filters.start_date, filters.end_date)
    paged_data, pagination = paginate_list(data, filters.page, filters.page_size)
    time_window = (
        f"{filters.start_date.isoformat()}..{filters.end_date.isoformat()}"
        if filters.start_date and filters.end_date
        else "all"
    )
    return ResponseEnvelope(
        data=paged_data, pagination=pagination, meta=build_meta(source=SOURCE, time_window=time_window)
    )


@router.get("/{activity_date}")
def get_daily_activity(
    activity_date: date,
    user: CurrentUser = Depends(get_current_user),
    service: DailyActivitiesService = Depends(get_daily_activities_service),
) -> ResponseEnvelope[Optional[DailyActivity]]:
    data = service.get_activity(user.id, activity_date)
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window="day"))


@router.post("")
def upsert_daily_activity(
    request: DailyActivityUpsertRequest,
    response: Response,
    user: CurrentUser = Depends(get_current_user),
    service: DailyActivitiesService = Depends(get_daily_activities_service),
) -> ResponseEnvelope[DailyActivity]:
    result = service.upsert_activity(user.id, request)
    response.status_code = status.HTTP_201_CREATED if result.created else status.HTTP_200_OK
    return ResponseEnvelope(data=result.activity, meta=build_meta(source=SOURCE, time_window="day"))


@router.put("/{activity_id}")
def update_daily_activity(
    activity_id: str,
    request: DailyActivityUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    service: DailyActivitiesService = Depends(get_daily_activities_service),
) -> ResponseEnvelope[DailyActivity]:
    data = service.update_activity(user.id, activity_id, request)
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window="day"))
