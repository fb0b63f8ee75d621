from __future__ import annotations

from fastapi import APIRouter

from src.api.admin_reports import router as admin_reports_router
from src.api.auth import router as auth_router
from src.api.client_counts import router as client_counts_router
from src.api.coaching_notes import router as coaching_notes_router
from src.api.daily_activities import router as daily_activities_router
from src.api.health import router as health_router
from src.api.kpi_progress import router as kpi_progress_router
from src.api.kpi_targets import router as kpi_targets_router
from src.api.loans import router as loans_router
from src.api.realtor_partners import router as realtor_partners_router
from src.api.sales_targets import router as sales_targets_router
from src.api.weekly_activities import router as weekly_activities_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(kpi_progress_router)
api_router.include_router(weekly_activities_router)
api_router.include_router(daily_activities_router)
api_router.include_router(loans_router)
api_router.include_router(realtor_partners_router)
api_router.include_router(client_counts_router)
api_router.include_router(kpi_targets_router)
api_router.include_router(sales_targets_router)
api_router.include_router(coaching_notes_router)
api_router.include_router(admin_reports_router)
