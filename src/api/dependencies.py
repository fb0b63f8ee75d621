from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from src.core.errors import ForbiddenError, UnauthorizedError
from src.repositories.client_counts_repository import ClientCountsRepository
from src.repositories.coaching_notes_repository import CoachingNotesRepository
from src.repositories.daily_activities_repository import DailyActivitiesRepository
from src.repositories.employees_repository import EmployeesRepository
from src.repositories.loans_repository import LoansRepository
from src.repositories.realtor_partners_repository import RealtorPartnersRepository
from src.repositories.targets_repository import TargetsRepository
from src.repositories.weekly_activities_repository import WeeklyActivitiesRepository
from src.schemas.employees import CurrentUser
from src.services.admin_reports_service import AdminReportsService
from src.services.client_counts_service import ClientCountsService
from src.services.coaching_notes_service import CoachingNotesService
from src.services.daily_activities_service import DailyActivitiesService
from src.services.employees_service import EmployeesService
from src.services.kpi_progress_service import KpiProgressService
from src.services.loans_service import LoansService
from src.services.realtor_partners_service import RealtorPartnersService
from src.services.targets_service import TargetsService
from src.services.weekly_activities_service import WeeklyActivitiesService


@lru_cache
def get_employees_repository() -> EmployeesRepository:
    return EmployeesRepository()


@lru_cache
def get_weekly_activities_repository() -> WeeklyActivitiesRepository:
    return WeeklyActivitiesRepository()


@lru_cache
def get_loans_repository() -> LoansRepository:
    return LoansRepository()


@lru_cache
def get_targets_repository() -> TargetsRepository:
    return TargetsRepository()


@lru_cache
def get_daily_activities_repository() -> DailyActivitiesRepository:
    return DailyActivitiesRepository()


@lru_cache
def get_realtor_partners_repository() -> RealtorPartnersRepository:
    return RealtorPartnersRepository()


@lru_cache
def get_coaching_notes_repository() -> CoachingNotesRepository:
    return CoachingNotesRepository()


@lru_cache
def get_client_counts_repository() -> ClientCountsRepository:
    return ClientCountsRepository()


def get_kpi_progress_service() -> KpiProgressService:
    return KpiProgressService(
        activities_repository=get_weekly_activities_repository(),
        loans_repository=get_loans_repository(),
        targets_repository=get_targets_repository(),
    )


def get_targets_service() -> TargetsService:
    return TargetsService(repository=get_targets_repository())


def get_weekly_activities_service() -> WeeklyActivitiesService:
    return WeeklyActivitiesService(repository=get_weekly_activities_repository())


def get_loans_service() -> LoansService:
    return LoansService(repository=get_loans_repository())


def get_daily_activities_service() -> DailyActivitiesService:
    return DailyActivitiesService(repository=get_daily_activities_repository())


def get_realtor_partners_service() -> RealtorPartnersService:
    return RealtorPartnersService(repository=get_realtor_partners_repository())


def get_coaching_notes_service() -> CoachingNotesService:
    return CoachingNotesService(
        repository=get_coaching_notes_repository(),
        employees_repository=get_employees_repository(),
    )


def get_client_counts_service() -> ClientCountsService:
    return ClientCountsService(repository=get_client_counts_repository())


def get_employees_service() -> EmployeesService:
    return EmployeesService(repository=get_employees_repository())


def get_admin_reports_service() -> AdminReportsService:
    return AdminReportsService(
        employees_repository=get_employees_repository(),
        targets_repository=get_targets_repository(),
        activities_repository=get_weekly_activities_repository(),
        loans_repository=get_loans_repository(),
    )


def get_current_user(authorization: Optional[str] = Header(default=None)) -> CurrentUser:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Authentication required")
    employee = get_employees_repository().resolve_session(token.strip())
    if employee is None:
        raise UnauthorizedError("Invalid or expired session")
    return CurrentUser.model_validate(employee.model_dump())


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user
