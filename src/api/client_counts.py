from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import get_client_counts_service, get_current_user
from src.repositories.client_counts_repository import PAST_CLIENTS_TABLE, TOP_REALTORS_TABLE
from src.schemas.employees import ClientCount, ClientCountUpdateRequest, CurrentUser
from src.services.client_counts_service import ClientCountsService
from src.shared.response import ResponseEnvelope, build_meta

router = APIRouter(prefix="/employee", tags=["client-counts"])


def _read(
    table: str, user: CurrentUser, service: ClientCountsService
) -> ResponseEnvelope[Optional[ClientCount]]:
    data = service.get_count(table, user.id)
    return ResponseEnvelope(data=data, meta=build_meta(source=table, time_window="all"))


def _write(
    table: str,
    request: ClientCountUpdateRequest,
    response: Response,
    user: CurrentUser,
    service: ClientCountsService,
) -> ResponseEnvelope[ClientCount]:
    data, created = service.set_count(table, user.id, request.total_count)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return ResponseEnvelope(data=data, meta=build_meta(source=table, time_window="all"))


@router.get("/past-clients")
def get_past_clients(
    user: CurrentUser = Depends(get_current_user),
    service: ClientCountsService = Depends(get_client_counts_service),
) -> ResponseEnvelope[Optional[ClientCount]]:
    return _read(PAST_CLIENTS_TABLE, user, service)


@router.put("/past-clients")
def set_past_clients(
    request: ClientCountUpdateRequest,
    response: Response,
    user: CurrentUser = Depends(get_current_user),
    service: ClientCountsService = Depends(get_client_counts_service),
) -> ResponseEnvelope[ClientCount]:
    return _write(PAST_CLIENTS_TABLE, request, response, user, service)


@router.get("/top-realtors")
def get_top_realtors(
    user: CurrentUser = Depends(get_current_user),
    service: ClientCountsService = Depends(get_client_counts_service),
) -> ResponseEnvelope[Optional[ClientCount]]:
    return _read(TOP_REALTORS_TABLE, user, service)


@router.put("/top-realtors")
def set_top_realtors(
    request: ClientCountUpdateRequest,
    response: Response,
    user: CurrentUser = Depends(get_current_user),
    service: ClientCountsService = Depends(get_client_counts_service),
) -> ResponseEnvelope[ClientCount]:
    return _write(TOP_REALTORS_TABLE, request, response, user, service)
