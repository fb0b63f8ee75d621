from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_user, get_realtor_partners_service
from src.schemas.employees import CurrentUser
from src.schemas.realtor_partners import (
    RealtorPartner,
    RealtorPartnerCreateRequest,
    RealtorPartnerUpdateRequest,
)
from src.services.realtor_partners_service import RealtorPartnersService
from src.shared.response import DeleteResult, ResponseEnvelope, build_meta

router = APIRouter(prefix="/employee/realtor-partners", tags=["realtor-partners"])

SOURCE = "realtor_partners"


@router.get("")
def list_realtor_partners(
    user: CurrentUser = Depends(get_current_user),
    service: RealtorPartnersService = Depends(get_realtor_partners_service),
) -> ResponseEnvelope[List[RealtorPartner]]:
    data = service.list_partners(user.id)
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window="all"))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_realtor_partner(
    request: RealtorPartnerCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    service: RealtorPartnersService = Depends(get_realtor_partners_service),
) -> ResponseEnvelope[RealtorPartner]:
    data = service.create_partner(user.id, request)
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window="now"))


@router.put("/{partner_id}")
def update_realtor_partner(
    partner_id: str,
    request: RealtorPartnerUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    service: RealtorPartnersService = Depends(get_realtor_partners_service),
) -> ResponseEnvelope[RealtorPartner]:
    data = service.update_partner(user.id, partner_id, request)
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window="now"))


@router.delete("/{partner_id}")
def delete_realtor_partner(
    partner_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: RealtorPartnersService = Depends(get_realtor_partners_service),
) -> ResponseEnvelope[DeleteResult]:
    data = service.delete_partner(user.id, partner_id)
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window="now"))
