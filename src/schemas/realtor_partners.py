from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from src.shared.base import BaseSchema, BaseWriteSchema

STRENGTH_PATTERN = r"^(new|developing|strong|champion)$"


class RealtorPartner(BaseSchema):
    id: str
    employee_id: str
    name: str
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    last_contact_date: Optional[date] = None
    relationship_strength: str
    loans_referred: int
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RealtorPartnerCreateRequest(BaseWriteSchema):
    name: str = Field(min_length=1, max_length=200)
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    last_contact_date: Optional[date] = None
    relationship_strength: str = Field(default="new", pattern=STRENGTH_PATTERN)
    loans_referred: int = Field(default=0, ge=0)
    notes: Optional[str] = None


class RealtorPartnerUpdateRequest(BaseWriteSchema):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    last_contact_date: Optional[date] = None
    relationship_strength: Optional[str] = Field(default=None, pattern=STRENGTH_PATTERN)
    loans_referred: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None
