from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from src.shared.base import BaseSchema, BaseWriteSchema

ROLE_PATTERN = r"^(admin|employee)$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class EmployeeSummary(BaseSchema):
    id: str
    username: str
    role: str
    employee_name: str


class CurrentUser(EmployeeSummary):
    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class ClientCount(BaseSchema):
    id: str
    employee_id: str
    total_count: int
    updated_at: Optional[datetime] = None


class ClientCountUpdateRequest(BaseWriteSchema):
    total_count: int = Field(ge=0)


class EmployeeCreateRequest(BaseWriteSchema):
    username: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=EMAIL_PATTERN)
    employee_name: str = Field(min_length=1, max_length=200)
    role: str = Field(default="employee", pattern=ROLE_PATTERN)
    password: str = Field(min_length=6)


class EmployeeUpdateRequest(BaseWriteSchema):
    username: Optional[str] = Field(default=None, min_length=1, max_length=100)
    employee_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    role: Optional[str] = Field(default=None, pattern=ROLE_PATTERN)
    password: Optional[str] = Field(default=None, min_length=6)
