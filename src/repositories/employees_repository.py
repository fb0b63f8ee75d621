from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from src.core.supabase import SupabaseClient
from src.models.kpi import ROLE_EMPLOYEE, EmployeeRecord

EMPLOYEE_COLUMNS = "id,username,role,employee_name,created_at"

logger = logging.getLogger(__name__)


class EmployeesRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def get_employee(self, employee_id: str) -> Optional[EmployeeRecord]:
        row = self.client.select_one("users", filters=[("id", f"eq.{employee_id}")], select=EMPLOYEE_COLUMNS)
        return EmployeeRecord.model_validate(row) if row else None

    def get_by_username(self, username: str) -> Optional[EmployeeRecord]:
        row = self.client.select_one(
            "users", filters=[("username", f"eq.{username}")], select=EMPLOYEE_COLUMNS
        )
        return EmployeeRecord.model_validate(row) if row else None

    def list_employees(self, role: Optional[str] = ROLE_EMPLOYEE) -> List[EmployeeRecord]:
        rows = self.client.select(
            "users",
            select=EMPLOYEE_COLUMNS,
            filters=[("role", f"eq.{role}")] if role else [],
            order="employee_name.asc",
        )
        return [EmployeeRecord.model_validate(row) for row in rows]

    def resolve_session(self, access_token: str) -> Optional[EmployeeRecord]:
        """Map a Supabase Auth access token to its users row."""
        auth_user = self.client.get_auth_user(access_token)
        if not auth_user or not auth_user.get("id"):
            return None
        employee = self.get_employee(str(auth_user["id"]))
        if employee is None:
            logger.warning("Auth user %s has no users row", auth_user["id"])
        return employee

    def create_employee(self, email: str, password: str, profile: Dict[str, Any]) -> EmployeeRecord:
        """Create the Supabase Auth user, then its users row under the same id."""
        auth_user = self.client.create_auth_user(
            email, password, metadata={"username": profile["username"]}
        )
        try:
            row = self.client.insert("users", {**profile, "id": auth_user["id"]})
        except httpx.HTTPError:
            logger.error("Could not insert users row for auth user %s; removing it", auth_user["id"])
            self.client.delete_auth_user(str(auth_user["id"]))
            raise
        return EmployeeRecord.model_validate(row)

    def update_employee(
        self, employee_id: str, profile: Dict[str, Any], password: Optional[str] = None
    ) -> Optional[EmployeeRecord]:
        if password and self.client.update_auth_user(employee_id, {"password": password}) is None:
            return None
        if not profile:
            return self.get_employee(employee_id)
        row = self.client.update("users", profile, filters=[("id", f"eq.{employee_id}")])
        return EmployeeRecord.model_validate(row) if row else None

    def delete_employee(self, employee_id: str) -> bool:
        deleted = self.client.delete("users", filters=[("id", f"eq.{employee_id}")])
        if not deleted:
            return False
        if not self.client.delete_auth_user(employee_id):
            logger.warning("users row %s had no auth user to delete", employee_id)
        return True
