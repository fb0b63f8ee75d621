from __future__ import annotations

import logging

from src.core.errors import BadRequestError, NotFoundError
from src.repositories.employees_repository import EmployeesRepository
from src.schemas.employees import EmployeeCreateRequest, EmployeeSummary, EmployeeUpdateRequest
from src.shared.response import DeleteResult

logger = logging.getLogger(__name__)


class EmployeesService:
    """Admin management of login accounts and their users rows."""

    def __init__(self, repository: EmployeesRepository) -> None:
        self.repository = repository

    def create_employee(self, request: EmployeeCreateRequest) -> EmployeeSummary:
        if self.repository.get_by_username(request.username) is not None:
            raise BadRequestError("Username already exists")
        profile = request.model_dump(include={"username", "employee_name", "role"})
        record = self.repository.create_employee(request.email, request.password, profile)
        logger.info("Created %s account %s", record.role, record.id)
        return EmployeeSummary.model_validate(record.model_dump())

    def update_employee(self, employee_id: str, request: EmployeeUpdateRequest) -> EmployeeSummary:
        profile = request.model_dump(exclude={"password"}, exclude_unset=True, exclude_none=True)
        if not profile and not request.password:
            raise BadRequestError("No employee fields to update")
        if self.repository.get_employee(employee_id) is None:
            raise NotFoundError("Employee not found")
        username = profile.get("username")
        if username:
            holder = self.repository.get_by_username(username)
            if holder is not None and holder.id != employee_id:
                raise BadRequestError("Username already exists")
        record = self.repository.update_employee(employee_id, profile, password=request.password)
        if record is None:
            raise NotFoundError("Employee not found")
        return EmployeeSummary.model_validate(record.model_dump())

    def delete_employee(self, employee_id: str, acting_user_id: str) -> DeleteResult:
        if employee_id == acting_user_id:
            raise BadRequestError("Admins cannot delete their own account")
        if not self.repository.delete_employee(employee_id):
            raise NotFoundError("Employee not found")
        logger.info("Deleted account %s", employee_id)
        return DeleteResult(id=employee_id, deleted=True)
