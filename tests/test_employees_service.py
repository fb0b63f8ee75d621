from __future__ import annotations

import pytest
from pydantic import ValidationError

from factories import InMemoryClientCountsRepository, InMemoryEmployeesRepository, make_employee
from src.core.errors import BadRequestError, NotFoundError
from src.repositories.client_counts_repository import PAST_CLIENTS_TABLE, TOP_REALTORS_TABLE
from src.schemas.employees import EmployeeCreateRequest, EmployeeUpdateRequest
from src.services.client_counts_service import ClientCountsService
from src.services.employees_service import EmployeesService

NEW_HIRE = {
    "username": "mchen",
    "email": "mchen@example.com",
    "employee_name": "Mike Chen",
    "password": "secret1",
}


def test_create_employee_defaults_to_employee_role() -> None:
    repository = InMemoryEmployeesRepository()
    employee = EmployeesService(repository).create_employee(EmployeeCreateRequest(**NEW_HIRE))

    assert employee.role == "employee"
    assert employee.username == "mchen"
    assert repository.passwords[employee.id] == "secret1"


def test_create_rejects_taken_username_and_short_password() -> None:
    service = EmployeesService(InMemoryEmployeesRepository([make_employee("employee-1", "Mchen Lee")]))

    with pytest.raises(BadRequestError):
        service.create_employee(EmployeeCreateRequest(**NEW_HIRE))
    with pytest.raises(ValidationError):
        EmployeeCreateRequest(**{**NEW_HIRE, "password": "12345"})
    with pytest.raises(ValidationError):
        EmployeeCreateRequest(**{**NEW_HIRE, "role": "owner"})


def test_update_changes_profile_and_password() -> None:
    repository = InMemoryEmployeesRepository([make_employee("employee-1", "Sarah Johnson")])
    service = EmployeesService(repository)

    renamed = service.update_employee("employee-1", EmployeeUpdateRequest(employee_name="Sarah J. Smith"))
    assert renamed.employee_name == "Sarah J. Smith"

    service.update_employee("employee-1", EmployeeUpdateRequest(password="newpass"))
    assert repository.passwords["employee-1"] == "newpass"

    with pytest.raises(BadRequestError):
        service.update_employee("employee-1", EmployeeUpdateRequest())
    with pytest.raises(NotFoundError):
        service.update_employee("ghost", EmployeeUpdateRequest(role="admin"))


def test_delete_employee() -> None:
    repository = InMemoryEmployeesRepository([make_employee("employee-1", "Sarah Johnson")])
    service = EmployeesService(repository)

    with pytest.raises(BadRequestError):
        service.delete_employee("admin-1", acting_user_id="admin-1")
    assert service.delete_employee("employee-1", acting_user_id="admin-1").deleted is True
    assert repository.employees == []
    with pytest.raises(NotFoundError):
        service.delete_employee("employee-1", acting_user_id="admin-1")


def test_client_counts_start_empty_then_create_and_update() -> None:
    service = ClientCountsService(InMemoryClientCountsRepository())

    assert service.get_count(PAST_CLIENTS_TABLE, "employee-1") is None

    created, was_created = service.set_count(PAST_CLIENTS_TABLE, "employee-1", 120)
    updated, was_updated_created = service.set_count(PAST_CLIENTS_TABLE, "employee-1", 135)

    assert (created.total_count, was_created) == (120, True)
    assert (updated.total_count, was_updated_created) == (135, False)
    assert updated.updated_at is not None
    assert service.get_count(TOP_REALTORS_TABLE, "employee-1") is None
