from __future__ import annotations

import logging
from typing import List

from src.core.errors import NotFoundError
from src.repositories.coaching_notes_repository import CoachingNotesRepository
from src.repositories.employees_repository import EmployeesRepository
from src.schemas.coaching_notes import CoachingNote, CoachingNoteCreateRequest

logger = logging.getLogger(__name__)


class CoachingNotesService:
    def __init__(
        self,
        repository: CoachingNotesRepository,
        employees_repository: EmployeesRepository,
    ) -> None:
        self.repository = repository
        self.employees_repository = employees_repository

    def list_for_employee(self, employee_id: str) -> List[CoachingNote]:
        """Notes the employee may read: private notes stay with managers."""
        records = self.repository.list_for_employee(employee_id)
        return [CoachingNote.model_validate(record.model_dump()) for record in records]

    def list_for_manager(self, employee_id: str) -> List[CoachingNote]:
        if self.employees_repository.get_employee(employee_id) is None:
            raise NotFoundError("Employee not found")
        records = self.repository.list_for_employee(employee_id, include_private=True)
        return [CoachingNote.model_validate(record.model_dump()) for record in records]

    def create_note(self, manager_id: str, request: CoachingNoteCreateRequest) -> CoachingNote:
        if self.employees_repository.get_employee(request.employee_id) is None:
            raise NotFoundError("Employee not found")
        record = self.repository.create({**request.model_dump(mode="json"), "manager_id": manager_id})
        logger.info(
            "Manager %s left a %s note for employee %s", manager_id, record.note_type, record.employee_id
        )
        return CoachingNote.model_validate(record.model_dump())
