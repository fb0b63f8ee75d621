from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_coaching_notes_service, get_current_user, require_admin
from src.schemas.coaching_notes import CoachingNote, CoachingNoteCreateRequest
from src.schemas.employees import CurrentUser
from src.services.coaching_notes_service import CoachingNotesService
from src.shared.response import ResponseEnvelope, build_meta

router = APIRouter(tags=["coaching-notes"])

SOURCE = "coaching_notes"


@router.post("/admin/coaching-notes", status_code=status.HTTP_201_CREATED)
def admin_create_coaching_note(
    request: CoachingNoteCreateRequest,
    user: CurrentUser = Depends(require_admin),
    service: CoachingNotesService = Depends(get_coaching_notes_service),
) -> ResponseEnvelope[CoachingNote]:
    data = service.create_note(user.id, request)
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window="now"))


@router.get("/admin/coaching-notes/{employee_id}", dependencies=[Depends(require_admin)])
def admin_list_coaching_notes(
    employee_id: str,
    service: CoachingNotesService = Depends(get_coaching_notes_service),
) -> ResponseEnvelope[List[CoachingNote]]:
    data = service.list_for_manager(employee_id)
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window="all"))


@router.get("/employee/coaching-notes")
def employee_list_coaching_notes(
    user: CurrentUser = Depends(get_current_user),
    service: CoachingNotesService = Depends(get_coaching_notes_service),
) -> ResponseEnvelope[List[CoachingNote]]:
    data = service.list_for_employee(user.id)
    return ResponseEnvelope(data=data, meta=build_meta(source=SOURCE, time_window="all"))
