from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from src.shared.base import BaseSchema, BaseWriteSchema

NOTE_TYPE_PATTERN = r"^(feedback|coaching|praise|improvement|goal-setting)$"


class CoachingNote(BaseSchema):
    id: str
    employee_id: str
    manager_id: str
    note_type: str
    subject: str
    content: str
    action_items: Optional[str] = None
    is_private: bool
    created_at: Optional[datetime] = None


class CoachingNoteCreateRequest(BaseWriteSchema):
    employee_id: str = Field(min_length=1)
    note_type: str = Field(default="feedback", pattern=NOTE_TYPE_PATTERN)
    subject: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    action_items: Optional[str] = None
    is_private: bool = False
