from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.assignment import AssignmentOut
from app.schemas.tag import TaskTagOut


class TaskOut(BaseModel):
    id: int
    title: str
    description: str | None = None
    position: int
    column_id: int
    created_by: int | None = None
    created_at: datetime
    updated_at: datetime


class TaskDetailOut(TaskOut):
    members: list[AssignmentOut] = []
    task_tags: list[TaskTagOut] = []


class TaskCreate(BaseModel):
    column_id: int
    title: str = Field(min_length=1, max_length=300)
    description: str | None = Field(default=None, max_length=8000)
    position: int | None = Field(default=None, ge=1)


class TaskUpdate(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    description: str | None = Field(default=None, max_length=8000)
    position: int | None = Field(default=None, ge=1)


class TaskMove(BaseModel):
    column_id: int
    # Accepted for compatibility; moved tasks always land at the top.
    position: int


class TaskReorder(BaseModel):
    task_ids: list[int]
