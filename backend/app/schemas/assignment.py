from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from app.models.enums import AssignmentStatus
from app.schemas.user import UserOut


class AssignmentOut(BaseModel):
    id: int
    task_id: int
    user_id: int
    status: AssignmentStatus
    created_at: datetime
    user: UserOut


class TaskMemberAssign(BaseModel):
    task_id: int
    user_id: int
