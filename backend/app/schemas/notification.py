from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from app.models.enums import NotificationType


class BoardNotificationData(BaseModel):
    kind: Literal["board"] = "board"
    board_id: int
    board_name: str


class TaskAssignmentData(BaseModel):
    kind: Literal["task_assignment"] = "task_assignment"
    task_id: int
    task_title: str
    assigned_by: int
    assignment_id: int


class AssignmentResponseData(BaseModel):
    kind: Literal["assignment_response"] = "assignment_response"
    task_id: int
    task_title: str
    responded_by: int
    assignment_id: int
    accepted: bool


NotificationData = Annotated[
    Union[BoardNotificationData, TaskAssignmentData, AssignmentResponseData],
    Field(discriminator="kind"),
]


class NotificationOut(BaseModel):
    id: int
    user_id: int
    type: NotificationType
    title: str
    message: str
    data: NotificationData | None = None
    is_read: bool
    task_id: int | None = None
    assignment_id: int | None = None
    created_at: datetime


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class NotificationPage(BaseModel):
    notifications: list[NotificationOut]
    pagination: Pagination
    unread_count: int


class NotificationStats(BaseModel):
    total: int
    unread: int
    read: int
