from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.task import TaskDetailOut


class ColumnOut(BaseModel):
    id: int
    name: str
    board_id: int
    position: int
    created_at: datetime
    updated_at: datetime


class ColumnDetailOut(ColumnOut):
    tasks: list[TaskDetailOut] = []


class ColumnCreate(BaseModel):
    board_id: int
    name: str = Field(min_length=1, max_length=200)


class ColumnUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=200)


class ColumnReorder(BaseModel):
    column_ids: list[int]
