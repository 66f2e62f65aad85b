from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class TagOut(BaseModel):
    id: int
    name: str
    color: str
    board_id: int
    created_at: datetime
    updated_at: datetime


class TagCreate(BaseModel):
    board_id: int
    name: str = Field(min_length=1, max_length=100)
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)


class TagUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)


class TaskTagCreate(BaseModel):
    task_id: int
    tag_id: int


class TaskTagOut(BaseModel):
    id: int
    task_id: int
    tag_id: int
    tag: TagOut
