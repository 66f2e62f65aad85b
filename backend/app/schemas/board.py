from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from app.schemas.column import ColumnDetailOut
from app.schemas.user import UserOut


class BoardOut(BaseModel):
    id: int
    name: str
    owner_id: int
    created_at: datetime
    updated_at: datetime


class BoardMemberOut(BaseModel):
    # id is 0 for the synthetic owner entry, which has no membership row.
    id: int
    board_id: int
    user_id: int
    is_owner: bool = False
    user: UserOut


class BoardDetailOut(BoardOut):
    owner: UserOut
    members: list[BoardMemberOut] = []
    columns: list[ColumnDetailOut] = []


class BoardCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)


class BoardUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=200)


class MemberInvite(BaseModel):
    board_id: int
    email: EmailStr
