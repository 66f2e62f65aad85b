from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class UserOut(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime | None = None


class UserSearchResult(BaseModel):
    users: list[UserOut]
