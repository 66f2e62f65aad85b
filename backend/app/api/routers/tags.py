from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.access import board_access_clause, get_accessible_board, get_accessible_tag
from app.api.deps import get_current_user
from app.db import get_db
from app.models.board import Board
from app.models.tag import DEFAULT_TAG_COLOR, Tag
from app.schemas.tag import TagCreate, TagOut, TagUpdate
from app.services.board_views import tag_to_out


router = APIRouter()


async def _ensure_unique_name(db: AsyncSession, board_id: int, name: str, exclude_id: int | None = None) -> None:
    stmt = select(Tag.id).where(Tag.board_id == board_id, Tag.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Tag.id != exclude_id)
    if (await db.execute(stmt)).scalar_one_or_none() is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Tag with this name already exists on this board")


@router.post("", response_model=TagOut, status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: TagCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> TagOut:
    board = await get_accessible_board(db, payload.board_id, user.id)
    name = payload.name.strip()
    await _ensure_unique_name(db, board.id, name)
    tag = Tag(name=name, color=payload.color or DEFAULT_TAG_COLOR, board_id=board.id)
    db.add(tag)
    await db.commit()
    return tag_to_out(tag)


@router.get("", response_model=list[TagOut])
async def list_tags(
    search: str | None = None,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> list[TagOut]:
    stmt = select(Tag).join(Board, Board.id == Tag.board_id).where(board_access_clause(user.id))
    if search and search.strip():
        stmt = stmt.where(Tag.name.ilike(f"%{search.strip()}%"))
    tags = (await db.execute(stmt.order_by(Tag.name, Tag.id))).scalars().all()
    return [tag_to_out(t) for t in tags]


@router.get("/board/{board_id}", response_model=list[TagOut])
async def list_board_tags(
    board_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> list[TagOut]:
    board = await get_accessible_board(db, board_id, user.id)
    tags = (await db.execute(select(Tag).where(Tag.board_id == board.id).order_by(Tag.name, Tag.id))).scalars().all()
    return [tag_to_out(t) for t in tags]


@router.get("/{tag_id}", response_model=TagOut)
async def get_tag(
    tag_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> TagOut:
    return tag_to_out(await get_accessible_tag(db, tag_id, user.id))


@router.put("/{tag_id}", response_model=TagOut)
async def update_tag(
    tag_id: int,
    payload: TagUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> TagOut:
    tag = await get_accessible_tag(db, tag_id, user.id)
    name = payload.name.strip()
    await _ensure_unique_name(db, tag.board_id, name, exclude_id=tag.id)
    tag.name = name
    if payload.color is not None:
        tag.color = payload.color
    await db.commit()
    return tag_to_out(tag)


@router.delete("/{tag_id}")
async def delete_tag(
    tag_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> dict:
    tag = await get_accessible_tag(db, tag_id, user.id)
    await db.delete(tag)
    await db.commit()
    return {"status": "ok"}
