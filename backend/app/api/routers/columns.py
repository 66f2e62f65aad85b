from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.access import get_accessible_board, get_accessible_column
from app.api.deps import get_current_user
from app.db import get_db
from app.models.column import Column
from app.schemas.column import ColumnCreate, ColumnDetailOut, ColumnReorder, ColumnUpdate
from app.services.board_views import build_column_views
from app.services.positions import next_column_position, ordered_columns, reorder_columns


router = APIRouter()


@router.post("", response_model=ColumnDetailOut, status_code=status.HTTP_201_CREATED)
async def create_column(
    payload: ColumnCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> ColumnDetailOut:
    board = await get_accessible_board(db, payload.board_id, user.id)
    column = Column(name=payload.name, board_id=board.id, position=await next_column_position(db, board.id))
    db.add(column)
    await db.commit()
    return (await build_column_views(db, [column]))[0]


@router.get("/board/{board_id}", response_model=list[ColumnDetailOut])
async def list_columns(
    board_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> list[ColumnDetailOut]:
    board = await get_accessible_board(db, board_id, user.id)
    return await build_column_views(db, await ordered_columns(db, [board.id]))


@router.put("/reorder/{board_id}")
async def reorder(
    board_id: int,
    payload: ColumnReorder,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> dict:
    board = await get_accessible_board(db, board_id, user.id)
    await reorder_columns(db, board.id, payload.column_ids)
    await db.commit()
    return {"status": "ok"}


@router.get("/{column_id}", response_model=ColumnDetailOut)
async def get_column(
    column_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> ColumnDetailOut:
    column = await get_accessible_column(db, column_id, user.id)
    return (await build_column_views(db, [column]))[0]


@router.put("/{column_id}", response_model=ColumnDetailOut)
async def update_column(
    column_id: int,
    payload: ColumnUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> ColumnDetailOut:
    column = await get_accessible_column(db, column_id, user.id)
    column.name = payload.name
    await db.commit()
    return (await build_column_views(db, [column]))[0]


@router.delete("/{column_id}")
async def delete_column(
    column_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> dict:
    column = await get_accessible_column(db, column_id, user.id)
    await db.delete(column)
    await db.commit()
    return {"status": "ok"}
