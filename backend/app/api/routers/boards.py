from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.access import board_access_clause, get_accessible_board, get_owned_board
from app.api.deps import get_current_user
from app.db import get_db
from app.models.board import Board
from app.schemas.board import BoardCreate, BoardDetailOut, BoardUpdate
from app.services.board_views import build_board_views


router = APIRouter()


@router.post("", response_model=BoardDetailOut, status_code=status.HTTP_201_CREATED)
async def create_board(
    payload: BoardCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> BoardDetailOut:
    board = Board(name=payload.name, owner_id=user.id)
    db.add(board)
    await db.commit()
    return (await build_board_views(db, [board]))[0]


@router.get("", response_model=list[BoardDetailOut])
async def list_boards(db: AsyncSession = Depends(get_db), user=Depends(get_current_user)) -> list[BoardDetailOut]:
    boards = (
        await db.execute(
            select(Board).where(board_access_clause(user.id)).order_by(Board.created_at.desc(), Board.id.desc())
        )
    ).scalars().all()
    return await build_board_views(db, boards)


@router.get("/{board_id}", response_model=BoardDetailOut)
async def get_board(
    board_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> BoardDetailOut:
    board = await get_accessible_board(db, board_id, user.id)
    return (await build_board_views(db, [board]))[0]


@router.put("/{board_id}", response_model=BoardDetailOut)
async def update_board(
    board_id: int,
    payload: BoardUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> BoardDetailOut:
    board = await get_owned_board(db, board_id, user.id)
    board.name = payload.name
    await db.commit()
    return (await build_board_views(db, [board]))[0]


@router.delete("/{board_id}")
async def delete_board(
    board_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> dict:
    board = await get_owned_board(db, board_id, user.id)
    await db.delete(board)
    await db.commit()
    return {"status": "ok"}
