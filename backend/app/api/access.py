"""Board-scoped access control.

A board is visible to its owner and to every user with a ``board_members`` row.
Columns, tasks and tags inherit visibility from their board. Denied and missing
resources are reported the same way (404) so callers cannot probe for ids.
Owner-only actions on a board the caller can see fail with 403.
"""

from __future__ import annotations

from collections.abc import Iterable

from fastapi import HTTPException, status
from sqlalchemy import exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.board import Board
from app.models.board_member import BoardMember
from app.models.column import Column
from app.models.tag import Tag
from app.models.task import Task


def is_owner(user_id: int, board) -> bool:
    return board.owner_id == user_id


def can_access_board(user_id: int, board, member_user_ids: Iterable[int]) -> bool:
    if is_owner(user_id, board):
        return True
    return user_id in set(member_user_ids)


def board_access_clause(user_id: int):
    """SQL twin of ``can_access_board`` for use in WHERE clauses over ``Board``."""
    return or_(
        Board.owner_id == user_id,
        exists().where(BoardMember.board_id == Board.id, BoardMember.user_id == user_id),
    )


async def get_accessible_board(db: AsyncSession, board_id: int, user_id: int) -> Board:
    board = (
        await db.execute(select(Board).where(Board.id == board_id, board_access_clause(user_id)))
    ).scalar_one_or_none()
    if board is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Board not found or access denied")
    return board


async def get_owned_board(db: AsyncSession, board_id: int, user_id: int) -> Board:
    board = await get_accessible_board(db, board_id, user_id)
    ensure_board_owner(user_id, board)
    return board


def ensure_board_owner(user_id: int, board) -> None:
    if not is_owner(user_id, board):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the board owner can do this")


async def get_accessible_column(db: AsyncSession, column_id: int, user_id: int) -> Column:
    column = (
        await db.execute(
            select(Column)
            .join(Board, Board.id == Column.board_id)
            .where(Column.id == column_id, board_access_clause(user_id))
        )
    ).scalar_one_or_none()
    if column is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Column not found or access denied")
    return column


async def get_accessible_task(db: AsyncSession, task_id: int, user_id: int) -> tuple[Task, Board]:
    row = (
        await db.execute(
            select(Task, Board)
            .join(Column, Column.id == Task.column_id)
            .join(Board, Board.id == Column.board_id)
            .where(Task.id == task_id, board_access_clause(user_id))
        )
    ).first()
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found or access denied")
    return row[0], row[1]


async def get_accessible_tag(db: AsyncSession, tag_id: int, user_id: int) -> Tag:
    tag = (
        await db.execute(
            select(Tag).join(Board, Board.id == Tag.board_id).where(Tag.id == tag_id, board_access_clause(user_id))
        )
    ).scalar_one_or_none()
    if tag is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tag not found or access denied")
    return tag
