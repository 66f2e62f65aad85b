"""Integer ordering of columns within a board and tasks within a column.

Positions start at 1 and only their relative order matters. Gaps are allowed
and never compacted. Reads order by ``position`` then ``id`` so ties resolve by
insertion order. Callers own the transaction: nothing here commits.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.column import Column
from app.models.task import Task


logger = logging.getLogger(__name__)


def next_position(max_position: int | None) -> int:
    return 1 if max_position is None else max_position + 1


def positions_for(ids: Sequence[int]) -> dict[int, int]:
    """Map each id to its 1-based index. A repeated id keeps its last index."""
    return {item_id: index + 1 for index, item_id in enumerate(ids)}


async def next_column_position(db: AsyncSession, board_id: int) -> int:
    # Read-then-write: two concurrent appends can land on the same value.
    current = (
        await db.execute(select(func.max(Column.position)).where(Column.board_id == board_id))
    ).scalar_one_or_none()
    return next_position(current)


async def next_task_position(db: AsyncSession, column_id: int) -> int:
    current = (
        await db.execute(select(func.max(Task.position)).where(Task.column_id == column_id))
    ).scalar_one_or_none()
    return next_position(current)


async def reorder_columns(db: AsyncSession, board_id: int, column_ids: Sequence[int]) -> None:
    for column_id, position in positions_for(column_ids).items():
        await db.execute(
            update(Column)
            .where(Column.id == column_id, Column.board_id == board_id)
            .values(position=position)
        )


async def reorder_tasks(db: AsyncSession, column_id: int, task_ids: Sequence[int]) -> None:
    for task_id, position in positions_for(task_ids).items():
        await db.execute(
            update(Task)
            .where(Task.id == task_id, Task.column_id == column_id)
            .values(position=position)
        )


async def move_task(db: AsyncSession, task: Task, column_id: int) -> Task:
    """Put ``task`` at the top of ``column_id``.

    When the column changes, every task already in the destination shifts down
    by one first. The source column keeps its gap.
    """
    if task.column_id != column_id:
        logger.info("Moving task %s from column %s to column %s", task.id, task.column_id, column_id)
        await db.execute(
            update(Task)
            .where(Task.column_id == column_id)
            .values(position=Task.position + 1)
            .execution_options(synchronize_session="fetch")
        )
    task.column_id = column_id
    task.position = 1
    await db.flush()
    return task


async def ordered_columns(db: AsyncSession, board_ids: Sequence[int]) -> list[Column]:
    if not board_ids:
        return []
    stmt = select(Column).where(Column.board_id.in_(board_ids)).order_by(Column.position, Column.id)
    return list((await db.execute(stmt)).scalars().all())


async def ordered_tasks(db: AsyncSession, column_ids: Sequence[int]) -> list[Task]:
    if not column_ids:
        return []
    stmt = select(Task).where(Task.column_id.in_(column_ids)).order_by(Task.position, Task.id)
    return list((await db.execute(stmt)).scalars().all())
