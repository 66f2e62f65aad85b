"""Read-side projections: board -> columns -> tasks -> assignments/tags.

Each level is fetched with one query for the whole batch and stitched
together in memory, so a board list costs a fixed number of round trips.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.board import Board
from app.models.board_member import BoardMember
from app.models.column import Column
from app.models.tag import Tag
from app.models.task import Task
from app.models.task_member import TaskMember
from app.models.task_tag import TaskTag
from app.models.user import User
from app.schemas.assignment import AssignmentOut
from app.schemas.board import BoardDetailOut, BoardMemberOut, BoardOut
from app.schemas.column import ColumnDetailOut, ColumnOut
from app.schemas.tag import TagOut, TaskTagOut
from app.schemas.task import TaskDetailOut, TaskOut
from app.schemas.user import UserOut
from app.services.positions import ordered_columns, ordered_tasks


def user_to_out(user: User) -> UserOut:
    return UserOut(id=user.id, username=user.username, email=user.email, created_at=user.created_at)


def board_to_out(board: Board) -> BoardOut:
    return BoardOut(
        id=board.id,
        name=board.name,
        owner_id=board.owner_id,
        created_at=board.created_at,
        updated_at=board.updated_at,
    )


def column_to_out(column: Column) -> ColumnOut:
    return ColumnOut(
        id=column.id,
        name=column.name,
        board_id=column.board_id,
        position=column.position,
        created_at=column.created_at,
        updated_at=column.updated_at,
    )


def task_to_out(task: Task) -> TaskOut:
    return TaskOut(
        id=task.id,
        title=task.title,
        description=task.description,
        position=task.position,
        column_id=task.column_id,
        created_by=task.created_by,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


def tag_to_out(tag: Tag) -> TagOut:
    return TagOut(
        id=tag.id,
        name=tag.name,
        color=tag.color,
        board_id=tag.board_id,
        created_at=tag.created_at,
        updated_at=tag.updated_at,
    )


def assignment_to_out(assignment: TaskMember, user: User) -> AssignmentOut:
    return AssignmentOut(
        id=assignment.id,
        task_id=assignment.task_id,
        user_id=assignment.user_id,
        status=assignment.status,
        created_at=assignment.created_at,
        user=user_to_out(user),
    )


async def assignments_for_tasks(db: AsyncSession, task_ids: Sequence[int]) -> dict[int, list[AssignmentOut]]:
    grouped: dict[int, list[AssignmentOut]] = defaultdict(list)
    if not task_ids:
        return grouped
    rows = (
        await db.execute(
            select(TaskMember, User)
            .join(User, User.id == TaskMember.user_id)
            .where(TaskMember.task_id.in_(task_ids))
            .order_by(TaskMember.id)
        )
    ).all()
    for assignment, user in rows:
        grouped[assignment.task_id].append(assignment_to_out(assignment, user))
    return grouped


async def task_tags_for_tasks(db: AsyncSession, task_ids: Sequence[int]) -> dict[int, list[TaskTagOut]]:
    grouped: dict[int, list[TaskTagOut]] = defaultdict(list)
    if not task_ids:
        return grouped
    rows = (
        await db.execute(
            select(TaskTag, Tag)
            .join(Tag, Tag.id == TaskTag.tag_id)
            .where(TaskTag.task_id.in_(task_ids))
            .order_by(TaskTag.id)
        )
    ).all()
    for task_tag, tag in rows:
        grouped[task_tag.task_id].append(
            TaskTagOut(id=task_tag.id, task_id=task_tag.task_id, tag_id=task_tag.tag_id, tag=tag_to_out(tag))
        )
    return grouped


async def build_task_views(db: AsyncSession, tasks: Sequence[Task]) -> list[TaskDetailOut]:
    task_ids = [t.id for t in tasks]
    members = await assignments_for_tasks(db, task_ids)
    tags = await task_tags_for_tasks(db, task_ids)
    return [
        TaskDetailOut(
            **task_to_out(t).model_dump(),
            members=members.get(t.id, []),
            task_tags=tags.get(t.id, []),
        )
        for t in tasks
    ]


async def build_column_views(db: AsyncSession, columns: Sequence[Column]) -> list[ColumnDetailOut]:
    tasks = await ordered_tasks(db, [c.id for c in columns])
    task_views = await build_task_views(db, tasks)
    by_column: dict[int, list[TaskDetailOut]] = defaultdict(list)
    for view in task_views:
        by_column[view.column_id].append(view)
    return [ColumnDetailOut(**column_to_out(c).model_dump(), tasks=by_column.get(c.id, [])) for c in columns]


async def board_members(db: AsyncSession, board_ids: Sequence[int]) -> dict[int, list[BoardMemberOut]]:
    grouped: dict[int, list[BoardMemberOut]] = defaultdict(list)
    if not board_ids:
        return grouped
    rows = (
        await db.execute(
            select(BoardMember, User)
            .join(User, User.id == BoardMember.user_id)
            .where(BoardMember.board_id.in_(board_ids))
            .order_by(BoardMember.id)
        )
    ).all()
    for member, user in rows:
        grouped[member.board_id].append(
            BoardMemberOut(id=member.id, board_id=member.board_id, user_id=member.user_id, user=user_to_out(user))
        )
    return grouped


async def build_board_views(db: AsyncSession, boards: Sequence[Board]) -> list[BoardDetailOut]:
    board_ids = [b.id for b in boards]
    owner_ids = {b.owner_id for b in boards}
    owners = {}
    if owner_ids:
        owners = {u.id: u for u in (await db.execute(select(User).where(User.id.in_(owner_ids)))).scalars().all()}
    members = await board_members(db, board_ids)
    column_views = await build_column_views(db, await ordered_columns(db, board_ids))
    by_board: dict[int, list[ColumnDetailOut]] = defaultdict(list)
    for view in column_views:
        by_board[view.board_id].append(view)
    return [
        BoardDetailOut(
            **board_to_out(b).model_dump(),
            owner=user_to_out(owners[b.owner_id]),
            members=members.get(b.id, []),
            columns=by_board.get(b.id, []),
        )
        for b in boards
    ]
