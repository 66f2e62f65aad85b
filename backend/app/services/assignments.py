"""Task assignment lifecycle: PENDING -> ACCEPTED, or PENDING -> deleted on reject."""

from __future__ import annotations

from collections.abc import Iterable

from fastapi import HTTPException, status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.board import Board
from app.models.board_member import BoardMember
from app.models.column import Column
from app.models.enums import AssignmentStatus
from app.models.task import Task
from app.models.task_member import TaskMember
from app.models.user import User
from app.services.notifications import (
    clear_assignment_notification,
    notify_assignment_response,
    notify_task_assignment,
)


def available_user_ids(member_user_ids: Iterable[int], accepted_user_ids: Iterable[int]) -> list[int]:
    """Board members who have not accepted the task yet, in membership order."""
    accepted = set(accepted_user_ids)
    return [user_id for user_id in member_user_ids if user_id not in accepted]


async def assign_user(db: AsyncSession, *, task: Task, board: Board, user_id: int, assigner: User) -> TaskMember:
    is_member = (
        await db.execute(
            select(BoardMember.id).where(BoardMember.board_id == board.id, BoardMember.user_id == user_id)
        )
    ).scalar_one_or_none()
    if is_member is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User is not a member of this board")

    existing = (
        await db.execute(select(TaskMember.id).where(TaskMember.task_id == task.id, TaskMember.user_id == user_id))
    ).scalar_one_or_none()
    if existing is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User is already assigned to this task")

    assignment = TaskMember(task_id=task.id, user_id=user_id, status=AssignmentStatus.PENDING)
    db.add(assignment)
    await db.flush()

    notify_task_assignment(
        db=db,
        task=task,
        assignment=assignment,
        assigner_id=assigner.id,
        assigner_username=assigner.username,
    )
    return assignment


async def unassign_user(db: AsyncSession, *, task_id: int, user_id: int) -> int:
    result = await db.execute(
        delete(TaskMember).where(TaskMember.task_id == task_id, TaskMember.user_id == user_id)
    )
    return result.rowcount or 0


async def respond_to_assignment(
    db: AsyncSession,
    *,
    assignment_id: int,
    user_id: int,
    accept: bool,
) -> TaskMember:
    """Accept or reject a PENDING assignment addressed to ``user_id``.

    The assignee's original TASK_ASSIGNMENT notification is replaced by a
    single response notification to the task creator (or board owner when the
    creator is gone). A rejected row is deleted so the user can be re-assigned.
    """
    row = (
        await db.execute(
            select(TaskMember, Task, Board)
            .join(Task, Task.id == TaskMember.task_id)
            .join(Column, Column.id == Task.column_id)
            .join(Board, Board.id == Column.board_id)
            .where(
                TaskMember.id == assignment_id,
                TaskMember.user_id == user_id,
                TaskMember.status == AssignmentStatus.PENDING,
            )
        )
    ).first()
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Assignment not found or already processed"
        )
    assignment, task, board = row

    await clear_assignment_notification(db, user_id=user_id, assignment_id=assignment.id)

    if accept:
        assignment.status = AssignmentStatus.ACCEPTED
    else:
        assignment.status = AssignmentStatus.REJECTED
        await db.delete(assignment)
    await db.flush()

    notify_assignment_response(
        db=db,
        task=task,
        recipient_id=task.created_by or board.owner_id,
        responder_id=user_id,
        assignment_id=assignment.id,
        accepted=accept,
    )
    return assignment


async def list_available_users(db: AsyncSession, *, task_id: int, board_id: int) -> list[User]:
    members = (
        await db.execute(
            select(User)
            .join(BoardMember, BoardMember.user_id == User.id)
            .where(BoardMember.board_id == board_id)
            .order_by(BoardMember.id)
        )
    ).scalars().all()
    accepted = (
        await db.execute(
            select(TaskMember.user_id).where(
                TaskMember.task_id == task_id, TaskMember.status == AssignmentStatus.ACCEPTED
            )
        )
    ).scalars().all()
    by_id = {u.id: u for u in members}
    return [by_id[user_id] for user_id in available_user_ids([u.id for u in members], accepted)]
