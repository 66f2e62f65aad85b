"""Older assignment surface kept for existing clients; same rows and rules as /task-assignments."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.access import get_accessible_task
from app.api.deps import get_current_user
from app.db import get_db
from app.schemas.assignment import AssignmentOut, TaskMemberAssign
from app.services.assignments import assign_user, unassign_user
from app.services.board_views import assignments_for_tasks


router = APIRouter()


@router.post("/assign", response_model=AssignmentOut, status_code=status.HTTP_201_CREATED)
async def assign_member(
    payload: TaskMemberAssign,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> AssignmentOut:
    task, board = await get_accessible_task(db, payload.task_id, user.id)
    assignment = await assign_user(db, task=task, board=board, user_id=payload.user_id, assigner=user)
    await db.commit()
    views = await assignments_for_tasks(db, [task.id])
    return next(v for v in views[task.id] if v.id == assignment.id)


@router.get("/task/{task_id}", response_model=list[AssignmentOut])
async def list_task_members(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> list[AssignmentOut]:
    task, _ = await get_accessible_task(db, task_id, user.id)
    return (await assignments_for_tasks(db, [task.id])).get(task.id, [])


@router.delete("/task/{task_id}/member/{user_id}")
async def remove_task_member(
    task_id: int,
    user_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> dict:
    task, _ = await get_accessible_task(db, task_id, user.id)
    if not await unassign_user(db, task_id=task.id, user_id=user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task member not found")
    await db.commit()
    return {"status": "ok"}
