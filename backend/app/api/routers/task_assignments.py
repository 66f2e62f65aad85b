from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.access import get_accessible_task
from app.api.deps import get_current_user
from app.db import get_db
from app.schemas.assignment import AssignmentOut
from app.schemas.user import UserOut
from app.services.assignments import assign_user, list_available_users, respond_to_assignment, unassign_user
from app.services.board_views import assignment_to_out, assignments_for_tasks, user_to_out


router = APIRouter()


@router.post("/{task_id}/assign/{user_id}", response_model=AssignmentOut, status_code=status.HTTP_201_CREATED)
async def assign(
    task_id: int,
    user_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> AssignmentOut:
    task, board = await get_accessible_task(db, task_id, user.id)
    assignment = await assign_user(db, task=task, board=board, user_id=user_id, assigner=user)
    await db.commit()
    views = await assignments_for_tasks(db, [task.id])
    return next(v for v in views[task.id] if v.id == assignment.id)


@router.delete("/{task_id}/unassign/{user_id}")
async def unassign(
    task_id: int,
    user_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> dict:
    task, _ = await get_accessible_task(db, task_id, user.id)
    if not await unassign_user(db, task_id=task.id, user_id=user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Assignment not found")
    await db.commit()
    return {"status": "ok"}


@router.get("/{task_id}/assignments", response_model=list[AssignmentOut])
async def list_assignments(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> list[AssignmentOut]:
    task, _ = await get_accessible_task(db, task_id, user.id)
    return (await assignments_for_tasks(db, [task.id])).get(task.id, [])


@router.get("/{task_id}/available-users", response_model=list[UserOut])
async def available_users(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> list[UserOut]:
    task, board = await get_accessible_task(db, task_id, user.id)
    users = await list_available_users(db, task_id=task.id, board_id=board.id)
    return [user_to_out(u) for u in users]


@router.put("/{assignment_id}/accept", response_model=AssignmentOut)
async def accept(
    assignment_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> AssignmentOut:
    assignment = await respond_to_assignment(db, assignment_id=assignment_id, user_id=user.id, accept=True)
    await db.commit()
    return assignment_to_out(assignment, user)


@router.put("/{assignment_id}/reject", response_model=AssignmentOut)
async def reject(
    assignment_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> AssignmentOut:
    assignment = await respond_to_assignment(db, assignment_id=assignment_id, user_id=user.id, accept=False)
    await db.commit()
    return assignment_to_out(assignment, user)
