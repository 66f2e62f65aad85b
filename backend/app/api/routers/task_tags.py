from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.access import get_accessible_tag, get_accessible_task
from app.api.deps import get_current_user
from app.db import get_db
from app.models.task import Task
from app.models.task_tag import TaskTag
from app.schemas.tag import TaskTagCreate, TaskTagOut
from app.schemas.task import TaskDetailOut
from app.services.board_views import build_task_views, tag_to_out, task_tags_for_tasks


router = APIRouter()


@router.post("/add", response_model=TaskTagOut, status_code=status.HTTP_201_CREATED)
async def add_tag_to_task(
    payload: TaskTagCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> TaskTagOut:
    task, board = await get_accessible_task(db, payload.task_id, user.id)
    tag = await get_accessible_tag(db, payload.tag_id, user.id)
    if tag.board_id != board.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Tag belongs to a different board")

    existing = (
        await db.execute(select(TaskTag.id).where(TaskTag.task_id == task.id, TaskTag.tag_id == tag.id))
    ).scalar_one_or_none()
    if existing is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Tag is already assigned to this task")

    task_tag = TaskTag(task_id=task.id, tag_id=tag.id)
    db.add(task_tag)
    await db.commit()
    return TaskTagOut(id=task_tag.id, task_id=task.id, tag_id=tag.id, tag=tag_to_out(tag))


@router.delete("/task/{task_id}/tag/{tag_id}")
async def remove_tag_from_task(
    task_id: int,
    tag_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> dict:
    task, _ = await get_accessible_task(db, task_id, user.id)
    result = await db.execute(delete(TaskTag).where(TaskTag.task_id == task.id, TaskTag.tag_id == tag_id))
    if not result.rowcount:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tag is not assigned to this task")
    await db.commit()
    return {"status": "ok"}


@router.get("/task/{task_id}", response_model=list[TaskTagOut])
async def list_task_tags(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> list[TaskTagOut]:
    task, _ = await get_accessible_task(db, task_id, user.id)
    return (await task_tags_for_tasks(db, [task.id])).get(task.id, [])


@router.get("/tag/{tag_id}/tasks", response_model=list[TaskDetailOut])
async def list_tasks_for_tag(
    tag_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> list[TaskDetailOut]:
    tag = await get_accessible_tag(db, tag_id, user.id)
    tasks = (
        await db.execute(
            select(Task).join(TaskTag, TaskTag.task_id == Task.id).where(TaskTag.tag_id == tag.id).order_by(Task.id.desc())
        )
    ).scalars().all()
    return await build_task_views(db, tasks)
