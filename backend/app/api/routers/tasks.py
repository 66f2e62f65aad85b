from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.access import get_accessible_column, get_accessible_task
from app.api.deps import get_current_user
from app.db import get_db
from app.models.task import Task
from app.schemas.task import TaskCreate, TaskDetailOut, TaskMove, TaskReorder, TaskUpdate
from app.services.board_views import build_task_views
from app.services.positions import move_task, next_task_position, ordered_tasks, reorder_tasks


router = APIRouter()


@router.post("", response_model=TaskDetailOut, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> TaskDetailOut:
    column = await get_accessible_column(db, payload.column_id, user.id)
    position = payload.position or await next_task_position(db, column.id)
    task = Task(
        title=payload.title,
        description=payload.description or None,
        position=position,
        column_id=column.id,
        created_by=user.id,
    )
    db.add(task)
    await db.commit()
    return (await build_task_views(db, [task]))[0]


@router.get("/column/{column_id}", response_model=list[TaskDetailOut])
async def list_tasks(
    column_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> list[TaskDetailOut]:
    column = await get_accessible_column(db, column_id, user.id)
    return await build_task_views(db, await ordered_tasks(db, [column.id]))


@router.put("/reorder/{column_id}")
async def reorder(
    column_id: int,
    payload: TaskReorder,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> dict:
    column = await get_accessible_column(db, column_id, user.id)
    await reorder_tasks(db, column.id, payload.task_ids)
    await db.commit()
    return {"status": "ok"}


@router.get("/{task_id}", response_model=TaskDetailOut)
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> TaskDetailOut:
    task, _ = await get_accessible_task(db, task_id, user.id)
    return (await build_task_views(db, [task]))[0]


@router.put("/{task_id}", response_model=TaskDetailOut)
async def update_task(
    task_id: int,
    payload: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> TaskDetailOut:
    task, _ = await get_accessible_task(db, task_id, user.id)
    task.title = payload.title
    if "description" in payload.model_fields_set:
        task.description = payload.description
    if payload.position is not None:
        task.position = payload.position
    await db.commit()
    return (await build_task_views(db, [task]))[0]


@router.put("/{task_id}/move", response_model=TaskDetailOut)
async def move(
    task_id: int,
    payload: TaskMove,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> TaskDetailOut:
    task, _ = await get_accessible_task(db, task_id, user.id)
    destination = await get_accessible_column(db, payload.column_id, user.id)
    await move_task(db, task, destination.id)
    await db.commit()
    return (await build_task_views(db, [task]))[0]


@router.delete("/{task_id}")
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> dict:
    task, _ = await get_accessible_task(db, task_id, user.id)
    await db.delete(task)
    await db.commit()
    return {"status": "ok"}
