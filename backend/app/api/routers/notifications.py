from __future__ import annotations

import math

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.db import get_db
from app.models.notification import Notification
from app.schemas.notification import NotificationOut, NotificationPage, NotificationStats, Pagination
from app.services.notifications import notification_to_out


router = APIRouter()


async def _get_own_notification(db: AsyncSession, notification_id: int, user_id: int) -> Notification:
    n = (
        await db.execute(
            select(Notification).where(Notification.id == notification_id, Notification.user_id == user_id)
        )
    ).scalar_one_or_none()
    if n is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return n


async def _count(db: AsyncSession, user_id: int, *, unread_only: bool = False) -> int:
    stmt = select(func.count(Notification.id)).where(Notification.user_id == user_id)
    if unread_only:
        stmt = stmt.where(Notification.is_read.is_(False))
    return (await db.execute(stmt)).scalar_one()


@router.get("", response_model=NotificationPage)
async def list_notifications(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    unread_only: bool = False,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> NotificationPage:
    stmt = select(Notification).where(Notification.user_id == user.id)
    if unread_only:
        stmt = stmt.where(Notification.is_read.is_(False))
    notifications = (
        await db.execute(
            stmt.order_by(Notification.created_at.desc(), Notification.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
    ).scalars().all()
    total = await _count(db, user.id, unread_only=unread_only)
    return NotificationPage(
        notifications=[notification_to_out(n) for n in notifications],
        pagination=Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
        unread_count=await _count(db, user.id, unread_only=True),
    )


@router.get("/stats", response_model=NotificationStats)
async def stats(db: AsyncSession = Depends(get_db), user=Depends(get_current_user)) -> NotificationStats:
    total = await _count(db, user.id)
    unread = await _count(db, user.id, unread_only=True)
    return NotificationStats(total=total, unread=unread, read=total - unread)


@router.put("/read-all")
async def mark_all_read(db: AsyncSession = Depends(get_db), user=Depends(get_current_user)) -> dict:
    await db.execute(
        update(Notification)
        .where(Notification.user_id == user.id, Notification.is_read.is_(False))
        .values(is_read=True)
    )
    await db.commit()
    return {"status": "ok"}


@router.get("/{notification_id}", response_model=NotificationOut)
async def get_notification(
    notification_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> NotificationOut:
    return notification_to_out(await _get_own_notification(db, notification_id, user.id))


@router.put("/{notification_id}/read", response_model=NotificationOut)
async def mark_read(
    notification_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> NotificationOut:
    n = await _get_own_notification(db, notification_id, user.id)
    if not n.is_read:
        n.is_read = True
        await db.commit()
    return notification_to_out(n)


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> dict:
    n = await _get_own_notification(db, notification_id, user.id)
    await db.delete(n)
    await db.commit()
    return {"status": "ok"}


@router.delete("")
async def delete_all_notifications(db: AsyncSession = Depends(get_db), user=Depends(get_current_user)) -> dict:
    await db.execute(delete(Notification).where(Notification.user_id == user.id))
    await db.commit()
    return {"status": "ok"}
