from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.access import ensure_board_owner, get_accessible_board, get_owned_board
from app.api.deps import get_current_user
from app.db import get_db
from app.models.board_member import BoardMember
from app.models.user import User
from app.schemas.board import BoardMemberOut, MemberInvite
from app.schemas.user import UserSearchResult
from app.services.board_views import board_members, user_to_out
from app.services.notifications import notify_board_invitation, notify_board_removal


logger = logging.getLogger(__name__)

router = APIRouter()

SEARCH_LIMIT = 10


@router.post("/invite", response_model=BoardMemberOut, status_code=status.HTTP_201_CREATED)
async def invite_member(
    payload: MemberInvite,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> BoardMemberOut:
    board = await get_owned_board(db, payload.board_id, user.id)

    invitee = (
        await db.execute(select(User).where(func.lower(User.email) == payload.email.lower()))
    ).scalar_one_or_none()
    if invitee is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found with this email")

    existing = (
        await db.execute(
            select(BoardMember.id).where(BoardMember.board_id == board.id, BoardMember.user_id == invitee.id)
        )
    ).scalar_one_or_none()
    if existing is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User is already a member of this board")
    if invitee.id == user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot invite yourself")

    member = BoardMember(board_id=board.id, user_id=invitee.id)
    db.add(member)
    await db.flush()
    notify_board_invitation(db=db, board=board, user_id=invitee.id)
    await db.commit()
    logger.info("User %s invited user %s to board %s", user.id, invitee.id, board.id)

    return BoardMemberOut(id=member.id, board_id=board.id, user_id=invitee.id, user=user_to_out(invitee))


@router.get("/board/{board_id}", response_model=list[BoardMemberOut])
async def list_members(
    board_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> list[BoardMemberOut]:
    board = await get_accessible_board(db, board_id, user.id)
    owner = (await db.execute(select(User).where(User.id == board.owner_id))).scalar_one()
    members = (await board_members(db, [board.id])).get(board.id, [])
    owner_entry = BoardMemberOut(id=0, board_id=board.id, user_id=owner.id, is_owner=True, user=user_to_out(owner))
    return [owner_entry, *members]


@router.get("/search", response_model=UserSearchResult)
async def search_users(
    query: str = "",
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> UserSearchResult:
    term = query.strip()
    if not term:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Search query is required")
    pattern = f"%{term}%"
    users = (
        await db.execute(
            select(User)
            .where(User.id != user.id, or_(User.username.ilike(pattern), User.email.ilike(pattern)))
            .order_by(User.username)
            .limit(SEARCH_LIMIT)
        )
    ).scalars().all()
    return UserSearchResult(users=[user_to_out(u) for u in users])


@router.delete("/board/{board_id}/leave")
async def leave_board(
    board_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> dict:
    board = await get_accessible_board(db, board_id, user.id)
    if board.owner_id == user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Board owner cannot leave the board. Transfer ownership first.",
        )
    member = (
        await db.execute(select(BoardMember).where(BoardMember.board_id == board.id, BoardMember.user_id == user.id))
    ).scalar_one_or_none()
    if member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="You are not a member of this board")
    await db.delete(member)
    await db.commit()
    logger.info("User %s left board %s", user.id, board.id)
    return {"status": "ok"}


@router.delete("/{member_id}")
async def remove_member(
    member_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
) -> dict:
    member = (await db.execute(select(BoardMember).where(BoardMember.id == member_id))).scalar_one_or_none()
    if member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found or access denied")
    board = await get_accessible_board(db, member.board_id, user.id)
    ensure_board_owner(user.id, board)

    removed_user_id = member.user_id
    await db.delete(member)
    notify_board_removal(db=db, board=board, user_id=removed_user_id)
    await db.commit()
    logger.info("User %s removed user %s from board %s", user.id, removed_user_id, board.id)
    return {"status": "ok"}
