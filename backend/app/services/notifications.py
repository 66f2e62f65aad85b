from __future__ import annotations

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.board import Board
from app.models.enums import NotificationType
from app.models.notification import Notification
from app.models.task import Task
from app.models.task_member import TaskMember
from app.schemas.notification import (
    AssignmentResponseData,
    BoardNotificationData,
    NotificationOut,
    TaskAssignmentData,
)


def add_notification(
    *,
    db,
    user_id: int,
    type: NotificationType,
    title: str,
    message: str,
    data: BoardNotificationData | TaskAssignmentData | AssignmentResponseData | None = None,
    task_id: int | None = None,
    assignment_id: int | None = None,
) -> Notification:
    notification = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        data=data.model_dump() if data is not None else None,
        is_read=False,
        task_id=task_id,
        assignment_id=assignment_id,
    )
    db.add(notification)
    return notification


def notification_to_out(notification: Notification) -> NotificationOut:
    return NotificationOut(
        id=notification.id,
        user_id=notification.user_id,
        type=notification.type,
        title=notification.title,
        message=notification.message,
        data=notification.data,
        is_read=notification.is_read,
        task_id=notification.task_id,
        assignment_id=notification.assignment_id,
        created_at=notification.created_at,
    )


def notify_board_invitation(*, db, board: Board, user_id: int) -> Notification:
    return add_notification(
        db=db,
        user_id=user_id,
        type=NotificationType.BOARD_INVITATION,
        title="Board Invitation",
        message=f'You have been invited to join the board "{board.name}"',
        data=BoardNotificationData(board_id=board.id, board_name=board.name),
    )


def notify_board_removal(*, db, board: Board, user_id: int) -> Notification:
    return add_notification(
        db=db,
        user_id=user_id,
        type=NotificationType.BOARD_REMOVAL,
        title="Removed from Board",
        message=f'You have been removed from the board "{board.name}"',
        data=BoardNotificationData(board_id=board.id, board_name=board.name),
    )


def notify_task_assignment(*, db, task: Task, assignment: TaskMember, assigner_id: int, assigner_username: str) -> Notification:
    return add_notification(
        db=db,
        user_id=assignment.user_id,
        type=NotificationType.TASK_ASSIGNMENT,
        title="New Task Assignment",
        message=f'You have been assigned to task "{task.title}" by {assigner_username}',
        data=TaskAssignmentData(
            task_id=task.id,
            task_title=task.title,
            assigned_by=assigner_id,
            assignment_id=assignment.id,
        ),
        task_id=task.id,
        assignment_id=assignment.id,
    )


def notify_assignment_response(
    *,
    db,
    task: Task,
    recipient_id: int,
    responder_id: int,
    assignment_id: int,
    accepted: bool,
) -> Notification:
    verb = "accepted" if accepted else "rejected"
    return add_notification(
        db=db,
        user_id=recipient_id,
        type=NotificationType.TASK_ASSIGNMENT_ACCEPTED if accepted else NotificationType.TASK_ASSIGNMENT_REJECTED,
        title=f"Task Assignment {verb.capitalize()}",
        message=f'User has {verb} the task assignment for "{task.title}"',
        data=AssignmentResponseData(
            task_id=task.id,
            task_title=task.title,
            responded_by=responder_id,
            assignment_id=assignment_id,
            accepted=accepted,
        ),
        task_id=task.id,
        # A rejected assignment row is deleted, so only accepted ones keep the link.
        assignment_id=assignment_id if accepted else None,
    )


async def clear_assignment_notification(db: AsyncSession, *, user_id: int, assignment_id: int) -> None:
    await db.execute(
        delete(Notification).where(
            Notification.user_id == user_id,
            Notification.type == NotificationType.TASK_ASSIGNMENT,
            Notification.assignment_id == assignment_id,
        )
    )
