from __future__ import annotations

import enum


class AssignmentStatus(str, enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class NotificationType(str, enum.Enum):
    GENERAL = "GENERAL"
    BOARD_INVITATION = "BOARD_INVITATION"
    BOARD_REMOVAL = "BOARD_REMOVAL"
    TASK_ASSIGNMENT = "TASK_ASSIGNMENT"
    TASK_ASSIGNMENT_ACCEPTED = "TASK_ASSIGNMENT_ACCEPTED"
    TASK_ASSIGNMENT_REJECTED = "TASK_ASSIGNMENT_REJECTED"
