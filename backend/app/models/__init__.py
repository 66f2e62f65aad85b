from app.models.board import Board
from app.models.board_member import BoardMember
from app.models.column import Column
from app.models.notification import Notification
from app.models.tag import Tag
from app.models.task import Task
from app.models.task_member import TaskMember
from app.models.task_tag import TaskTag
from app.models.user import User

__all__ = [
    "Board",
    "BoardMember",
    "Column",
    "Notification",
    "Tag",
    "Task",
    "TaskMember",
    "TaskTag",
    "User",
]
