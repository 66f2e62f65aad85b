from fastapi import APIRouter

from app.api.routers.auth import router as auth_router
from app.api.routers.boards import router as boards_router
from app.api.routers.columns import router as columns_router
from app.api.routers.members import router as members_router
from app.api.routers.notifications import router as notifications_router
from app.api.routers.tags import router as tags_router
from app.api.routers.task_assignments import router as task_assignments_router
from app.api.routers.task_members import router as task_members_router
from app.api.routers.task_tags import router as task_tags_router
from app.api.routers.tasks import router as tasks_router


api_router = APIRouter()
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(boards_router, prefix="/boards", tags=["boards"])
api_router.include_router(columns_router, prefix="/columns", tags=["columns"])
api_router.include_router(tasks_router, prefix="/tasks", tags=["tasks"])
api_router.include_router(members_router, prefix="/members", tags=["members"])
api_router.include_router(task_assignments_router, prefix="/task-assignments", tags=["task-assignments"])
api_router.include_router(task_members_router, prefix="/task-members", tags=["task-members"])
api_router.include_router(tags_router, prefix="/tags", tags=["tags"])
api_router.include_router(task_tags_router, prefix="/task-tags", tags=["task-tags"])
api_router.include_router(notifications_router, prefix="/notifications", tags=["notifications"])
