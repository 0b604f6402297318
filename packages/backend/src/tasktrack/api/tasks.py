"""Task API routes.

Tasks are top-level resources (/tasks/{id}) even though they live inside
projects; the service resolves the parent project for every request.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.dependencies import CurrentUser, get_current_user
from tasktrack.db.engine import get_db
from tasktrack.schemas.task import TaskCreate, TaskRead, TaskUpdate
from tasktrack.services.task_service import TaskService

router = APIRouter(prefix="/tasks")


def _svc(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db)


@router.get("", response_model=list[TaskRead])
async def list_tasks(
    identity: CurrentUser = Depends(get_current_user),
    svc: TaskService = Depends(_svc),
):
    """Every task under the caller's projects."""
    return await svc.list_tasks(identity)


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(
    task_id: int,
    identity: CurrentUser = Depends(get_current_user),
    svc: TaskService = Depends(_svc),
):
    return await svc.get_task(identity, task_id)


@router.post("", response_model=TaskRead, status_code=201)
async def create_task(
    body: TaskCreate,
    identity: CurrentUser = Depends(get_current_user),
    svc: TaskService = Depends(_svc),
):
    """Create a task. 400 if projectId isn't one of the caller's projects."""
    return await svc.create_task(
        identity,
        project_id=body.project_id,
        title=body.title,
        description=body.description,
        completed=body.completed,
        priority=body.priority,
        due_date=body.due_date,
    )


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: int,
    body: TaskUpdate,
    identity: CurrentUser = Depends(get_current_user),
    svc: TaskService = Depends(_svc),
):
    return await svc.update_task(
        identity, task_id, body.model_dump(exclude_unset=True)
    )


@router.delete("/{task_id}")
async def delete_task(
    task_id: int,
    identity: CurrentUser = Depends(get_current_user),
    svc: TaskService = Depends(_svc),
):
    await svc.delete_task(identity, task_id)
    return {"message": "Task deleted successfully"}
