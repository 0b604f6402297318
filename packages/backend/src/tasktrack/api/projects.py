"""Project API routes.

Routes translate HTTP to service calls. Ownership checks and error
mapping live in ProjectService; a project that belongs to someone
else is indistinguishable from one that doesn't exist (404).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.dependencies import CurrentUser, get_current_user
from tasktrack.db.engine import get_db
from tasktrack.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from tasktrack.services.project_service import ProjectService

router = APIRouter(prefix="/projects")


def _svc(db: AsyncSession = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


@router.get("", response_model=list[ProjectRead])
async def list_projects(
    identity: CurrentUser = Depends(get_current_user),
    svc: ProjectService = Depends(_svc),
):
    return await svc.list_projects(identity)


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: int,
    identity: CurrentUser = Depends(get_current_user),
    svc: ProjectService = Depends(_svc),
):
    return await svc.get_project(identity, project_id)


@router.post("", response_model=ProjectRead, status_code=201)
async def create_project(
    body: ProjectCreate,
    identity: CurrentUser = Depends(get_current_user),
    svc: ProjectService = Depends(_svc),
):
    """Create a project owned by the caller. Any userId in the body is ignored."""
    return await svc.create_project(
        identity,
        name=body.name,
        description=body.description,
        status=body.status,
        due_date=body.due_date,
    )


@router.put("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: int,
    body: ProjectUpdate,
    identity: CurrentUser = Depends(get_current_user),
    svc: ProjectService = Depends(_svc),
):
    """Update any subset of name, description, status, dueDate."""
    return await svc.update_project(
        identity, project_id, body.model_dump(exclude_unset=True)
    )


@router.delete("/{project_id}")
async def delete_project(
    project_id: int,
    identity: CurrentUser = Depends(get_current_user),
    svc: ProjectService = Depends(_svc),
):
    """Delete a project and every task in it."""
    await svc.delete_project(identity, project_id)
    return {"message": "Project deleted successfully"}
