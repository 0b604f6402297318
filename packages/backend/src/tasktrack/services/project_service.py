"""Project service — CRUD scoped to the acting user.

Every read or write loads the project and compares its user_id to the
actor. A mismatch is reported as NotFound, exactly like a missing row,
so callers can't discover other users' project ids.
"""

from typing import Any

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.dependencies import CurrentUser
from tasktrack.db.models import Project, Task, valid_id
from tasktrack.errors import NotFound, store_errors

logger = structlog.get_logger()

# Columns a client may change. user_id is deliberately absent.
UPDATABLE_FIELDS = frozenset({"name", "description", "status", "due_date"})


class ProjectService:
    """Business logic for projects."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_owned(self, actor: CurrentUser, project_id: int) -> Project:
        if not valid_id(project_id):
            raise NotFound("Project not found")
        project = await self.db.get(Project, project_id)
        if not project or project.user_id != actor.user_id:
            raise NotFound("Project not found")
        return project

    # ─── Read ────────────────────────────────────────────

    async def list_projects(self, actor: CurrentUser) -> list[Project]:
        async with store_errors(self.db, "Failed to fetch projects"):
            result = await self.db.execute(
                select(Project)
                .where(Project.user_id == actor.user_id)
                .order_by(Project.id)
            )
            return list(result.scalars().all())

    async def get_project(self, actor: CurrentUser, project_id: int) -> Project:
        async with store_errors(self.db, "Failed to fetch project"):
            return await self._get_owned(actor, project_id)

    # ─── Write ───────────────────────────────────────────

    async def create_project(
        self,
        actor: CurrentUser,
        name: str,
        description: str | None = None,
        status: str = "planning",
        due_date=None,
    ) -> Project:
        """Create a project owned by the actor."""
        async with store_errors(self.db, "Failed to create project"):
            project = Project(
                name=name,
                description=description,
                status=status,
                due_date=due_date,
                user_id=actor.user_id,
            )
            self.db.add(project)
            await self.db.commit()
            await self.db.refresh(project)

        logger.info("project.created", project_id=project.id, user_id=actor.user_id)
        return project

    async def update_project(
        self, actor: CurrentUser, project_id: int, fields: dict[str, Any]
    ) -> Project:
        """Apply the supplied fields to an owned project."""
        async with store_errors(self.db, "Failed to update project"):
            project = await self._get_owned(actor, project_id)
            changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
            for key, value in changes.items():
                setattr(project, key, value)
            await self.db.commit()
            await self.db.refresh(project)

        if changes:
            logger.info(
                "project.updated", project_id=project_id, fields=sorted(changes)
            )
        return project

    async def delete_project(self, actor: CurrentUser, project_id: int) -> None:
        """Delete an owned project together with its tasks."""
        async with store_errors(self.db, "Failed to delete project"):
            project = await self._get_owned(actor, project_id)
            await self.db.execute(delete(Task).where(Task.project_id == project.id))
            await self.db.delete(project)
            await self.db.commit()

        logger.info("project.deleted", project_id=project_id, user_id=actor.user_id)
