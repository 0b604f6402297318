"""Task service — CRUD with ownership resolved through the parent project.

Tasks carry no owner column. Authorization is always a two-step resolve:
load the task, load its project by foreign key, compare the project's
user_id to the actor. No relationship loading is involved.

Two different failures:
- the task itself is not visible → NotFound (404)
- the task points (or would point) at a project the actor can't use
  → InvalidProject (400)
"""

from datetime import date
from typing import Any, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.dependencies import CurrentUser
from tasktrack.db.models import Project, Task, valid_id
from tasktrack.errors import InvalidProject, NotFound, store_errors

logger = structlog.get_logger()

UPDATABLE_FIELDS = frozenset(
    {"title", "description", "completed", "priority", "due_date", "project_id"}
)


class TaskService:
    """Business logic for tasks."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Ownership resolution ────────────────────────────

    async def _owned_project(
        self, actor: CurrentUser, project_id: Optional[int]
    ) -> Optional[Project]:
        if project_id is None or not valid_id(project_id):
            return None
        project = await self.db.get(Project, project_id)
        if not project or project.user_id != actor.user_id:
            return None
        return project

    async def _get_owned(self, actor: CurrentUser, task_id: int) -> Task:
        if not valid_id(task_id):
            raise NotFound("Task not found")
        task = await self.db.get(Task, task_id)
        if not task or not await self._owned_project(actor, task.project_id):
            raise NotFound("Task not found")
        return task

    # ─── Read ────────────────────────────────────────────

    async def list_tasks(self, actor: CurrentUser) -> list[Task]:
        """All tasks under projects the actor owns."""
        async with store_errors(self.db, "Failed to fetch tasks"):
            result = await self.db.execute(
                select(Task)
                .join(Project, Task.project_id == Project.id)
                .where(Project.user_id == actor.user_id)
                .order_by(Task.id)
            )
            return list(result.scalars().all())

    async def get_task(self, actor: CurrentUser, task_id: int) -> Task:
        async with store_errors(self.db, "Failed to fetch task"):
            return await self._get_owned(actor, task_id)

    # ─── Write ───────────────────────────────────────────

    async def create_task(
        self,
        actor: CurrentUser,
        project_id: int,
        title: str,
        description: Optional[str] = None,
        completed: bool = False,
        priority: str = "medium",
        due_date: Optional[date] = None,
    ) -> Task:
        """Create a task under a project the actor owns."""
        async with store_errors(self.db, "Failed to create task"):
            if not await self._owned_project(actor, project_id):
                raise InvalidProject()

            task = Task(
                title=title,
                description=description,
                completed=completed,
                priority=priority,
                due_date=due_date,
                project_id=project_id,
            )
            self.db.add(task)
            await self.db.commit()
            await self.db.refresh(task)

        logger.info("task.created", task_id=task.id, project_id=project_id)
        return task

    async def update_task(
        self, actor: CurrentUser, task_id: int, fields: dict[str, Any]
    ) -> Task:
        """Apply supplied fields. Moving to another project needs ownership of it.

        All checks run before any attribute is touched, so a rejected
        reassignment leaves the task exactly as it was.
        """
        async with store_errors(self.db, "Failed to update task"):
            task = await self._get_owned(actor, task_id)
            changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}

            if "project_id" in changes and changes["project_id"] != task.project_id:
                if not await self._owned_project(actor, changes["project_id"]):
                    raise InvalidProject()

            for key, value in changes.items():
                setattr(task, key, value)
            await self.db.commit()
            await self.db.refresh(task)

        if changes:
            logger.info("task.updated", task_id=task_id, fields=sorted(changes))
        return task

    async def delete_task(self, actor: CurrentUser, task_id: int) -> None:
        async with store_errors(self.db, "Failed to delete task"):
            task = await self._get_owned(actor, task_id)
            await self.db.delete(task)
            await self.db.commit()

        logger.info("task.deleted", task_id=task_id, user_id=actor.user_id)
