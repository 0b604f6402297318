"""Pydantic schemas for tasks.

priority is a free-form string (low/medium/high by convention) and
completed is a plain boolean with no transition rules.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator

from tasktrack.schemas.common import CamelModel, reject_null


class TaskCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None
    completed: bool = False
    priority: str = Field(default="medium", max_length=20)
    due_date: Optional[date] = None
    project_id: int


class TaskUpdate(CamelModel):
    """Partial update. A projectId here means "move the task" and is
    ownership-checked like a create."""
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = None
    completed: Optional[bool] = None
    priority: Optional[str] = Field(None, max_length=20)
    due_date: Optional[date] = None
    project_id: Optional[int] = None

    @field_validator("title", "completed", "priority")
    @classmethod
    def _not_null(cls, v, info):
        return reject_null(v, info.field_name)


class TaskRead(CamelModel):
    id: int
    title: str
    description: Optional[str]
    completed: bool
    priority: str
    due_date: Optional[date]
    project_id: int
    created_at: datetime
    updated_at: datetime
