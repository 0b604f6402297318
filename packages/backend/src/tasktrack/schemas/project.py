"""Pydantic schemas for projects.

- ProjectCreate: what you POST (userId is not accepted; the server sets it)
- ProjectUpdate: what you PUT (any subset; only supplied fields are applied)
- ProjectRead: what the API returns
"""

from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator

from tasktrack.schemas.common import CamelModel, reject_null


class ProjectCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    status: str = Field(default="planning", max_length=50)
    due_date: Optional[date] = None


class ProjectUpdate(CamelModel):
    """Partial update. Fields left out of the body are not touched."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[str] = Field(None, max_length=50)
    due_date: Optional[date] = None

    @field_validator("name", "status")
    @classmethod
    def _not_null(cls, v, info):
        return reject_null(v, info.field_name)


class ProjectRead(CamelModel):
    id: int
    name: str
    description: Optional[str]
    status: str
    due_date: Optional[date]
    user_id: int
    created_at: datetime
    updated_at: datetime
