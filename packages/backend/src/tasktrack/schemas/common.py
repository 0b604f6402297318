"""Shared pydantic base for request/response schemas.

The JSON API speaks camelCase (dueDate, projectId, userId) while Python
code uses snake_case. Aliases translate at the boundary; snake_case
input is accepted too.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def reject_null(value, field_name: str):
    """Partial updates may omit a required column but not null it out."""
    if value is None:
        raise ValueError(f"{field_name} cannot be null")
    return value
