"""
Request and response bodies for the /todos endpoints.
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class TodoCreate(BaseModel):
    text: StrictStr


class TodoUpdate(BaseModel):
    """Partial update; fields left out keep their stored value."""

    text: StrictStr | None = None
    completed: StrictBool | None = None


class TodoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    text: str
    completed: bool


# Offsets and limits are bound to a signed 64-bit BIGINT
MAX_PAGE_VALUE = 2**63 - 1


class Pagination(BaseModel):
    offset: int | None = Field(default=None, ge=0, le=MAX_PAGE_VALUE)
    limit: int | None = Field(default=None, ge=0, le=MAX_PAGE_VALUE)
