"""Pagination descriptor and query validation schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from standard_response.schemas.common import WireModel


class PaginationInfo(WireModel):
    """Parsed pagination request plus the bounds the route declared.

    ``count`` stays unset until the handler reports the total number of items.
    """

    query: str | None = None
    count: int | None = None
    limit: int
    offset: int
    min_limit: int | None = None
    max_limit: int | None = None
    default_limit: int | None = None

    model_config = {"validate_assignment": True}


class PaginationQuery(BaseModel):
    """Validation rules applied to limit/offset after defaulting."""

    limit: int = Field(gt=0)
    offset: int = Field(ge=0)
