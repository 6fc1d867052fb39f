"""Sorting descriptor schemas."""

from __future__ import annotations

from enum import Enum

from standard_response.schemas.common import WireModel


class SortingOrder(str, Enum):
    ASC = "asc"
    DES = "des"


class SortOperation(WireModel):
    field: str
    order: SortingOrder


class SortingInfo(WireModel):
    """Parsed ``sort`` query. ``sort`` order is the precedence callers apply."""

    query: str | None = None
    sort: list[SortOperation] | None = None
    sortable_fields: list[str] | None = None

    model_config = {"validate_assignment": True}
