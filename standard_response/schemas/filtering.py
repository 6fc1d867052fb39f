"""Filtering descriptor schemas.

A parsed filter is a two-level tree: ``allOf`` holds AND-groups and every
group's ``anyOf`` holds the OR-ed clauses.
"""

from __future__ import annotations

from standard_response.schemas.common import WireModel


class FilterOperation(WireModel):
    field: str
    operation: str
    value: str


class FilterGroup(WireModel):
    all_of: list[FilterGroup] | None = None
    any_of: list[FilterOperation] | None = None


class FilteringInfo(WireModel):
    query: str | None = None
    filter: FilterGroup | None = None
    filterable_fields: list[str] | None = None

    model_config = {"validate_assignment": True}
