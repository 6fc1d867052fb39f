"""Per-route feature declaration, attached once at route registration."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from standard_response.core.constants import ResponseFeature, ResponseType


class RouteFeatureMetadata(BaseModel):
    """Declared contract of a route: response type, enabled features, constraints.

    Immutable and shared by every request hitting the route; per-request state
    lives in :class:`~standard_response.services.params.StandardParams`.
    """

    response_type: ResponseType = ResponseType.STANDARD
    features: frozenset[ResponseFeature] = Field(default_factory=frozenset)

    # Documentation only
    model: Any = None
    description: str | None = None

    min_limit: int | None = None
    max_limit: int | None = None
    default_limit: int | None = None
    sortable_fields: tuple[str, ...] | None = None
    filterable_fields: tuple[str, ...] | None = None

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @property
    def is_raw(self) -> bool:
        return self.response_type is ResponseType.RAW

    def has_feature(self, feature: ResponseFeature) -> bool:
        return feature in self.features
