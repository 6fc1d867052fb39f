"""Route identity to declared RouteFeatureMetadata, and router-level defaults."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from standard_response.schemas.route import RouteFeatureMetadata

logger = logging.getLogger(__name__)


class RouteMetadataRegistry:
    """Holds the immutable per-route declarations.

    Keys are endpoint callables; lookups follow ``__wrapped__`` so a route
    class or decorator wrapping the endpoint still resolves to the declaration
    made on the original function.
    """

    def __init__(self) -> None:
        self._entries: dict[Callable[..., Any], RouteFeatureMetadata] = {}

    def register(self, endpoint: Callable[..., Any], metadata: RouteFeatureMetadata) -> None:
        if endpoint in self._entries:
            logger.debug("Replacing response declaration for %s", _name(endpoint))
        self._entries[endpoint] = metadata

    def get(self, endpoint: Callable[..., Any]) -> RouteFeatureMetadata | None:
        current: Any = endpoint
        seen: set[int] = set()
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            metadata = self._entries.get(current)
            if metadata is not None:
                return metadata
            current = getattr(current, "__wrapped__", None)
        return None

    def __contains__(self, endpoint: Callable[..., Any]) -> bool:
        return self.get(endpoint) is not None

    def __len__(self) -> int:
        return len(self._entries)


# Bounds and allow-lists a handler declaration may leave to its router.
_INHERITED_FIELDS = (
    "model",
    "description",
    "min_limit",
    "max_limit",
    "default_limit",
    "sortable_fields",
    "filterable_fields",
)


def merge_declarations(
    declared: RouteFeatureMetadata | None, defaults: RouteFeatureMetadata | None
) -> RouteFeatureMetadata | None:
    """Combine a handler declaration with the declaration of its router.

    The handler's response type wins, features are merged, and unset bounds or
    allow-lists fall back to the router's.
    """
    if defaults is None:
        return declared
    if declared is None:
        return defaults
    update: dict[str, Any] = {"features": declared.features | defaults.features}
    for name in _INHERITED_FIELDS:
        if getattr(declared, name) is None:
            update[name] = getattr(defaults, name)
    return declared.model_copy(update=update)


def _name(endpoint: Callable[..., Any]) -> str:
    return getattr(endpoint, "__qualname__", repr(endpoint))


route_registry = RouteMetadataRegistry()
