"""Route declaration decorators and router-level defaults.

Declarations are looked up when a request arrives, so they may sit above
or below the router decorator::

    @router.get("/books")
    @standard_response(model=[BookOut], is_paginated=True, is_sorted=True)
    async def list_books(...): ...

A router can declare defaults for every route it holds::

    router = APIRouter(
        prefix="/books",
        route_class=StandardResponseRoute,
        dependencies=[router_standard_response(is_paginated=True, max_limit=50)],
    )

A route's own declaration overrides the router's response type, and the
features of both are merged.
"""

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from fastapi import Depends, Request, params

from standard_response.core.constants import DEFAULT_MIN_LIMIT, FALLBACK_DEFAULT_LIMIT, ResponseFeature, ResponseType
from standard_response.schemas.route import RouteFeatureMetadata
from standard_response.services.registry import RouteMetadataRegistry, merge_declarations, route_registry

EndpointT = TypeVar("EndpointT", bound=Callable[..., Any])

# request.state attribute holding the merged router defaults
ROUTER_DEFAULTS_ATTR = "standard_response_router_defaults"


def _declare(
    metadata: RouteFeatureMetadata, registry: RouteMetadataRegistry | None
) -> Callable[[EndpointT], EndpointT]:
    def decorator(endpoint: EndpointT) -> EndpointT:
        (registry if registry is not None else route_registry).register(endpoint, metadata)
        return endpoint

    return decorator


def _as_tuple(fields: Iterable[str] | None) -> tuple[str, ...] | None:
    return tuple(fields) if fields is not None else None


def _standard_metadata(
    *,
    model: Any,
    description: str | None,
    is_paginated: bool,
    min_limit: int | None,
    max_limit: int | None,
    default_limit: int | None,
    is_sorted: bool,
    sortable_fields: Iterable[str] | None,
    is_filtered: bool,
    filterable_fields: Iterable[str] | None,
) -> RouteFeatureMetadata:
    features = set()
    if is_paginated:
        features.add(ResponseFeature.PAGINATION)
    if is_sorted:
        features.add(ResponseFeature.SORTING)
    if is_filtered:
        features.add(ResponseFeature.FILTERING)

    return RouteFeatureMetadata(
        response_type=ResponseType.STANDARD,
        features=frozenset(features),
        model=model,
        description=description,
        min_limit=min_limit if is_paginated else None,
        max_limit=max_limit if is_paginated else None,
        default_limit=default_limit if is_paginated else None,
        sortable_fields=_as_tuple(sortable_fields) if is_sorted else None,
        filterable_fields=_as_tuple(filterable_fields) if is_filtered else None,
    )


def standard_response(
    *,
    model: Any = None,
    description: str | None = None,
    is_paginated: bool = False,
    min_limit: int | None = DEFAULT_MIN_LIMIT,
    max_limit: int | None = None,
    default_limit: int | None = FALLBACK_DEFAULT_LIMIT,
    is_sorted: bool = False,
    sortable_fields: Iterable[str] | None = None,
    is_filtered: bool = False,
    filterable_fields: Iterable[str] | None = None,
    registry: RouteMetadataRegistry | None = None,
) -> Callable[[EndpointT], EndpointT]:
    """Declare a STANDARD route and the query features it accepts.

    ``model`` and ``description`` document the returned data and play no part
    in parsing. Limit bounds only apply when ``is_paginated`` is set; the
    allow-lists only when ``is_sorted`` / ``is_filtered`` are.
    """
    metadata = _standard_metadata(
        model=model,
        description=description,
        is_paginated=is_paginated,
        min_limit=min_limit,
        max_limit=max_limit,
        default_limit=default_limit,
        is_sorted=is_sorted,
        sortable_fields=sortable_fields,
        is_filtered=is_filtered,
        filterable_fields=filterable_fields,
    )
    return _declare(metadata, registry)


def raw_response(
    *,
    model: Any = None,
    description: str | None = None,
    registry: RouteMetadataRegistry | None = None,
) -> Callable[[EndpointT], EndpointT]:
    """Declare a RAW route: the handler result is returned without an envelope."""
    metadata = RouteFeatureMetadata(
        response_type=ResponseType.RAW,
        model=model,
        description=description,
    )
    return _declare(metadata, registry)


# ---------------------------------------------------------------------------
# Router-level declarations
# ---------------------------------------------------------------------------

class RouterDeclaration:
    """Dependency recording a router's default declaration on the request.

    Router dependencies run for every route the router holds, also through
    ``include_router``, outer routers first. Each declaration is merged over
    the ones recorded before it, so inner routers override outer ones the same
    way a route overrides its router.
    """

    def __init__(self, metadata: RouteFeatureMetadata):
        self.metadata = metadata

    async def __call__(self, request: Request) -> None:
        recorded = getattr(request.state, ROUTER_DEFAULTS_ATTR, None)
        setattr(request.state, ROUTER_DEFAULTS_ATTR, merge_declarations(self.metadata, recorded))

    def __repr__(self) -> str:
        return f"RouterDeclaration({self.metadata.response_type.value})"


def router_standard_response(
    *,
    is_paginated: bool = False,
    min_limit: int | None = DEFAULT_MIN_LIMIT,
    max_limit: int | None = None,
    default_limit: int | None = FALLBACK_DEFAULT_LIMIT,
    is_sorted: bool = False,
    sortable_fields: Iterable[str] | None = None,
    is_filtered: bool = False,
    filterable_fields: Iterable[str] | None = None,
) -> params.Depends:
    """Router dependency declaring every route STANDARD with these features."""
    metadata = _standard_metadata(
        model=None,
        description=None,
        is_paginated=is_paginated,
        min_limit=min_limit,
        max_limit=max_limit,
        default_limit=default_limit,
        is_sorted=is_sorted,
        sortable_fields=sortable_fields,
        is_filtered=is_filtered,
        filterable_fields=filterable_fields,
    )
    return Depends(RouterDeclaration(metadata))


def router_raw_response() -> params.Depends:
    """Router dependency declaring every route RAW unless the route says otherwise."""
    return Depends(RouterDeclaration(RouteFeatureMetadata(response_type=ResponseType.RAW)))

