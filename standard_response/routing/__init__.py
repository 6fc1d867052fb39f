"""FastAPI glue — declarations, endpoint wrapping and parameter injection.

Files:
  decorators.py  — @standard_response / @raw_response route declarations, router-level defaults
  route.py       — StandardResponseRoute, route adoption, standard_params dependency, setup_standard_response

Usage:
    router = APIRouter(prefix="/books", route_class=StandardResponseRoute)

    @router.get("")
    @standard_response(is_paginated=True, max_limit=50)
    async def list_books(params: StandardParamsDep): ...
"""

from standard_response.routing.decorators import (
    raw_response,
    router_raw_response,
    router_standard_response,
    standard_response,
)
from standard_response.routing.route import (
    StandardParamsDep,
    StandardResponseRoute,
    adopt_routes,
    get_interceptor,
    setup_standard_response,
    standard_params,
)

__all__ = [
    "StandardParamsDep",
    "StandardResponseRoute",
    "adopt_routes",
    "get_interceptor",
    "raw_response",
    "router_raw_response",
    "router_standard_response",
    "setup_standard_response",
    "standard_params",
    "standard_response",
]
