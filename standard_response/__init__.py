"""Standard response envelope with pagination, sorting and filtering for FastAPI."""

from standard_response.core.constants import ResponseFeature, ResponseType
from standard_response.core.exceptions import AppException, BadGatewayError, ValidationError
from standard_response.routing import (
    StandardParamsDep,
    StandardResponseRoute,
    adopt_routes,
    raw_response,
    router_raw_response,
    router_standard_response,
    setup_standard_response,
    standard_params,
    standard_response,
)
from standard_response.schemas import (
    FilterGroup,
    FilteringInfo,
    FilterOperation,
    PaginationInfo,
    RouteFeatureMetadata,
    SortingInfo,
    SortingOrder,
    SortOperation,
    StandardResponse,
)
from standard_response.services.interceptor import StandardResponseInterceptor
from standard_response.services.params import StandardParams
from standard_response.services.registry import RouteMetadataRegistry, route_registry

__all__ = [
    "AppException",
    "BadGatewayError",
    "FilterGroup",
    "FilterOperation",
    "FilteringInfo",
    "PaginationInfo",
    "ResponseFeature",
    "ResponseType",
    "RouteFeatureMetadata",
    "RouteMetadataRegistry",
    "SortOperation",
    "SortingInfo",
    "SortingOrder",
    "StandardParams",
    "StandardParamsDep",
    "StandardResponse",
    "StandardResponseInterceptor",
    "StandardResponseRoute",
    "ValidationError",
    "adopt_routes",
    "raw_response",
    "route_registry",
    "router_raw_response",
    "router_standard_response",
    "setup_standard_response",
    "standard_params",
    "standard_response",
]
