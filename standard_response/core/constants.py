"""Response types, feature flags and fixed messages shared across the package."""

from enum import Enum


class ResponseType(str, Enum):
    STANDARD = "standard"
    RAW = "raw"


class ResponseFeature(str, Enum):
    PAGINATION = "pagination"
    SORTING = "sorting"
    FILTERING = "filtering"


# Query-string parameter names
LIMIT_PARAM = "limit"
OFFSET_PARAM = "offset"
SORT_PARAM = "sort"
FILTER_PARAM = "filter"

# Used when a route declares pagination without a default limit, or when
# pagination is parsed for an undeclared route.
FALLBACK_DEFAULT_LIMIT = 10
DEFAULT_MIN_LIMIT = 1

DEFAULT_VALIDATION_ERROR_MESSAGE = (
    "Validation failed for your return value. Did you accidentally return a "
    "document directly from your ORM instead of building a DTO or similar class? "
    "This can lead to potential data leaks."
)
