"""Pydantic schemas package.

Folder intent:
  common.py      — CamelModel base (camelCase aliases) + WireModel (omits absent fields)
  pagination.py  — PaginationInfo descriptor and the PaginationQuery validator
  sorting.py     — SortingInfo descriptor, SortOperation, SortingOrder
  filtering.py   — FilteringInfo descriptor, FilterGroup, FilterOperation
  envelope.py    — StandardResponse envelope wrapped around handler output
  route.py       — RouteFeatureMetadata declared once per route
  book.py        — schemas for the reference /api/v1/books router
"""

from standard_response.schemas.envelope import StandardResponse
from standard_response.schemas.filtering import FilterGroup, FilteringInfo, FilterOperation
from standard_response.schemas.pagination import PaginationInfo
from standard_response.schemas.route import RouteFeatureMetadata
from standard_response.schemas.sorting import SortingInfo, SortingOrder, SortOperation

__all__ = [
    "FilterGroup",
    "FilterOperation",
    "FilteringInfo",
    "PaginationInfo",
    "RouteFeatureMetadata",
    "SortOperation",
    "SortingInfo",
    "SortingOrder",
    "StandardResponse",
]
