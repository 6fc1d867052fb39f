"""Standard JSON response envelope."""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from pydantic import model_validator

from standard_response.schemas.common import WireModel
from standard_response.schemas.filtering import FilteringInfo
from standard_response.schemas.pagination import PaginationInfo
from standard_response.schemas.sorting import SortingInfo

T = TypeVar("T")


def is_sequence(data: Any) -> bool:
    """True for list-like payloads; strings, bytes and mappings are scalars here."""
    return isinstance(data, (list, tuple))


class StandardResponse(WireModel, Generic[T]):
    """Envelope: ``{ success, isArray?, isPaginated?, ..., message?, data }``.

    The ``is*`` flags are derived from the other fields and only emitted
    when true.
    """

    always_emit: ClassVar[frozenset[str]] = frozenset({"data"})

    success: bool = True
    is_array: bool | None = None
    is_paginated: bool | None = None
    is_sorted: bool | None = None
    is_filtered: bool | None = None
    message: str | None = None
    pagination: PaginationInfo | None = None
    sorting: SortingInfo | None = None
    filtering: FilteringInfo | None = None
    data: T

    @model_validator(mode="after")
    def _derive_flags(self) -> StandardResponse[T]:
        self.is_array = True if is_sequence(self.data) else None
        self.is_paginated = True if self.pagination is not None else None
        self.is_sorted = True if self.sorting is not None else None
        self.is_filtered = True if self.filtering is not None else None
        return self
