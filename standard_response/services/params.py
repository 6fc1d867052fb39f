"""Per-request descriptors that handler code may amend."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from standard_response.core.constants import ResponseFeature
from standard_response.schemas.filtering import FilteringInfo
from standard_response.schemas.pagination import PaginationInfo
from standard_response.schemas.route import RouteFeatureMetadata
from standard_response.schemas.sorting import SortingInfo
from standard_response.services.filtering import parse_filtering
from standard_response.services.pagination import parse_pagination
from standard_response.services.sorting import parse_sorting

SETTABLE_PAGINATION_FIELDS = frozenset({"count", "limit", "offset"})
SETTABLE_SORTING_FIELDS = frozenset({"sort"})
SETTABLE_FILTERING_FIELDS = frozenset({"filter"})


def _merge(target: BaseModel, allowed: frozenset[str], changes: dict[str, Any]) -> None:
    unknown = sorted(set(changes) - allowed)
    if unknown:
        raise TypeError(
            f"cannot set {', '.join(unknown)} on {type(target).__name__}; "
            f"settable fields: {', '.join(sorted(allowed))}"
        )
    for key, value in changes.items():
        setattr(target, key, value)


class StandardParams:
    """Descriptors parsed for a single request.

    A fresh instance is built for every request, so ``count`` and ``message``
    never carry over from an earlier request to the same route. All three
    setters are always available; descriptors of features the route did not
    enable are simply never read by the envelope assembler.
    """

    def __init__(
        self,
        pagination_info: PaginationInfo,
        sorting_info: SortingInfo,
        filtering_info: FilteringInfo,
    ):
        self.pagination_info = pagination_info
        self.sorting_info = sorting_info
        self.filtering_info = filtering_info
        self.message: str | None = None

    def set_pagination_info(self, **changes: Any) -> None:
        """Merge ``count``, ``limit`` or ``offset`` into the pagination descriptor."""
        _merge(self.pagination_info, SETTABLE_PAGINATION_FIELDS, changes)

    def set_sorting_info(self, **changes: Any) -> None:
        _merge(self.sorting_info, SETTABLE_SORTING_FIELDS, changes)

    def set_filtering_info(self, **changes: Any) -> None:
        _merge(self.filtering_info, SETTABLE_FILTERING_FIELDS, changes)

    def set_message(self, message: str | None) -> None:
        self.message = message


def build_standard_params(
    query: Mapping[str, str], metadata: RouteFeatureMetadata | None = None
) -> StandardParams:
    """Parse the query for every feature the route enables.

    Disabled features get an empty descriptor (default limit, offset 0, no
    sort, no filter) without looking at the query, so a stray ``sort`` on an
    unsorted route is ignored rather than rejected.
    """
    empty: Mapping[str, str] = {}

    def source(feature: ResponseFeature) -> Mapping[str, str]:
        return query if metadata is not None and metadata.has_feature(feature) else empty

    return StandardParams(
        pagination_info=parse_pagination(source(ResponseFeature.PAGINATION), metadata),
        sorting_info=parse_sorting(source(ResponseFeature.SORTING), metadata),
        filtering_info=parse_filtering(source(ResponseFeature.FILTERING), metadata),
    )
