"""Tests for per-request StandardParams."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from standard_response.core.constants import ResponseFeature
from standard_response.schemas.route import RouteFeatureMetadata
from standard_response.schemas.sorting import SortOperation, SortingOrder
from standard_response.services.params import build_standard_params


def test_all_enabled_features_are_parsed(books_metadata) -> None:
    params = build_standard_params(
        {"limit": "8", "offset": "16", "sort": "-year", "filter": "author==John"},
        books_metadata,
    )
    assert params.pagination_info.limit == 8
    assert params.sorting_info.sort[0].field == "year"
    assert params.filtering_info.query == "author==John"
    assert params.message is None


def test_set_pagination_count(books_metadata) -> None:
    params = build_standard_params({}, books_metadata)
    params.set_pagination_info(count=330)
    assert params.pagination_info.count == 330
    assert params.pagination_info.limit == 12


def test_set_sorting_validates_items(books_metadata) -> None:
    params = build_standard_params({}, books_metadata)
    params.set_sorting_info(sort=[{"field": "year", "order": "des"}])
    assert params.sorting_info.sort == [SortOperation(field="year", order=SortingOrder.DES)]


def test_set_rejects_bad_types(books_metadata) -> None:
    params = build_standard_params({}, books_metadata)
    with pytest.raises(PydanticValidationError):
        params.set_pagination_info(count="many")


def test_set_rejects_unknown_keys(books_metadata) -> None:
    params = build_standard_params({}, books_metadata)
    with pytest.raises(TypeError, match="page"):
        params.set_pagination_info(page=2)
    with pytest.raises(TypeError):
        params.set_sorting_info(sortable_fields=["x"])
    with pytest.raises(TypeError):
        params.set_filtering_info(query="x==1")


def test_set_message(books_metadata) -> None:
    params = build_standard_params({}, books_metadata)
    params.set_message("hello")
    assert params.message == "hello"
    params.set_message(None)
    assert params.message is None


def test_requests_do_not_share_state(books_metadata) -> None:
    first = build_standard_params({"limit": "5"}, books_metadata)
    first.set_pagination_info(count=99)
    first.set_message("first")

    second = build_standard_params({"limit": "5"}, books_metadata)
    assert second.pagination_info.count is None
    assert second.message is None


def test_disabled_features_ignore_the_query() -> None:
    metadata = RouteFeatureMetadata(features=frozenset({ResponseFeature.SORTING}))
    params = build_standard_params(
        {"limit": "-1", "sort": "title", "filter": "nonsense"}, metadata
    )
    assert params.sorting_info.query == "title"
    assert params.pagination_info.limit == 10
    assert params.pagination_info.query is None
    assert params.filtering_info.filter is None


def test_undeclared_route_gets_empty_descriptors() -> None:
    params = build_standard_params({"limit": "0", "sort": "-x"})
    assert params.pagination_info.limit == 10
    assert params.sorting_info.sort is None
