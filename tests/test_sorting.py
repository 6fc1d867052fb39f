"""Tests for the sort expression parser."""

from __future__ import annotations

import pytest

from standard_response.core.exceptions import ValidationError
from standard_response.schemas.sorting import SortingOrder
from standard_response.services.sorting import parse_sorting


def test_sort_preserves_order_and_direction(books_metadata) -> None:
    info = parse_sorting({"sort": "title,-year"}, books_metadata)
    assert info.query == "title,-year"
    assert [(op.field, op.order) for op in info.sort] == [
        ("title", SortingOrder.ASC),
        ("year", SortingOrder.DES),
    ]


def test_plus_prefix_is_ascending(books_metadata) -> None:
    info = parse_sorting({"sort": "+author,-country"}, books_metadata)
    assert info.sort[0].field == "author"
    assert info.sort[0].order is SortingOrder.ASC
    assert info.sort[1].order is SortingOrder.DES


def test_absent_sort(books_metadata) -> None:
    info = parse_sorting({}, books_metadata)
    assert info.sort is None
    assert info.query is None
    assert info.sortable_fields == ["title", "author", "country", "year"]


def test_unknown_field_is_rejected(books_metadata) -> None:
    with pytest.raises(ValidationError) as exc_info:
        parse_sorting({"sort": "title,pages"}, books_metadata)
    assert exc_info.value.errors == [{"field": "sort", "error": "invalid sorting field: pages"}]


def test_all_unknown_fields_reported_once(books_metadata) -> None:
    with pytest.raises(ValidationError) as exc_info:
        parse_sorting({"sort": "pages,-isbn,+pages"}, books_metadata)
    assert exc_info.value.message == "invalid sorting fields: pages, isbn"


def test_no_allow_list_accepts_any_field() -> None:
    info = parse_sorting({"sort": "-anything"})
    assert info.sort[0].field == "anything"
    assert info.sortable_fields is None


def test_wire_values() -> None:
    info = parse_sorting({"sort": "-year"})
    assert info.model_dump(mode="json", by_alias=True) == {
        "query": "-year",
        "sort": [{"field": "year", "order": "des"}],
    }
