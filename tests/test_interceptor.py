"""Tests for the framework-independent interceptor pipeline."""

from __future__ import annotations

import pytest

from standard_response.core.config import settings
from standard_response.core.constants import ResponseFeature, ResponseType
from standard_response.core.exceptions import BadGatewayError, NotFoundError, ValidationError
from standard_response.schemas.envelope import StandardResponse
from standard_response.schemas.route import RouteFeatureMetadata
from standard_response.services.interceptor import StandardResponseInterceptor
from standard_response.services.registry import RouteMetadataRegistry

RAW = RouteFeatureMetadata(response_type=ResponseType.RAW)
PAGINATED = RouteFeatureMetadata(
    features=frozenset({ResponseFeature.PAGINATION}), default_limit=10, max_limit=20
)


def _returning(value):
    calls = []

    async def call_next():
        calls.append(True)
        return value

    return call_next, calls


@pytest.fixture
def interceptor() -> StandardResponseInterceptor:
    return StandardResponseInterceptor(intercept_all=True, registry=RouteMetadataRegistry())


@pytest.mark.asyncio
async def test_raw_result_is_returned_as_is(interceptor) -> None:
    payload = {"plain": True}
    call_next, _ = _returning(payload)
    assert await interceptor.intercept(RAW, {}, call_next) is payload


@pytest.mark.asyncio
async def test_undeclared_route_is_wrapped(interceptor) -> None:
    call_next, _ = _returning({"id": 1})
    result = await interceptor.intercept(None, {"limit": "0"}, call_next)
    assert isinstance(result, StandardResponse)
    assert result.model_dump(by_alias=True) == {"success": True, "data": {"id": 1}}


@pytest.mark.asyncio
async def test_undeclared_route_untouched_without_intercept_all() -> None:
    interceptor = StandardResponseInterceptor(intercept_all=False, registry=RouteMetadataRegistry())
    payload = [1, 2]
    call_next, calls = _returning(payload)
    assert await interceptor.intercept(None, {}, call_next) is payload
    assert calls == [True]


@pytest.mark.asyncio
async def test_declared_route_wrapped_without_intercept_all() -> None:
    interceptor = StandardResponseInterceptor(intercept_all=False, registry=RouteMetadataRegistry())
    call_next, _ = _returning([1])
    result = await interceptor.intercept(PAGINATED, {}, call_next)
    assert result.is_paginated is True


@pytest.mark.asyncio
async def test_only_enabled_descriptors_are_included(interceptor) -> None:
    call_next, _ = _returning(["a", "b"])
    result = await interceptor.intercept(PAGINATED, {"limit": "2", "sort": "x"}, call_next)
    dumped = result.model_dump(by_alias=True)
    assert dumped["isArray"] is True
    assert dumped["pagination"]["query"] == "limit=2"
    assert "sorting" not in dumped
    assert "isSorted" not in dumped


@pytest.mark.asyncio
async def test_handler_changes_reach_the_envelope(interceptor) -> None:
    params = interceptor.prepare(PAGINATED, {"limit": "5"})

    async def call_next():
        params.set_pagination_info(count=42)
        params.set_message("partial")
        return [1, 2, 3, 4, 5]

    result = await interceptor.intercept(PAGINATED, {}, call_next, params=params)
    assert result.pagination.count == 42
    assert result.message == "partial"


@pytest.mark.asyncio
async def test_rejected_query_stops_before_handler(interceptor) -> None:
    call_next, calls = _returning([])
    with pytest.raises(ValidationError) as exc_info:
        await interceptor.intercept(PAGINATED, {"limit": "21"}, call_next)
    assert exc_info.value.message == "limit can't be larger than 20"
    assert calls == []


@pytest.mark.asyncio
async def test_error_results_pass_through() -> None:
    interceptor = StandardResponseInterceptor(
        intercept_all=True, validate_response=lambda item: False, registry=RouteMetadataRegistry()
    )
    error = NotFoundError("Book")
    call_next, _ = _returning(error)
    assert await interceptor.intercept(PAGINATED, {}, call_next) is error


@pytest.mark.asyncio
async def test_failed_validation_becomes_bad_gateway() -> None:
    interceptor = StandardResponseInterceptor(
        intercept_all=True,
        validate_response=lambda item: "password" not in item,
        registry=RouteMetadataRegistry(),
    )
    call_next, _ = _returning([{"name": "a"}, {"name": "b", "password": "x"}])
    result = await interceptor.intercept(PAGINATED, {}, call_next)
    assert isinstance(result, BadGatewayError)
    assert result.status_code == 502


@pytest.mark.asyncio
async def test_validation_runs_on_raw_routes() -> None:
    interceptor = StandardResponseInterceptor(
        intercept_all=True, validate_response=lambda item: False, registry=RouteMetadataRegistry()
    )
    call_next, _ = _returning("raw")
    assert isinstance(await interceptor.intercept(RAW, {}, call_next), BadGatewayError)


def test_passthrough_types() -> None:
    class Final:
        pass

    interceptor = StandardResponseInterceptor(
        intercept_all=True, registry=RouteMetadataRegistry(), passthrough_types=(Final,)
    )
    result = Final()
    assert interceptor.transform(result, None) is result


def test_defaults_come_from_settings(monkeypatch) -> None:
    monkeypatch.setattr(settings, "intercept_all", False)
    monkeypatch.setattr(settings, "validation_error_message", "custom")
    interceptor = StandardResponseInterceptor()
    assert interceptor.intercept_all is False
    assert interceptor.validator.message == "custom"
