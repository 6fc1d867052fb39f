"""Shared fixtures: route declarations and a TestClient on the reference app."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from standard_response.core.constants import ResponseFeature
from standard_response.main import create_app
from standard_response.schemas.route import RouteFeatureMetadata


@pytest.fixture
def books_metadata() -> RouteFeatureMetadata:
    """Fully featured declaration used throughout the parser tests."""
    return RouteFeatureMetadata(
        features=frozenset(
            {ResponseFeature.PAGINATION, ResponseFeature.SORTING, ResponseFeature.FILTERING}
        ),
        min_limit=4,
        max_limit=22,
        default_limit=12,
        sortable_fields=("title", "author", "country", "year"),
        filterable_fields=("author", "year"),
    )


@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c
