"""Books router — REFERENCE pattern for standard-response routers.

Pattern:
  1. Declare the router with ``route_class=StandardResponseRoute``
  2. Declare each route's features with @standard_response or @raw_response
  3. Inject the request's StandardParams via ``StandardParamsDep``
  4. Apply the descriptors to the data source and report ``count`` back

The collection is an in-memory list; applying sort/filter descriptors to a
real data source is the caller's job.
"""

from __future__ import annotations

from fastapi import APIRouter

from standard_response.core.exceptions import NotFoundError
from standard_response.routing import (
    StandardParamsDep,
    StandardResponseRoute,
    raw_response,
    standard_response,
)
from standard_response.schemas.book import BookOut

router = APIRouter(prefix="/books", tags=["Books"], route_class=StandardResponseRoute)

BOOKS: list[BookOut] = [
    BookOut(id="1", title="Dom Casmurro", author="Machado de Assis", country="Brazil", year=1899),
    BookOut(id="2", title="The Leopard", author="Giuseppe Tomasi di Lampedusa", country="Italy", year=1958),
    BookOut(id="3", title="Effi Briest", author="Theodor Fontane", country="Germany", year=1895),
    BookOut(id="4", title="Pedro Paramo", author="Juan Rulfo", country="Mexico", year=1955),
    BookOut(id="5", title="The Master and Margarita", author="Mikhail Bulgakov", country="Russia", year=1967),
    BookOut(id="6", title="Things Fall Apart", author="Chinua Achebe", country="Nigeria", year=1958),
]


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("")
@standard_response(
    model=[BookOut],
    description="List books",
    is_paginated=True,
    min_limit=1,
    max_limit=50,
    default_limit=5,
    is_sorted=True,
    sortable_fields=["title", "author", "country", "year"],
    is_filtered=True,
    filterable_fields=["author", "country", "year"],
)
async def list_books(params: StandardParamsDep) -> list[BookOut]:
    """List books. Supports ?limit, ?offset, ?sort and ?filter."""
    pagination = params.pagination_info
    params.set_pagination_info(count=len(BOOKS))
    return BOOKS[pagination.offset:pagination.offset + pagination.limit]


@router.get("/titles")
@raw_response(model=[str], description="Plain list of titles")
async def list_titles() -> list[str]:
    return [book.title for book in BOOKS]


@router.get("/{book_id}")
async def get_book(book_id: str) -> BookOut:
    for book in BOOKS:
        if book.id == book_id:
            return book
    raise NotFoundError("Book", book_id)
