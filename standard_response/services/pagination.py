"""Parse ``limit``/``offset`` query values into a PaginationInfo."""


import logging
import re
from collections.abc import Mapping

from pydantic import ValidationError as PydanticValidationError

from standard_response.core.constants import FALLBACK_DEFAULT_LIMIT, LIMIT_PARAM, OFFSET_PARAM
from standard_response.core.exceptions import ValidationError
from standard_response.schemas.pagination import PaginationInfo, PaginationQuery
from standard_response.schemas.route import RouteFeatureMetadata

logger = logging.getLogger(__name__)

# ASCII digits only: int() also takes "1_0", padding and other scripts.
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

_ERROR_MESSAGES = {
    LIMIT_PARAM: "limit must be a positive number",
    OFFSET_PARAM: "offset must not be less than 0",
}


def _to_int(raw: str | None) -> int | None:
    if raw is None or not _INT_PATTERN.fullmatch(raw):
        return None
    return int(raw)


def _canonical_query(raw_limit: str | None, raw_offset: str | None) -> str | None:
    parts = []
    if raw_limit is not None:
        parts.append(f"{LIMIT_PARAM}={raw_limit}")
    if raw_offset is not None:
        parts.append(f"{OFFSET_PARAM}={raw_offset}")
    return "&".join(parts) if parts else None


def _validate(limit: int, offset: int) -> PaginationQuery:
    try:
        return PaginationQuery(limit=limit, offset=offset)
    except PydanticValidationError as exc:
        invalid = []
        for err in exc.errors():
            field = str(err["loc"][0])
            if field not in invalid:
                invalid.append(field)
        raise ValidationError(
            [{"field": field, "error": _ERROR_MESSAGES[field]} for field in invalid]
        ) from exc


def parse_pagination(
    query: Mapping[str, str], metadata: RouteFeatureMetadata | None = None
) -> PaginationInfo:
    """Build the pagination descriptor for one request.

    Missing or non-numeric values fall back to offset 0 and the route's
    default limit. Declared min/max bounds are checked only against values the
    client actually supplied.
    """
    raw_limit = query.get(LIMIT_PARAM)
    raw_offset = query.get(OFFSET_PARAM)

    limit = _to_int(raw_limit)
    if limit is None:
        limit = (metadata.default_limit if metadata else None) or FALLBACK_DEFAULT_LIMIT
    offset = _to_int(raw_offset)
    if offset is None:
        offset = 0

    validated = _validate(limit, offset)

    info = PaginationInfo(
        limit=validated.limit,
        offset=validated.offset,
        query=_canonical_query(raw_limit, raw_offset),
        min_limit=metadata.min_limit if metadata else None,
        max_limit=metadata.max_limit if metadata else None,
        default_limit=metadata.default_limit if metadata else None,
    )
    if info.query is None or metadata is None:
        return info

    if metadata.min_limit and info.limit < metadata.min_limit:
        logger.debug("Rejected limit %s below minimum %s", info.limit, metadata.min_limit)
        raise ValidationError.for_field(
            LIMIT_PARAM, f"limit can't be smaller than {metadata.min_limit}"
        )
    if metadata.max_limit and info.limit > metadata.max_limit:
        logger.debug("Rejected limit %s above maximum %s", info.limit, metadata.max_limit)
        raise ValidationError.for_field(
            LIMIT_PARAM, f"limit can't be larger than {metadata.max_limit}"
        )
    return info
