"""Parse ``sort=title,-year`` into an ordered list of SortOperation."""


import logging
from collections.abc import Mapping

from standard_response.core.constants import SORT_PARAM
from standard_response.core.exceptions import ValidationError
from standard_response.schemas.route import RouteFeatureMetadata
from standard_response.schemas.sorting import SortingInfo, SortingOrder, SortOperation

logger = logging.getLogger(__name__)

_PREFIX_ORDER = {"-": SortingOrder.DES, "+": SortingOrder.ASC}


def _parse_token(token: str) -> SortOperation:
    order = _PREFIX_ORDER.get(token[:1])
    if order is None:
        return SortOperation(field=token, order=SortingOrder.ASC)
    return SortOperation(field=token[1:], order=order)


def parse_sorting(
    query: Mapping[str, str], metadata: RouteFeatureMetadata | None = None
) -> SortingInfo:
    """Build the sorting descriptor; input order is kept as sort precedence."""
    sortable = metadata.sortable_fields if metadata else None
    info = SortingInfo(sortable_fields=list(sortable) if sortable is not None else None)

    raw = query.get(SORT_PARAM)
    if not raw:
        return info

    info.query = raw
    info.sort = [_parse_token(token) for token in raw.split(",")]

    if sortable is not None:
        requested = list(dict.fromkeys(op.field for op in info.sort))
        invalid = [field for field in requested if field not in sortable]
        if invalid:
            logger.debug("Rejected sorting fields %s", invalid)
            suffix = "s" if len(invalid) > 1 else ""
            raise ValidationError.for_field(
                SORT_PARAM, f"invalid sorting field{suffix}: {', '.join(invalid)}"
            )
    return info
