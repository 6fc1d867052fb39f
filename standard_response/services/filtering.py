"""Parse ``filter`` expressions into a FilteringInfo tree.

Grammar::

    expr     := group (';' group)*        ; AND
    group    := clause (',' clause)*      ; OR
    clause   := field operator value
    operator := <= | < | >= | > | == | != | =@ | !@ | =^ | =$

Operators are located by scanning the clause left to right and, at each
position, trying the two-character tokens before the one-character ones, so
``<=`` is never read as ``<`` followed by a value starting with ``=``.
"""


import logging
from collections.abc import Mapping

from standard_response.core.constants import FILTER_PARAM
from standard_response.core.exceptions import ValidationError
from standard_response.schemas.filtering import FilterGroup, FilteringInfo, FilterOperation
from standard_response.schemas.route import RouteFeatureMetadata

logger = logging.getLogger(__name__)

AND_SEPARATOR = ";"
OR_SEPARATOR = ","

SUPPORTED_OPERATORS: tuple[str, ...] = (
    "<=", ">=", "==", "!=", "=@", "!@", "=^", "=$", "<", ">",
)
# Reserved in the grammar but without defined semantics; rejected explicitly.
RESERVED_OPERATORS: tuple[str, ...] = ("=~", "!~")

_SCAN_ORDER = sorted(SUPPORTED_OPERATORS + RESERVED_OPERATORS, key=len, reverse=True)


def find_operator(clause: str) -> tuple[int, str] | None:
    """Return ``(index, operator)`` of the leftmost operator in ``clause``."""
    for index in range(len(clause)):
        for operator in _SCAN_ORDER:
            if clause.startswith(operator, index):
                return index, operator
    return None


def parse_clause(clause: str) -> FilterOperation:
    found = find_operator(clause)
    if found is None:
        logger.debug("Rejected filter clause without operator: %r", clause)
        raise ValidationError.for_field(
            FILTER_PARAM, f"invalid filtering expression: {clause}"
        )
    index, operator = found
    if operator in RESERVED_OPERATORS:
        raise ValidationError.for_field(
            FILTER_PARAM, f"unsupported filtering operator {operator} in expression: {clause}"
        )
    return FilterOperation(
        field=clause[:index],
        operation=operator,
        value=clause[index + len(operator):],
    )


def parse_filter_expression(raw: str) -> FilterGroup:
    return FilterGroup(
        all_of=[
            FilterGroup(any_of=[parse_clause(clause) for clause in group.split(OR_SEPARATOR)])
            for group in raw.split(AND_SEPARATOR)
        ]
    )


def referenced_fields(group: FilterGroup) -> list[str]:
    """Distinct field names in first-seen order."""
    fields: list[str] = []
    for child in group.all_of or []:
        fields.extend(referenced_fields(child))
    for clause in group.any_of or []:
        fields.append(clause.field)
    return list(dict.fromkeys(fields))


def parse_filtering(
    query: Mapping[str, str], metadata: RouteFeatureMetadata | None = None
) -> FilteringInfo:
    filterable = metadata.filterable_fields if metadata else None
    info = FilteringInfo(
        filterable_fields=list(filterable) if filterable is not None else None
    )

    raw = query.get(FILTER_PARAM)
    if not raw:
        return info

    info.query = raw
    info.filter = parse_filter_expression(raw)

    if filterable is not None:
        invalid = [field for field in referenced_fields(info.filter) if field not in filterable]
        if invalid:
            logger.debug("Rejected filtering fields %s", invalid)
            suffix = "s" if len(invalid) > 1 else ""
            raise ValidationError.for_field(
                FILTER_PARAM, f"invalid filtering field{suffix}: {', '.join(invalid)}"
            )
    return info
