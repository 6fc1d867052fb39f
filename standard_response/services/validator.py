"""Optional predicate gate run over outgoing data."""

from __future__ import annotations

import logging
from typing import Any

from standard_response.core.constants import DEFAULT_VALIDATION_ERROR_MESSAGE
from standard_response.schemas.envelope import is_sequence

logger = logging.getLogger(__name__)


class ResponseValidator:
    """Applies ``predicate`` to each item of a sequence, or once to a scalar.

    With no predicate everything passes. A configured predicate that is not
    callable fails every response, and so does a predicate that raises.
    Failures log ``message`` at ERROR; callers only ever see a generic
    upstream error.
    """

    def __init__(
        self,
        predicate: Any = None,
        message: str = DEFAULT_VALIDATION_ERROR_MESSAGE,
    ):
        self.predicate = predicate
        self.message = message

    @property
    def enabled(self) -> bool:
        return self.predicate is not None

    def is_valid(self, data: Any) -> bool:
        if self.predicate is None:
            return True
        if not callable(self.predicate):
            logger.error("%s (validate_response is not callable)", self.message)
            return False
        items = data if is_sequence(data) else (data,)
        try:
            passed = all(self.predicate(item) for item in items)
        except Exception:
            logger.exception(self.message)
            return False
        if passed:
            return True
        logger.error(self.message)
        return False
