"""Shared Pydantic schema bases with camelCase aliases."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, SerializerFunctionWrapHandler, model_serializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """All API schemas inherit from this to auto-generate camelCase aliases."""

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }


class WireModel(CamelModel):
    """CamelModel whose unset optional fields are left out of the payload.

    ``None`` means "absent" on these models, so it is dropped on dump instead
    of being rendered as ``null``. Names listed in ``always_emit`` are always
    emitted.
    """

    always_emit: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        dumped = handler(self)
        return {
            key: value
            for key, value in dumped.items()
            if value is not None or key in self.always_emit
        }


class HealthResponse(BaseModel):
    """Health-check response returned by /health."""
    status: str = "ok"
    app: str
    env: str
