"""Parse the query, run the handler, validate the result and wrap it.

Per request the interceptor ends in one of two transforms, chosen by the
route's declared response type:

* RAW: the handler result is returned as is.
* STANDARD: the result becomes ``StandardResponse.data`` and the envelope
  carries the descriptors of the features the route enabled.

Routes with no declaration are treated as STANDARD when ``intercept_all`` is
on and are not touched at all otherwise. Error values returned by a handler
skip both validation and wrapping.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from standard_response.core.config import settings
from standard_response.core.constants import ResponseFeature
from standard_response.core.exceptions import BadGatewayError
from standard_response.schemas.envelope import StandardResponse
from standard_response.schemas.route import RouteFeatureMetadata
from standard_response.services.params import StandardParams, build_standard_params
from standard_response.services.registry import (
    RouteMetadataRegistry,
    merge_declarations,
    route_registry,
)
from standard_response.services.validator import ResponseValidator

logger = logging.getLogger(__name__)

_UNDECLARED = RouteFeatureMetadata()


class StandardResponseInterceptor:
    def __init__(
        self,
        *,
        intercept_all: bool | None = None,
        validate_response: Any = None,
        validation_error_message: str | None = None,
        registry: RouteMetadataRegistry | None = None,
        passthrough_types: tuple[type, ...] = (),
    ):
        """
        Args:
            intercept_all: Wrap routes that carry no declaration. Defaults to
                ``settings.intercept_all``.
            validate_response: Predicate applied to every outgoing item.
            validation_error_message: Logged when ``validate_response`` fails.
            registry: Where route declarations are looked up.
            passthrough_types: Result types returned untouched in addition to
                exceptions (e.g. framework response objects).
        """
        self.intercept_all = settings.intercept_all if intercept_all is None else intercept_all
        self.validator = ResponseValidator(
            validate_response,
            validation_error_message or settings.validation_error_message,
        )
        self.registry = registry if registry is not None else route_registry
        self._passthrough_types = (BaseException, *passthrough_types)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def metadata_for(
        self,
        endpoint: Callable[..., Any],
        defaults: RouteFeatureMetadata | None = None,
    ) -> RouteFeatureMetadata | None:
        """Declaration of ``endpoint`` merged over its router's ``defaults``."""
        return merge_declarations(self.registry.get(endpoint), defaults)

    def should_intercept(self, metadata: RouteFeatureMetadata | None) -> bool:
        return metadata is not None or self.intercept_all

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    def prepare(
        self, metadata: RouteFeatureMetadata | None, query: Mapping[str, str]
    ) -> StandardParams:
        """Pre-handler phase. Raises ValidationError on rejected query input."""
        return build_standard_params(query, metadata)

    def transform(
        self,
        result: Any,
        metadata: RouteFeatureMetadata | None,
        params: StandardParams | None = None,
    ) -> Any:
        """Post-handler phase: returns the envelope, the untouched result, or a BadGatewayError."""
        if isinstance(result, self._passthrough_types):
            return result
        if not self.should_intercept(metadata):
            return result
        if not self.validator.is_valid(result):
            return BadGatewayError()

        declared = metadata or _UNDECLARED
        if declared.is_raw:
            return result
        return self.assemble(result, declared, params)

    def assemble(
        self,
        data: Any,
        metadata: RouteFeatureMetadata,
        params: StandardParams | None,
    ) -> StandardResponse[Any]:
        fields: dict[str, Any] = {}
        if params is not None:
            fields["message"] = params.message
            if metadata.has_feature(ResponseFeature.PAGINATION):
                fields["pagination"] = params.pagination_info
            if metadata.has_feature(ResponseFeature.SORTING):
                fields["sorting"] = params.sorting_info
            if metadata.has_feature(ResponseFeature.FILTERING):
                fields["filtering"] = params.filtering_info
        return StandardResponse[Any](data=data, **fields)

    async def intercept(
        self,
        metadata: RouteFeatureMetadata | None,
        query: Mapping[str, str],
        call_next: Callable[[], Awaitable[Any]],
        *,
        params: StandardParams | None = None,
    ) -> Any:
        """Run the whole pipeline around ``call_next`` for one request.

        ``params`` is reused when the host already parsed the query for this
        request (e.g. through a dependency); otherwise the query is parsed
        here, before ``call_next`` is awaited.
        """
        if not self.should_intercept(metadata):
            return await call_next()
        if params is None:
            params = self.prepare(metadata, query)
        result = await call_next()
        return self.transform(result, metadata, params)
