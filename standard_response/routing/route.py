"""Runs every endpoint through the standard response interceptor."""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.dependencies.utils import get_typed_return_annotation, get_typed_signature
from fastapi.routing import APIRoute, APIRouter
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

from standard_response.routing.decorators import ROUTER_DEFAULTS_ATTR
from standard_response.schemas.route import RouteFeatureMetadata
from standard_response.services.interceptor import StandardResponseInterceptor
from standard_response.services.params import StandardParams

logger = logging.getLogger(__name__)

_INTERCEPTOR_ATTR = "standard_response_interceptor"
_PARAMS_ATTR = "standard_params"
_REQUEST_PARAM = "standard_response_request"
_ENDPOINT_ATTR = "__standard_response_endpoint__"


def build_interceptor(**options: Any) -> StandardResponseInterceptor:
    # Starlette responses returned by a handler are already final.
    return StandardResponseInterceptor(passthrough_types=(Response,), **options)


default_interceptor = build_interceptor()


def get_interceptor(app: FastAPI) -> StandardResponseInterceptor:
    """Interceptor configured by :func:`setup_standard_response`, else the settings-based default."""
    return getattr(app.state, _INTERCEPTOR_ATTR, None) or default_interceptor


def original_endpoint(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    return getattr(endpoint, _ENDPOINT_ATTR, endpoint)


def route_metadata(request: Request) -> RouteFeatureMetadata | None:
    """Declaration of the matched route, merged over its router's defaults."""
    endpoint = request.scope.get("endpoint")
    if endpoint is None:
        return None
    defaults = getattr(request.state, ROUTER_DEFAULTS_ATTR, None)
    return get_interceptor(request.app).metadata_for(original_endpoint(endpoint), defaults)


# ---------------------------------------------------------------------------
# Request-scoped parameters
# ---------------------------------------------------------------------------

async def standard_params(request: Request) -> StandardParams:
    """FastAPI dependency: the request's StandardParams, parsed once and kept on ``request.state``."""
    params = getattr(request.state, _PARAMS_ATTR, None)
    if params is None:
        interceptor = get_interceptor(request.app)
        params = interceptor.prepare(route_metadata(request), request.query_params)
        setattr(request.state, _PARAMS_ATTR, params)
    return params


StandardParamsDep = Annotated[StandardParams, Depends(standard_params)]


# ---------------------------------------------------------------------------
# Endpoint wrapping
# ---------------------------------------------------------------------------

def _is_request_annotation(annotation: Any) -> bool:
    return inspect.isclass(annotation) and issubclass(annotation, Request)


def _with_request_parameter(signature: inspect.Signature) -> tuple[inspect.Signature, str | None]:
    """Return the signature FastAPI should see and the endpoint's own Request parameter, if any."""
    parameters = list(signature.parameters.values())
    for parameter in parameters:
        if _is_request_annotation(parameter.annotation):
            return signature, parameter.name

    extra = inspect.Parameter(_REQUEST_PARAM, inspect.Parameter.KEYWORD_ONLY, annotation=Request)
    index = next(
        (i for i, p in enumerate(parameters) if p.kind is inspect.Parameter.VAR_KEYWORD),
        len(parameters),
    )
    parameters.insert(index, extra)
    return signature.replace(parameters=parameters), None


def wrap_endpoint(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap ``endpoint`` so its result goes through the interceptor. Idempotent."""
    if hasattr(endpoint, _ENDPOINT_ATTR):
        return endpoint

    signature, request_param = _with_request_parameter(get_typed_signature(endpoint))
    is_async = inspect.iscoroutinefunction(endpoint)

    async def wrapper(**kwargs: Any) -> Any:
        request: Request = kwargs[request_param] if request_param else kwargs.pop(_REQUEST_PARAM)
        interceptor = get_interceptor(request.app)
        metadata = route_metadata(request)

        async def call_next() -> Any:
            if is_async:
                return await endpoint(**kwargs)
            return await run_in_threadpool(endpoint, **kwargs)

        result = await interceptor.intercept(
            metadata,
            request.query_params,
            call_next,
            params=getattr(request.state, _PARAMS_ATTR, None),
        )
        if isinstance(result, Exception):
            raise result
        return result

    # The endpoint's return annotation must not become the route's
    # response_model: the wrapper returns the envelope.
    functools.update_wrapper(
        wrapper, endpoint, assigned=("__module__", "__name__", "__qualname__", "__doc__"), updated=()
    )
    # FastAPI follows __wrapped__ when deciding between threadpool and await;
    # the wrapper must always be awaited.
    del wrapper.__wrapped__
    wrapper.__signature__ = signature  # type: ignore[attr-defined]
    setattr(wrapper, _ENDPOINT_ATTR, endpoint)
    return wrapper


class StandardResponseRoute(APIRoute):
    """APIRoute whose endpoint result is wrapped in the standard envelope.

    Use as ``APIRouter(route_class=StandardResponseRoute)``. Routes built with
    another class are converted by :func:`adopt_routes`.
    """

    def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None:
        super().__init__(path, wrap_endpoint(endpoint), **kwargs)


# ---------------------------------------------------------------------------
# Adopting routes declared on plain routers
# ---------------------------------------------------------------------------

_ROUTE_OPTIONS = tuple(
    name
    for name, parameter in inspect.signature(APIRoute.__init__).parameters.items()
    if parameter.kind is inspect.Parameter.KEYWORD_ONLY
)
_standard_classes: dict[type, type] = {}


def _standard_class(route_class: type) -> type:
    if route_class is APIRoute:
        return StandardResponseRoute
    if route_class not in _standard_classes:
        _standard_classes[route_class] = type(
            f"Standard{route_class.__name__}", (StandardResponseRoute, route_class), {}
        )
    return _standard_classes[route_class]


def _adopt(route: APIRoute) -> None:
    options = {name: getattr(route, name) for name in _ROUTE_OPTIONS if hasattr(route, name)}
    # A response_model inferred from the handler's return annotation describes
    # the bare result, not the envelope.
    if options.get("response_model") == get_typed_return_annotation(route.endpoint):
        options.pop("response_model", None)
    route.__class__ = _standard_class(type(route))
    route.__init__(route.path, route.endpoint, **options)


def adopt_routes(router: APIRouter) -> int:
    """Convert every APIRoute under ``router`` into a StandardResponseRoute, in place.

    Routers reached through ``include_router`` are converted too, so a plain
    router shared between apps is converted for all of them. Returns the
    number of routes converted.
    """
    adopted = 0
    for route in router.routes:
        if isinstance(route, APIRoute) and not isinstance(route, StandardResponseRoute):
            _adopt(route)
            logger.debug("Adopted route %s %s", sorted(route.methods), route.path)
            adopted += 1
        included = getattr(route, "original_router", None)
        if included is not None:
            adopted += adopt_routes(included)
    if adopted:
        # Lazily included routers rebuild their effective routes on change.
        mark_changed = getattr(router, "_mark_routes_changed", None)
        if mark_changed is not None:
            mark_changed()
    return adopted


class StandardRoutesMiddleware:
    """Adopts routes registered after setup before they serve a request."""

    def __init__(self, app: ASGIApp, router: APIRouter) -> None:
        self.app = app
        self.router = router

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            adopt_routes(self.router)
        await self.app(scope, receive, send)


# ---------------------------------------------------------------------------
# Application wiring
# ---------------------------------------------------------------------------

def setup_standard_response(
    app: FastAPI,
    *,
    intercept_all: bool | None = None,
    validate_response: Any = None,
    validation_error_message: str | None = None,
) -> StandardResponseInterceptor:
    """Configure the interceptor for ``app`` and run all its routes through it.

    Options left as ``None`` fall back to :data:`standard_response.core.config.settings`.
    Routes of any router, included before or after this call, are converted
    to :class:`StandardResponseRoute`.
    """
    interceptor = build_interceptor(
        intercept_all=intercept_all,
        validate_response=validate_response,
        validation_error_message=validation_error_message,
    )
    setattr(app.state, _INTERCEPTOR_ATTR, interceptor)
    app.router.route_class = StandardResponseRoute
    adopt_routes(app.router)
    app.add_middleware(StandardRoutesMiddleware, router=app.router)
    logger.debug(
        "Standard responses enabled (intercept_all=%s, validate_response=%s)",
        interceptor.intercept_all,
        interceptor.validator.enabled,
    )
    return interceptor
