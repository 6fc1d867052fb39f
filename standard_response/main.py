"""Standard Response API application factory."""


import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from standard_response.core.config import settings
from standard_response.core.exceptions import register_exception_handlers
from standard_response.middleware.request_log import RequestLogMiddleware
from standard_response.routing import raw_response, setup_standard_response
from standard_response.schemas.common import HealthResponse

# v1 routers
from standard_response.routers.v1.books import router as books_v1_router

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.is_development else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for noisy in ("httpcore", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _add_middleware(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )
    # Added last so it wraps CORS and times the whole request.
    app.add_middleware(RequestLogMiddleware)


def _include_routes(app: FastAPI) -> None:
    app.include_router(books_v1_router, prefix="/api/v1")

    @app.get("/health", tags=["Health"])
    @raw_response(model=HealthResponse, description="Liveness check")
    async def health():
        return HealthResponse(app=settings.app_name, env=settings.app_env)


def create_app(**standard_response_options) -> FastAPI:
    """Build the app. Keyword options are forwarded to :func:`setup_standard_response`.

    The interceptor is configured before any route is added so routes declared
    on the app itself use ``StandardResponseRoute``.
    """
    _configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version="2.0.0",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )
    setup_standard_response(app, **standard_response_options)
    _add_middleware(app)
    register_exception_handlers(app)
    _include_routes(app)
    return app


app = create_app()
