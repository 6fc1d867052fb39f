"""Application-level exceptions and FastAPI exception handlers.

Every error leaves the API as ``{"error": {"code", "message", "details"?}}``.
"""


from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: str = "INTERNAL_ERROR",
        details: list[dict[str, Any]] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details
        super().__init__(message)

    def to_body(self) -> dict[str, Any]:
        return _error_body(self.code, self.message, self.details)


class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: str | None = None):
        msg = f"{entity} not found" if not entity_id else f"{entity} '{entity_id}' not found"
        super().__init__(msg, status_code=404, code="NOT_FOUND")


class ValidationError(AppException):
    """Rejected query input. ``errors`` holds one ``{field, error}`` entry per invalid field."""

    def __init__(self, errors: list[dict[str, str]]):
        self.errors = errors
        super().__init__(
            "; ".join(entry["error"] for entry in errors),
            status_code=400,
            code="VALIDATION_ERROR",
            details=errors,
        )

    @classmethod
    def for_field(cls, field: str, error: str) -> "ValidationError":
        return cls([{"field": field, "error": error}])


class BadGatewayError(AppException):
    """The handler produced data that violates its own response contract."""

    def __init__(self, message: str = "Bad Gateway"):
        super().__init__(message, status_code=502, code="BAD_GATEWAY")


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

# Bodies for errors raised by the framework itself (unknown path, crash).
_STATUS_ERRORS = {
    404: ("NOT_FOUND", "Resource not found"),
    500: ("INTERNAL_ERROR", "An unexpected error occurred"),
}


def _error_body(code: str, message: str, details: list[dict[str, Any]] | None = None) -> dict:
    error: dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    return {"error": error}


def _status_handler(status_code: int):
    code, message = _STATUS_ERRORS[status_code]

    async def handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=status_code, content=_error_body(code, message))

    return handler


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    for status_code in _STATUS_ERRORS:
        app.add_exception_handler(status_code, _status_handler(status_code))
