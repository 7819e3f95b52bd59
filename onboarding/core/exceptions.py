"""Application-level exceptions and FastAPI exception handlers."""


from enum import Enum

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)

class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: str | None = None):
        msg = f"{entity} not found" if not entity_id else f"{entity} '{entity_id}' not found"
        super().__init__(msg, status_code=404, code="NOT_FOUND")

class ForbiddenError(AppException):
    def __init__(self, message: str = "Access denied"):
        super().__init__(message, status_code=403, code="FORBIDDEN")

class UnauthorizedError(AppException):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401, code="UNAUTHORIZED")

class ValidationError(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=422, code="VALIDATION_ERROR")

class FormValidationError(ValidationError):
    """Field-scoped validation failure raised before anything reaches the store."""

    def __init__(self, fields: dict[str, str]):
        self.fields = fields
        super().__init__("Please correct the highlighted fields")

class InvalidTransitionError(AppException):
    def __init__(self, current: str, action: str):
        super().__init__(
            f"Cannot {action} a vendor that is already {current}",
            status_code=409,
            code="INVALID_TRANSITION",
        )

# ---------------------------------------------------------------------------
# Storage errors (database and object store)
# ---------------------------------------------------------------------------

class StorageErrorKind(str, Enum):
    CONFLICT = "conflict"
    INVALID_REFERENCE = "invalid_reference"
    POLICY_DENIED = "policy_denied"
    NOT_CONFIGURED = "not_configured"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    UNKNOWN = "unknown"

_KIND_STATUS: dict[StorageErrorKind, int] = {
    StorageErrorKind.CONFLICT: 409,
    StorageErrorKind.INVALID_REFERENCE: 400,
    StorageErrorKind.POLICY_DENIED: 403,
    StorageErrorKind.NOT_CONFIGURED: 503,
    StorageErrorKind.PAYLOAD_TOO_LARGE: 413,
    StorageErrorKind.UNKNOWN: 500,
}

class StorageError(AppException):
    """A failed call into the relational or object store.

    ``kind`` is decided once where the error is caught; ``raw`` keeps the
    store's own message for pass-through.
    """

    def __init__(self, kind: StorageErrorKind, message: str, raw: str | None = None):
        self.kind = kind
        self.raw = raw if raw is not None else message
        super().__init__(
            message,
            status_code=_KIND_STATUS[kind],
            code=f"STORAGE_{kind.name}",
        )

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _error_body(code: str, message: str, fields: dict[str, str] | None = None) -> dict:
    body: dict = {"code": code, "message": message}
    if fields:
        body["fields"] = fields
    return {"error": body}

def _field_errors(exc: RequestValidationError) -> dict[str, str]:
    """First message per offending field, keyed by the last element of its location."""
    fields: dict[str, str] = {}
    for err in exc.errors():
        loc = err.get("loc") or ("body",)
        message = str(err.get("msg", "Invalid value")).removeprefix("Value error, ")
        fields.setdefault(str(loc[-1]), message)
    return fields

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.code, exc.message, getattr(exc, "fields", None)),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=_error_body("VALIDATION_ERROR", "Invalid request", _field_errors(exc)),
        )

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content=_error_body("NOT_FOUND", "Resource not found"),
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "An unexpected error occurred"),
        )
