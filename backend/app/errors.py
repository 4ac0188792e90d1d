"""
Error taxonomy shared by the services, the HTTP layer and the API client.

Every error carries the HTTP status it maps to and a short human-readable
message; the handlers registered on the app render them as {"message": ...}.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class DonateHubError(Exception):
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"message": self.message}


class ValidationError(DonateHubError):
    status_code = 400
    default_message = 'Validation failed'

    def __init__(self, violations=None, message=None):
        self.violations = list(violations or [])
        if message is None and self.violations:
            message = '; '.join(v.message for v in self.violations)
        super().__init__(message)

    def to_dict(self):
        body = super().to_dict()
        body["errors"] = [{"field": v.field, "message": v.message} for v in self.violations]
        return body


class Unauthenticated(DonateHubError):
    status_code = 401
    default_message = 'Not authorized'


class Forbidden(DonateHubError):
    status_code = 403
    default_message = 'Access denied'


class NotFound(DonateHubError):
    status_code = 404
    default_message = 'Not found'


class Conflict(DonateHubError):
    status_code = 409
    default_message = 'Conflict'


class Internal(DonateHubError):
    status_code = 500


_BY_STATUS = {cls.status_code: cls for cls in (ValidationError, Unauthenticated, Forbidden, NotFound, Conflict, Internal)}


def error_for_status(status_code, message=None):
    """Rebuild the matching error from an HTTP status (used by the API client)."""
    cls = _BY_STATUS.get(status_code, DonateHubError)
    if cls is ValidationError:
        return ValidationError(message=message)
    err = cls(message)
    err.status_code = status_code
    return err


def _request_validation_message(exc):
    parts = []
    for e in exc.errors():
        loc = [str(p) for p in e.get('loc', ()) if p != 'body']
        parts.append(f"{'.'.join(loc) or 'body'}: {e.get('msg')}")
    return '; '.join(parts) or 'Invalid request'


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(DonateHubError)
    async def donatehub_error_handler(request: Request, exc: DonateHubError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"field": '.'.join(str(p) for p in e.get('loc', ()) if p != 'body'), "message": e.get('msg')}
            for e in exc.errors()
        ]
        return JSONResponse(status_code=400, content={"message": _request_validation_message(exc), "errors": errors})

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": Internal.default_message})
