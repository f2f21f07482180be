"""
Error types returned by the API and the handlers that render them.
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger


class ApiError(Exception):
    """Base error carrying the HTTP status and the message shown to the caller"""

    status_code = 500
    message = "An error occurred."

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    def to_body(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class AuthenticationMissing(ApiError):
    """No bearer token on the request"""
    status_code = 401
    message = "Authentication required."


class AuthenticationInvalid(ApiError):
    """Bearer token present but rejected by the identity provider"""
    status_code = 403
    message = "Invalid or expired token."


class ValidationFailure(ApiError):
    status_code = 400
    message = "All fields are required."


class CollaboratorFailure(ApiError):
    """A store or generator call raised"""
    status_code = 500


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Rejected request body on {request.url.path}: {len(exc.errors())} error(s)")
    return await api_error_handler(request, ValidationFailure())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
