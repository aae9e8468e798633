from typing import List, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger


class PizzaPensionError(Exception):
    """Base class for all domain errors raised by the service layer."""


class RegistrationValidationError(PizzaPensionError):
    """Raised when a submission is missing fields or has fields of the wrong type."""

    def __init__(self, errors: List[dict]):
        self.errors = errors
        super().__init__(format_field_errors(errors))


class AuthError(PizzaPensionError):
    """Raised when a request needs an authenticated admin and has none."""

    def __init__(self, message: str = "Not authenticated"):
        self.message = message
        super().__init__(message)


class InvalidCredentials(AuthError):
    """Raised when the username is unknown or the password does not match."""

    def __init__(self, message: str = "Incorrect username or password"):
        super().__init__(message)


class UserAlreadyExists(PizzaPensionError):
    """Raised by provisioning when the username is already taken."""


class EventFull(PizzaPensionError):
    """Raised when capacity is enforced and every seat is taken."""


class StorageError(PizzaPensionError):
    """Raised when the database cannot complete an operation."""


def format_field_errors(errors: List[dict]) -> str:
    """
    Aggregate field errors into one readable line, e.g.
    'Validation error: Field required at "email"; Input should be a valid string at "pizza"'.
    """
    parts = []
    for error in errors:
        field: Optional[str] = error.get("field")
        if field:
            parts.append(f'{error["message"]} at "{field}"')
        else:
            parts.append(error["message"])
    return "Validation error: " + "; ".join(parts)


async def registration_validation_error_handler(request: Request, exc: RegistrationValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "errors": exc.errors},
    )


async def auth_error_handler(request: Request, exc: AuthError):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": exc.message},
        headers={"WWW-Authenticate": "Cookie"},
    )


async def event_full_handler(request: Request, exc: EventFull):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"Storage error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RegistrationValidationError, registration_validation_error_handler)
    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(EventFull, event_full_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
