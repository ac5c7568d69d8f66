"""
Application error taxonomy.

Services raise subclasses of ``AppError``; the exception handlers
registered in ``main.create_app`` turn them into JSON responses with
the matching HTTP status.  ``service_errors`` wraps service methods so
that anything unanticipated is logged with its traceback and surfaces
to the client only as a generic ``InternalError``.
"""

import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "Something went wrong. Please try again later."

T = TypeVar("T")


class AppError(Exception):
    """Base class for errors that are safe to show to the client."""

    status_code = 500

    def __init__(self, message: str = GENERIC_MESSAGE, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = 400


class AuthError(AppError):
    """Bad credentials or token."""

    status_code = 401


class NotFoundError(AppError):
    """The referenced entity does not exist."""

    status_code = 404


class ConflictError(AppError):
    """The write collides with existing data (e.g. a taken e‑mail)."""

    status_code = 409


class InternalError(AppError):
    """Catch‑all for failures whose details must not leak."""

    status_code = 500


def service_errors(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Re‑raise ``AppError`` unchanged, wrap anything else in ``InternalError``."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)
        except AppError:
            raise
        except Exception as exc:
            logger.exception("Unexpected error in %s", func.__qualname__)
            raise InternalError() from exc

    return wrapper
