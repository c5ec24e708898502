"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or HTTP.
They serve as stable contracts between repositories, adapters and
application services.

The translation to the JSON error envelope is handled by
``vidtube/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    :param message: Human-readable summary safe to show to clients.
    :type message: str
    :param errors: Optional structured sub-errors (field messages, etc.).
    :type errors: list[Any] | None

    Notes
    -----
    - These are *not* HTTP errors.
    - The error boundary in ``vidtube.core.errors`` maps each subclass to a
      status code.
    """

    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None, *, errors: list[Any] | None = None) -> None:
        self.message = message or self.default_message
        self.errors = list(errors or [])
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """Malformed or missing input."""

    default_message = "Invalid input"


class AuthenticationError(ServiceError):
    """Credentials were supplied but do not match."""

    default_message = "Invalid user credentials"


class UnauthorizedError(ServiceError):
    """The caller is not (or no longer) authenticated."""

    default_message = "Unauthorized request"


class ForbiddenError(ServiceError):
    """The caller is authenticated but may not act on the resource."""

    default_message = "You are not allowed to perform this action"


class UploadError(ServiceError):
    """The asset gateway failed to store a required file."""

    default_message = "Failed to upload file"


class InternalError(ServiceError):
    """A server-side invariant did not hold."""

    default_message = "Something went wrong"


class TokenError(ServiceError):
    """Base class for token verification failures."""

    default_message = "Invalid token"


class InvalidTokenError(TokenError):
    """Bad signature, malformed token or wrong token class."""

    default_message = "Invalid token"


class ExpiredTokenError(TokenError):
    """The token signature is valid but its ``exp`` claim is in the past."""

    default_message = "Token has expired"


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Account").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int | None
    :param detail: Optional client-facing message overriding the default.
    :type detail: str | None
    """

    entity: str
    key: str | int | None = None
    detail: str | None = None

    def __post_init__(self) -> None:
        ServiceError.__init__(self, self.detail or f"{self.entity} not found: {self.key}")

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "Account").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __post_init__(self) -> None:
        ServiceError.__init__(self, self.detail)

    def __str__(self) -> str:
        return self.message
