"""Centralized JSON error handling for the API.

Every failure leaves the process as the same envelope::

    {"success": false, "statusCode": 409, "message": "...",
     "errors": [...], "data": null, "requestId": "..."}
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from vidtube.core.logger import ensure_request_id
from vidtube.services._shared import errors as service_errors

log = logging.getLogger(__name__)

# Most specific classes first; lookup walks the MRO of the raised error.
SERVICE_ERROR_STATUS: dict[type[service_errors.ServiceError], int] = {
    service_errors.ValidationError: HTTPStatus.BAD_REQUEST,
    service_errors.AuthenticationError: HTTPStatus.UNAUTHORIZED,
    service_errors.UnauthorizedError: HTTPStatus.UNAUTHORIZED,
    service_errors.TokenError: HTTPStatus.UNAUTHORIZED,
    service_errors.ForbiddenError: HTTPStatus.FORBIDDEN,
    service_errors.NotFoundError: HTTPStatus.NOT_FOUND,
    service_errors.ConflictError: HTTPStatus.CONFLICT,
    service_errors.UploadError: HTTPStatus.INTERNAL_SERVER_ERROR,
    service_errors.InternalError: HTTPStatus.INTERNAL_SERVER_ERROR,
}


def status_for(exc: service_errors.ServiceError) -> int:
    """Return the HTTP status code mapped to a service error class.

    :param exc: Raised service error.
    :returns: Status code; ``400`` for unmapped :class:`ServiceError` subclasses.
    :rtype: int
    """
    for klass in type(exc).__mro__:
        if klass in SERVICE_ERROR_STATUS:
            return int(SERVICE_ERROR_STATUS[klass])
    return int(HTTPStatus.BAD_REQUEST)


def _as_envelope(*, status: int, message: str, errors: list[Any] | None = None) -> dict[str, Any]:
    """
    Build the error envelope returned to clients.

    :param status: HTTP status code.
    :param message: Human-readable error summary (safe for clients).
    :param errors: Optional structured sub-errors.
    :returns: Envelope dictionary.
    :rtype: dict
    """
    return {
        "success": False,
        "statusCode": status,
        "message": message,
        "errors": list(errors or []),
        "data": None,
        "requestId": ensure_request_id(),
    }


def _error_response(envelope: dict[str, Any]) -> tuple[Response, int]:
    return jsonify(envelope), int(envelope["statusCode"])


class APIError(Exception):
    """
    Represent a JSON-serializable API error raised from the HTTP layer.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    errors : list[Any] | None, optional
        Optional structured payload included in the response body.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        errors: list[Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.errors = list(errors or [])

    @classmethod
    def from_service_error(cls, exc: service_errors.ServiceError) -> APIError:
        """Translate a framework-agnostic service error into an API error."""
        return cls(exc.message, status_code=status_for(exc), errors=exc.errors)

    def to_envelope(self) -> dict[str, Any]:
        """
        Serialize error metadata into the error envelope.

        :returns: Envelope dictionary.
        :rtype: dict
        """
        return _as_envelope(status=self.status_code, message=self.message, errors=self.errors)


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Ensures a correlation ``requestId`` is present on every error.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    """

    def _log(err: APIError) -> None:
        if err.status_code >= 500:
            log.error("APIError: status=%s msg=%s", err.status_code, err.message, exc_info=True)
        else:
            log.warning("APIError: status=%s msg=%s", err.status_code, err.message)

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        _log(err)
        return _error_response(err.to_envelope())

    @app.errorhandler(service_errors.ServiceError)
    def handle_service_error(err: service_errors.ServiceError):
        api_err = APIError.from_service_error(err)
        _log(api_err)
        return _error_response(api_err.to_envelope())

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = (err.description or HTTPStatus(status).phrase).strip()
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        level = log.error if status >= 500 else log.warning
        level("HTTPException: status=%s detail=%s", status, message)
        return _error_response(_as_envelope(status=status, message=message))

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        messages = err.normalized_messages()
        errors = [{"field": field, "messages": msgs} for field, msgs in messages.items()]
        log.warning("ValidationError: fields=%s", sorted(messages))
        return _error_response(
            _as_envelope(status=HTTPStatus.BAD_REQUEST, message="Validation failed", errors=errors)
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB error to clients
        log.error("IntegrityError", exc_info=True)
        return _error_response(_as_envelope(status=HTTPStatus.CONFLICT, message="Resource conflict"))

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        log.error("OperationalError", exc_info=True)
        return _error_response(
            _as_envelope(
                status=HTTPStatus.SERVICE_UNAVAILABLE,
                message="Service temporarily unavailable",
            )
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        log.error("Unhandled exception", exc_info=True)
        return _error_response(
            _as_envelope(status=HTTPStatus.INTERNAL_SERVER_ERROR, message="Unexpected error")
        )
