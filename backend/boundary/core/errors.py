"""Problem-details (RFC 7807) rendering for every error the API can return.

Clients always receive ``application/problem+json`` with a stable ``code``,
a safe ``detail`` message and the request's correlation id. Internal messages
(driver errors, storage paths, tracebacks) only reach the logs.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from boundary.core.extensions import jwt
from boundary.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"

_CODES = {
    HTTPStatus.BAD_REQUEST: "bad_request",
    HTTPStatus.UNAUTHORIZED: "unauthorized",
    HTTPStatus.FORBIDDEN: "forbidden",
    HTTPStatus.NOT_FOUND: "not_found",
    HTTPStatus.METHOD_NOT_ALLOWED: "method_not_allowed",
    HTTPStatus.CONFLICT: "conflict",
    HTTPStatus.REQUEST_ENTITY_TOO_LARGE: "payload_too_large",
    HTTPStatus.UNSUPPORTED_MEDIA_TYPE: "unsupported_media_type",
    HTTPStatus.UNPROCESSABLE_ENTITY: "unprocessable_entity",
    HTTPStatus.TOO_MANY_REQUESTS: "too_many_requests",
    HTTPStatus.INTERNAL_SERVER_ERROR: "internal_server_error",
    HTTPStatus.SERVICE_UNAVAILABLE: "service_unavailable",
}


def as_problem(
    *,
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build a problem document for the current request.

    :param status: HTTP status code.
    :param code: Stable snake_case error code.
    :param message: Client-safe summary, sent as ``detail``.
    :param details: Optional structured payload, omitted when empty.
    :rtype: dict
    """
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": int(status),
        "detail": message,
        "instance": request.path if request else None,
        "code": code,
    }
    if details:
        problem["details"] = details
    problem["request_id"] = ensure_request_id()
    return problem


def problem_response(problem: dict[str, Any]) -> Response:
    resp = jsonify(problem)
    resp.status_code = int(problem["status"])
    resp.mimetype = PROBLEM_MIMETYPE
    return resp


class APIError(Exception):
    """
    Error already shaped for HTTP: status, code and client-safe message.

    Services never raise these; their
    :class:`~boundary.services._shared.errors.ServiceError` subclasses are
    translated at the boundary.

    Parameters
    ----------
    message : str
        Sent to clients as ``detail``.
    status_code : int, optional
        Defaults to ``400``.
    code : str, optional
        Defaults to ``"bad_request"``.
    details : dict[str, Any] | None, optional
        Sent as ``details`` when non-empty.
    """

    def __init__(
        self,
        message: str,
        status_code: int = HTTPStatus.BAD_REQUEST,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return as_problem(
            status=self.status_code,
            code=self.code,
            message=self.message,
            details=self.details,
        )


class NotFound(APIError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, HTTPStatus.NOT_FOUND, "not_found")


class Unprocessable(APIError):
    """422 for input that passed the schemas but breaks a domain rule."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, HTTPStatus.UNPROCESSABLE_ENTITY, "validation_error", details)


class ServiceUnavailable(APIError):
    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(message, HTTPStatus.SERVICE_UNAVAILABLE, "service_unavailable")


def _respond(
    status: int,
    code: str,
    message: str,
    *,
    details: dict[str, Any] | None = None,
    label: str,
    exc_info: bool = False,
) -> Response:
    """Log at WARNING (4xx) or ERROR (5xx) and render the problem."""
    problem = as_problem(status=status, code=code, message=message, details=details)
    level = logging.ERROR if status >= 500 else logging.WARNING
    log.log(
        level,
        "%s: code=%s status=%s detail=%s request_id=%s",
        label,
        code,
        status,
        message,
        problem["request_id"],
        exc_info=exc_info,
        extra={"errors": details["errors"]} if details and "errors" in details else None,
    )
    return problem_response(problem)


def _register_jwt_handlers() -> None:
    """Missing, malformed and expired tokens all answer 401 problems."""

    def unauthorized(reason: str) -> Response:
        return _respond(HTTPStatus.UNAUTHORIZED, "unauthorized", reason, label="Unauthorized")

    jwt.unauthorized_loader(unauthorized)
    jwt.invalid_token_loader(unauthorized)
    jwt.expired_token_loader(lambda _header, _payload: unauthorized("Token has expired"))


def init_app(app: Flask) -> None:
    """
    Register the problem-details handlers on ``app``.

    Notes
    -----
    Service errors go through
    :func:`boundary.services._shared.base.translate_exception`. Database
    errors that escape a unit of work map to 409 (integrity) and 503
    (connectivity). Anything else is a 500 with a generic message.
    """
    from boundary.services._shared.base import translate_exception
    from boundary.services._shared.errors import ServiceError

    _register_jwt_handlers()

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return _respond(
            err.status_code,
            err.code,
            err.message,
            details=err.details,
            label="APIError",
            exc_info=err.status_code >= 500 and err.__cause__ is not None,
        )

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        translated = translate_exception(err)
        translated.__cause__ = err.__cause__
        return handle_api_error(translated)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        code = _CODES.get(status, "error")
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or code.replace("_", " ").capitalize()).strip()
        return _respond(status, code, message, label="HTTPException")

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        return _respond(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "validation_error",
            "Validation failed",
            details={"errors": err.normalized_messages()},
            label="ValidationError",
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        return _respond(
            HTTPStatus.CONFLICT, "conflict", "Resource conflict", label="IntegrityError", exc_info=True
        )

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        return _respond(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "service_unavailable",
            "Service temporarily unavailable",
            label="OperationalError",
            exc_info=True,
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        return _respond(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "internal_server_error",
            "Unexpected error",
            label="Unhandled exception",
            exc_info=True,
        )
