"""Shared API helpers for authentication, responses and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from boundary.core.logger import ensure_request_id
from boundary.infra.idempotency import get_store
from boundary.infra.storage import LocalFileStorage
from boundary.services import GalleryService
from boundary.services._shared.base import BaseService, ServiceContext
from boundary.services._shared.dto import ListOut

F = TypeVar("F", bound=Callable[..., Any])
S = TypeVar("S", bound=BaseService)

IDEMPOTENCY_HEADER = "Idempotency-Key"
REPLAYED_HEADERS = ("Location", "ETag")


def require_auth(func: F) -> F:
    """Ensure the request carries a valid JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_actor_id() -> str | None:
    """JWT ``sub`` of the verified token, as a string."""
    verify_jwt_in_request(optional=True)
    identity = get_jwt_identity()
    return str(identity) if identity is not None else None


def service_context() -> ServiceContext:
    return ServiceContext(actor_id=current_actor_id(), request_id=ensure_request_id())


def service_for(service_cls: type[S], **kwargs: Any) -> S:
    """Build ``service_cls`` bound to the current request's actor and request id."""
    return service_cls(ctx=service_context(), **kwargs)


def public_service_for(service_cls: type[S], **kwargs: Any) -> S:
    """Build ``service_cls`` for an anonymous endpoint; any bearer token is ignored."""
    return service_cls(ctx=ServiceContext(request_id=ensure_request_id()), **kwargs)


def gallery_service() -> GalleryService:
    cfg = current_app.config
    return service_for(
        GalleryService,
        storage=LocalFileStorage.from_config(),
        share_base_url=cfg["SHARE_BASE_URL"],
        share_ttl_days=cfg["SHARE_TTL_DAYS"],
        storage_limit=cfg["GALLERY_STORAGE_LIMIT"],
    )


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""
    response = jsonify(payload)
    response.status_code = status
    return response


def data_response(data: Any, *, status: int = 200) -> Response:
    """Success envelope: ``{"data": ...}``."""
    return json_response({"data": data}, status=status)


def page_response(page: ListOut[Any], dump: Callable[[list[Any]], Any]) -> Response:
    """Paginated envelope: ``{"data": [...], "meta": {...}}``."""
    return json_response({"data": dump(page.items), "meta": page.meta.as_dict()})


def no_content() -> Response:
    return Response(status=204)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


def _idempotency_scope(key: str) -> str:
    # Keys are per user and per endpoint so clients cannot collide.
    return f"{current_actor_id() or 'anonymous'}:{request.endpoint}:{key}"


def build_cached_response(payload: dict[str, Any]) -> Response:
    """Rehydrate a Flask response object from cached payload metadata."""
    response = json_response(payload.get("body", {}), status=payload.get("status", 200))
    for header, value in payload.get("headers", {}).items():
        response.headers[header] = value
    response.headers["Idempotent-Replayed"] = "true"
    return response


def idempotent(func: F) -> F:
    """
    Replay the stored response of a previous request with the same
    ``Idempotency-Key`` instead of running the handler again.

    Only successful (2xx) JSON responses are stored.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        key = request.headers.get(IDEMPOTENCY_HEADER)
        if not key:
            return func(*args, **kwargs)
        store = get_store()
        scoped = _idempotency_scope(key)
        cached = store.get(scoped)
        if cached is not None:
            return build_cached_response(cached)
        response = current_app.make_response(func(*args, **kwargs))
        if 200 <= response.status_code < 300 and response.is_json:
            store.put(
                scoped,
                {
                    "status": response.status_code,
                    "body": response.get_json(),
                    "headers": {
                        name: response.headers[name]
                        for name in REPLAYED_HEADERS
                        if name in response.headers
                    },
                },
                ttl=int(current_app.config["IDEMPOTENCY_TTL_SECONDS"]),
            )
        return response

    return wrapper  # type: ignore[return-value]
