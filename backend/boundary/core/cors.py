"""CORS policy for the mobile and web clients."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

# Headers the clients must be able to send and read for the route contract
# (optimistic concurrency, idempotent creates, correlation ids).
ALLOWED_HEADERS = ["Authorization", "Content-Type", "Idempotency-Key", "If-Match", "X-Request-ID"]
EXPOSED_HEADERS = ["ETag", "Location", "X-Request-ID"]


def init_app(app: Flask) -> None:
    """Configure CORS for everything below ``API_BASE_PREFIX``.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``CORS_ORIGINS`` and ``CORS_MAX_AGE`` settings are
        consulted. A blank or ``"*"`` origin list allows any origin and turns
        credential support off.
    """
    raw_origins = app.config.get("CORS_ORIGINS", "") or ""
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = not origins or origins == ["*"]
    prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")

    CORS(
        app,
        resources={rf"{prefix}/*": {"origins": "*" if wildcard else origins}},
        allow_headers=ALLOWED_HEADERS,
        expose_headers=EXPOSED_HEADERS,
        supports_credentials=not wildcard,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
