"""Lifecycle of the process-wide persistence client.

The :data:`~boundary.core.extensions.db` extension is created once at import
time and bound to the application in :func:`boundary.core.extensions.init_app`.
The engine (and its connection pool) is created lazily by Flask-SQLAlchemy on
first use and shared by every request handled by the process. This module adds
the two ends of that lifecycle that the extension leaves to the application:

* per-request cleanup of the scoped session (failed transactions are rolled
  back so the pooled connection is returned clean), and
* graceful shutdown, disposing every engine bound to the extension when the
  process exits or a gunicorn worker is recycled.
"""

from __future__ import annotations

import atexit
import logging

from flask import Flask

from boundary.core.extensions import db

log = logging.getLogger(__name__)

_SHUTDOWN_KEY = "boundary.db_shutdown_registered"


def shutdown(app: Flask) -> None:
    """Dispose all pooled connections owned by ``app``'s engines.

    Safe to call more than once; disposing an engine with no checked-out
    connections is a no-op.
    """
    with app.app_context():
        db.session.remove()
        for engine in db.engines.values():
            engine.dispose()
    log.info("database.shutdown")


def init_app(app: Flask) -> None:
    """Register session cleanup and process-exit disposal for ``app``."""

    @app.teardown_appcontext
    def _cleanup_session(exc: BaseException | None) -> None:
        if exc is not None:
            db.session.rollback()

    if not app.extensions.get(_SHUTDOWN_KEY):
        atexit.register(shutdown, app)
        app.extensions[_SHUTDOWN_KEY] = True


__all__ = ["db", "init_app", "shutdown"]
