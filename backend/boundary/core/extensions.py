"""Extension singletons shared by the whole backend.

``db`` is the single persistence client: every repository, unit of work, seed
command and health check goes through its scoped session. Instances are
created unbound at import time and attached to an app in :func:`init_app`.
"""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

# Deterministic constraint names keep Alembic autogenerate diffs stable.
metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_name)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# Handlers serialize rows after the unit of work commits, so loaded
# attributes must survive the commit.
db: SQLAlchemy = SQLAlchemy(
    metadata=metadata,
    session_options={"autoflush": False, "expire_on_commit": False},
)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()


def _connect_redis(app: Flask) -> redis.Redis | None:
    """Open and ping the Redis client named by ``REDIS_URL``, if any."""
    url = app.config.get("REDIS_URL")
    if not url:
        return None
    client = redis.Redis.from_url(url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {url!r}") from exc
    return client


def init_app(app: Flask) -> None:
    """Bind the persistence client, migrations, JWT and optional Redis to ``app``.

    Importing :mod:`boundary.models` here registers every table on
    ``metadata`` before ``flask db`` or ``create_all`` inspect it.
    """
    db.init_app(app)
    from boundary import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    client = _connect_redis(app)
    if client is None:
        app.extensions.pop("redis_client", None)
    else:
        app.extensions["redis_client"] = client

