"""Shared fixtures: one app per run, one rolled-back transaction per test.

Tables are created once on an in-memory SQLite database. Each test gets a
session bound to a single connection inside an outer transaction plus a
SAVEPOINT; the app's ``db.session`` is swapped for it, so rows built by the
factories are visible to requests made through the test client, and the
outer rollback discards everything, commits included.
"""

from __future__ import annotations

import os

import factory.random
import pytest
from boundary.core.config import TestingConfig
from boundary.core.extensions import db as _db
from boundary.factory import create_app
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker
from tests.helpers.auth import ACTOR_ID, OTHER_ACTOR_ID, bearer


@pytest.fixture(scope="session")
def upload_dir(tmp_path_factory):
    """Directory receiving gallery uploads for the whole run."""
    return tmp_path_factory.mktemp("uploads")


@pytest.fixture(scope="session")
def app(upload_dir):
    """Testing app with uploads in a temp folder and a small storage quota.

    Returns
    -------
    flask.Flask
    """
    # A developer's DATABASE_URL must never be touched by the suite.
    os.environ.pop("DATABASE_URL", None)

    class Config(TestingConfig):
        SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
        SQLALCHEMY_ENGINE_OPTIONS = {}
        UPLOAD_FOLDER = str(upload_dir)
        UPLOAD_URL_PREFIX = "/uploads/images"
        SHARE_BASE_URL = "https://share.example.test/photos"
        GALLERY_STORAGE_LIMIT = 1000
        LOG_LEVEL = "WARNING"

    return create_app(Config, instance_relative_config=False)


@pytest.fixture(scope="session")
def db(app):
    """Push an app context for the run and create every table in it.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """The one connection every test session is bound to."""
    with db.engine.connect() as conn:
        yield conn


@pytest.fixture(scope="function")
def session(db, connection):
    """Session for one test, rolled back at teardown.

    Notes
    -----
    A unit of work commit only releases the session's own SAVEPOINT; the
    listener opens a new one so later statements stay inside the outer
    transaction.
    """
    outer = connection.begin()
    scoped = scoped_session(
        sessionmaker(bind=connection, autoflush=False, expire_on_commit=False)
    )
    savepoint = connection.begin_nested()

    @event.listens_for(scoped(), "after_transaction_end")
    def _reopen_savepoint(sess, trans):  # pragma: no cover
        nonlocal savepoint
        if trans.nested and not trans._parent.nested:
            savepoint = connection.begin_nested()

    app_session = db.session
    app_session.remove()
    db.session = scoped
    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = app_session
        outer.rollback()


@pytest.fixture(scope="session", autouse=True)
def _seed_factory_randomness():
    """Make ``factory.Faker`` values repeatable across runs."""
    factory.random.reseed_random("boundary")


@pytest.fixture(autouse=True)
def _factories_session(session):
    """Point every factory at this test's session."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


# -- HTTP ----------------------------------------------------------------------
@pytest.fixture()
def client(app, session):
    """Flask test client sharing the test's transactional session."""
    return app.test_client()


@pytest.fixture()
def auth_headers(app):
    """Bearer header for :data:`ACTOR_ID`."""
    return bearer(ACTOR_ID)


@pytest.fixture()
def other_auth_headers(app):
    """Bearer header for a second user, to check owner scoping."""
    return bearer(OTHER_ACTOR_ID)
