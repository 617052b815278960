"""Factory Boy factories persisting into the per-test SAVEPOINT session.

The autouse ``_factories_session`` fixture registers the session before each
test; factories flush (never commit) so every row disappears with the outer
rollback.
"""

from __future__ import annotations

import factory


class SQLAlchemySession:
    """Holder for the session the current test runs in."""

    _session = None

    @classmethod
    def set(cls, session):
        cls._session = session

    @classmethod
    def get(cls):
        """
        :raises RuntimeError: When a factory runs outside the ``session`` fixture.
        """
        if cls._session is None:
            raise RuntimeError("No test session registered; request the 'session' fixture.")
        return cls._session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Abstract base: resolves the session lazily and flushes to assign ids."""

    class Meta:
        abstract = True
        sqlalchemy_session_factory = SQLAlchemySession.get
        sqlalchemy_session_persistence = "flush"
