"""Units of work binding the resource repositories to one transaction.

The services use :class:`SQLAlchemyUnitOfWork` for writes and
:class:`SQLAlchemyReadOnlyUnitOfWork` for queries; both implement
:class:`UnitOfWork`.
"""

from .base import UnitOfWork
from .sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

__all__ = [
    "UnitOfWork",
    "SQLAlchemyUnitOfWork",
    "SQLAlchemyReadOnlyUnitOfWork",
]
