import pytest
from boundary.models import CircleType
from boundary.services._shared.errors import PersistenceError
from boundary.uow import (
    SQLAlchemyReadOnlyUnitOfWork as ROuow,
)
from boundary.uow import (
    SQLAlchemyUnitOfWork as RWuow,
)
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError
from tests.factories.circle_type import CircleTypeFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, session):
        """
        Ensure that attempting to flush ORM changes inside the RO UoW raises.
        """
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(CircleTypeFactory.build())
            uow.session.flush()

    def test_blocks_flush_of_dirty_rows(self, session):
        row = CircleTypeFactory(display_name="Before")

        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            loaded = uow.circle_types.get(row.id)
            loaded.display_name = "After"
            uow.session.flush()

    def test_disallows_commit(self, session):
        """
        RO UoW must reject commit().
        """
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_guard_is_removed_on_exit(self, session):
        with ROuow():
            pass

        # Writes outside the RO scope are not affected.
        session.add(CircleTypeFactory.build())
        session.flush()

    def test_owned_transaction_ends_and_rows_stay_readable(self, session):
        with RWuow() as uow:
            uow.circle_types.add(CircleType(name="neighbours", is_system=False))
        assert not session().in_transaction()

        with ROuow() as uow:
            row = uow.circle_types.get_by_name("neighbours")

        assert inspect(row).detached
        assert row.name == "neighbours"
        assert not session().in_transaction()

    def test_attaches_to_open_transaction(self, session):
        row = CircleTypeFactory()
        assert session().in_transaction()

        with ROuow() as uow:
            assert uow.circle_types.get(row.id) is row

        assert session().in_transaction()
        assert inspect(row).persistent

    def test_operational_error_becomes_persistence_error(self, session):
        with pytest.raises(PersistenceError), ROuow():
            raise OperationalError("SELECT 1", {}, Exception("connection lost"))
