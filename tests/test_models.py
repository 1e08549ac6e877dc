import pytest
from sqlalchemy import event
from sqlalchemy.dialects import mysql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.schema import CreateTable

from foodies_backend.models import User, UserFollow
from foodies_backend.models.user_follow import NOT_SELF_TRIGGERS


def _create_sql(dialect) -> str:
    return str(CreateTable(UserFollow.__table__).compile(dialect=dialect))


def test_mysql_table_has_cascades_but_no_check():
    sql = _create_sql(mysql.dialect())
    assert "ON DELETE CASCADE" in sql
    assert "CHECK" not in sql


def test_sqlite_table_keeps_check():
    sql = _create_sql(sqlite.dialect())
    assert "CONSTRAINT ck_user_follow_not_self CHECK (follower_id != following_id)" in sql


def test_mysql_triggers_reject_self_follow():
    for trigger in NOT_SELF_TRIGGERS:
        assert event.contains(UserFollow.__table__, "after_create", trigger)
        sql = str(trigger.compile(dialect=mysql.dialect()))
        assert "ON user_follows FOR EACH ROW" in sql
        assert "IF NEW.follower_id = NEW.following_id THEN SIGNAL SQLSTATE '45000'" in sql
    statements = " ".join(t.statement for t in NOT_SELF_TRIGGERS)
    assert "BEFORE INSERT" in statements
    assert "BEFORE UPDATE" in statements


async def test_self_follow_row_rejected_by_database(session_factory):
    async with session_factory() as session:
        user = User(name="Solo", email="solo@example.com", password="x")
        session.add(user)
        await session.flush()
        session.add(UserFollow(follower_id=user.id, following_id=user.id))
        with pytest.raises(IntegrityError):
            await session.flush()
        await session.rollback()
