"""user_follows table: follower -> following edge.

MySQL refuses CHECK constraints on columns used by ON DELETE CASCADE foreign
keys, so there the no-self-follow rule is a BEFORE INSERT/UPDATE trigger; other
dialects keep the CHECK constraint.
"""
from datetime import datetime
from sqlalchemy import DDL, Integer, DateTime, ForeignKey, UniqueConstraint, CheckConstraint, event
from sqlalchemy.orm import Mapped, mapped_column
from ..config.database import Base
from ..config.timezone import now_utc

NOT_SELF_CHECK = CheckConstraint("follower_id != following_id", name="ck_user_follow_not_self").ddl_if(
    dialect=("sqlite", "postgresql")
)


def _not_self_trigger(event_name: str) -> DDL:
    return DDL(
        f"CREATE TRIGGER trg_user_follows_not_self_{event_name.lower()} "
        f"BEFORE {event_name} ON user_follows FOR EACH ROW "
        "BEGIN "
        "IF NEW.follower_id = NEW.following_id THEN "
        "SIGNAL SQLSTATE '45000' SET MESSAGE_TEXT = 'Cannot follow yourself'; "
        "END IF; "
        "END"
    ).execute_if(dialect="mysql")


NOT_SELF_TRIGGERS = (_not_self_trigger("INSERT"), _not_self_trigger("UPDATE"))


class UserFollow(Base):
    __tablename__ = "user_follows"
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_user_follow_pair"),
        NOT_SELF_CHECK,
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    follower_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    following_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=now_utc)


for _trigger in NOT_SELF_TRIGGERS:
    event.listen(UserFollow.__table__, "after_create", _trigger)
