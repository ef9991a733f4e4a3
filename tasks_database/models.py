from datetime import datetime, timedelta, timezone
import enum

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def utcnow():
    """Naive UTC timestamp, the form both SQLite and Postgres columns round-trip."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def values(cls):
        return tuple(member.value for member in cls)

    def flipped(self):
        return TaskStatus.COMPLETED if self is TaskStatus.PENDING else TaskStatus.PENDING


# PUBLIC_INTERFACE
class User(Base):
    """
    SQLAlchemy model for an account owning a private task list.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(64), unique=True, index=True, nullable=False)
    email = Column(String(128), unique=True, nullable=False)
    password = Column(String(256), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    tasks = relationship(
        "Task",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


# PUBLIC_INTERFACE
class Task(Base):
    """
    SQLAlchemy model for a task. Owned by exactly one user for its lifetime.
    """
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'completed')", name="ck_tasks_status"
        ),
        Index("idx_tasks_user_id", "user_id"),
        Index("idx_tasks_status", "status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(String(16), nullable=False, default=TaskStatus.PENDING.value)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    owner = relationship("User", back_populates="tasks")

    def touch(self):
        """Refresh updated_at, never moving it backwards or leaving it unchanged."""
        now = utcnow()
        if self.updated_at is not None and now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now
