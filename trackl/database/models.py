"""SQLAlchemy database models for trackl."""

import uuid
from sqlalchemy import Column, String, DateTime, Integer

from trackl.database.database import Base
from trackl.models.task import Task, TaskState
from trackl.models.event import Event
from trackl.engine.progress import utcnow


def _new_id() -> str:
    return str(uuid.uuid4())


class TaskDB(Base):
    """Database model for Task."""

    __tablename__ = "tasks"

    # Insertion order; listings sort on it
    seq = Column(Integer, primary_key=True, autoincrement=True)

    id = Column(String, nullable=False, unique=True, index=True, default=_new_id)

    # Namespace scoping
    namespace = Column(String, nullable=False, index=True)

    icon = Column(String, nullable=False)
    description = Column(String, nullable=False)
    state = Column(String, nullable=False, default=TaskState.NOT_DONE.value)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def to_pydantic(self) -> Task:
        """Convert database model to Pydantic model."""
        return Task(
            namespace=self.namespace,
            id=self.id,
            icon=self.icon,
            description=self.description,
            state=TaskState(self.state),
        )

    @classmethod
    def from_pydantic(cls, task: Task) -> "TaskDB":
        """Create database model from Pydantic model."""
        return cls(
            id=task.id or _new_id(),
            namespace=task.namespace,
            icon=task.icon,
            description=task.description,
            state=TaskState(task.state).value,
        )


class EventDB(Base):
    """Database model for Event."""

    __tablename__ = "events"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, nullable=False, unique=True, index=True, default=_new_id)
    namespace = Column(String, nullable=False, index=True)

    icon = Column(String, nullable=False)
    date = Column(DateTime, nullable=False)
    reference_date = Column(DateTime, nullable=False)

    created_at = Column(DateTime, nullable=False, default=utcnow)

    def to_pydantic(self) -> Event:
        """Convert database model to Pydantic model."""
        return Event(
            namespace=self.namespace,
            id=self.id,
            icon=self.icon,
            date=self.date,
            reference_date=self.reference_date,
        )

    @classmethod
    def from_pydantic(cls, event: Event) -> "EventDB":
        """Create database model from Pydantic model."""
        return cls(
            id=event.id or _new_id(),
            namespace=event.namespace,
            icon=event.icon,
            date=event.date,
            reference_date=event.reference_date,
        )
