"""Repository layer for database operations."""

import abc
import logging
from typing import List, Optional
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from trackl.models.context import RequestContext
from trackl.models.event import Event
from trackl.models.task import Task, TaskState
from trackl.database.models import TaskDB, EventDB

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A store operation failed."""


class TaskNotFoundError(StoreError):
    """No task with the given id exists in the namespace."""

    def __init__(self, namespace: str, task_id: str):
        super().__init__(f"task {task_id} not found")
        self.namespace = namespace
        self.task_id = task_id


class TaskStore(abc.ABC):
    """Namespace-scoped persistence for tasks and events.

    Every method receives the request context of the caller; implementations
    that do not need it ignore it. All failures are raised as StoreError.
    """

    @abc.abstractmethod
    def list_tasks(self, ctx: RequestContext, namespace: str) -> List[Task]:
        """All tasks of a namespace, oldest first."""

    @abc.abstractmethod
    def find_task(self, ctx: RequestContext, namespace: str, task_id: str) -> Task:
        """One task by id. Raises TaskNotFoundError when absent."""

    @abc.abstractmethod
    def create_task(self, ctx: RequestContext, namespace: str, task: Task) -> str:
        """Persist a new task and return its id."""

    @abc.abstractmethod
    def set_task_state(self, ctx: RequestContext, namespace: str, task_id: str, state: TaskState) -> None:
        """Overwrite the state of one task."""

    @abc.abstractmethod
    def list_events(self, ctx: RequestContext, namespace: str) -> List[Event]:
        """All events of a namespace, in insertion order."""

    @abc.abstractmethod
    def create_event(self, ctx: RequestContext, namespace: str, event: Event) -> str:
        """Persist a new event and return its id."""

    @abc.abstractmethod
    def close(self) -> None:
        """Release resources held by the store."""


class SQLTaskStore(TaskStore):
    """TaskStore backed by a relational database through SQLAlchemy.

    Each operation runs in its own short-lived session.
    """

    def __init__(self, session_factory: sessionmaker, engine: Optional[Engine] = None):
        self._session_factory = session_factory
        self._engine = engine

    def _session(self) -> Session:
        return self._session_factory()

    def list_tasks(self, ctx: RequestContext, namespace: str) -> List[Task]:
        try:
            with self._session() as db:
                tasks_db = db.query(TaskDB).filter(
                    TaskDB.namespace == namespace,
                ).order_by(TaskDB.seq).all()
                return [task_db.to_pydantic() for task_db in tasks_db]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list tasks for namespace {namespace}: {type(e).__name__}: {str(e)}")
            raise StoreError(f"listing tasks: {e}") from e

    def find_task(self, ctx: RequestContext, namespace: str, task_id: str) -> Task:
        try:
            with self._session() as db:
                task_db = db.query(TaskDB).filter(
                    TaskDB.id == task_id,
                    TaskDB.namespace == namespace,
                ).first()
                if task_db is None:
                    raise TaskNotFoundError(namespace, task_id)
                return task_db.to_pydantic()
        except SQLAlchemyError as e:
            logger.error(f"Failed to find task {task_id}: {type(e).__name__}: {str(e)}")
            raise StoreError(f"finding task: {e}") from e

    def create_task(self, ctx: RequestContext, namespace: str, task: Task) -> str:
        task_db = TaskDB.from_pydantic(task.model_copy(update={"namespace": namespace}))
        with self._session() as db:
            try:
                db.add(task_db)
                db.commit()
                logger.debug(f"Created task {task_db.id}: {task.description[:50]}")
                return task_db.id
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Failed to create task: {type(e).__name__}: {str(e)}")
                raise StoreError(f"creating task: {e}") from e

    def set_task_state(self, ctx: RequestContext, namespace: str, task_id: str, state: TaskState) -> None:
        with self._session() as db:
            try:
                affected = (
                    db.query(TaskDB)
                    .filter(TaskDB.id == task_id, TaskDB.namespace == namespace)
                    .update({TaskDB.state: TaskState(state).value}, synchronize_session=False)
                )
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Failed to set state of task {task_id}: {type(e).__name__}: {str(e)}")
                raise StoreError(f"changing task state: {e}") from e
        if affected == 0:
            raise TaskNotFoundError(namespace, task_id)
        logger.debug(f"Task {task_id} is now {TaskState(state).value}")

    def list_events(self, ctx: RequestContext, namespace: str) -> List[Event]:
        try:
            with self._session() as db:
                events_db = db.query(EventDB).filter(
                    EventDB.namespace == namespace,
                ).order_by(EventDB.seq).all()
                return [event_db.to_pydantic() for event_db in events_db]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list events for namespace {namespace}: {type(e).__name__}: {str(e)}")
            raise StoreError(f"listing events: {e}") from e

    def create_event(self, ctx: RequestContext, namespace: str, event: Event) -> str:
        event_db = EventDB.from_pydantic(event.model_copy(update={"namespace": namespace}))
        with self._session() as db:
            try:
                db.add(event_db)
                db.commit()
                logger.debug(f"Created event {event_db.id} due {event.date.isoformat()}")
                return event_db.id
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Failed to create event: {type(e).__name__}: {str(e)}")
                raise StoreError(f"creating event: {e}") from e

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
