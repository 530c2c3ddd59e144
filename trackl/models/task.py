"""Task data model for trackl."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class TaskState(str, Enum):
    """Task state enumeration.

    States cycle in a fixed order: not-done -> started -> done -> not-done.
    """
    NOT_DONE = "not-done"
    STARTED = "started"
    DONE = "done"

    @classmethod
    def valid(cls, token: str) -> bool:
        """Return True if token names a known state (exact, case-sensitive)."""
        return token in _VALID_TOKENS

    def next(self) -> "TaskState":
        """Return the state following this one in the cycle."""
        return _NEXT_STATE[self]


_VALID_TOKENS = frozenset(state.value for state in TaskState)

_NEXT_STATE = {
    TaskState.NOT_DONE: TaskState.STARTED,
    TaskState.STARTED: TaskState.DONE,
    TaskState.DONE: TaskState.NOT_DONE,
}


class Task(BaseModel):
    """Canonical Task model."""

    namespace: str = Field(..., description="Namespace the task belongs to")
    id: Optional[str] = Field(None, description="Task identifier (assigned by the store)")
    icon: str = Field(..., description="Short icon, usually an emoji")
    description: str = Field(..., description="What the task is about")
    state: TaskState = Field(TaskState.NOT_DONE, description="Current task state")
