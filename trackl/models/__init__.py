"""Data models for trackl."""

from trackl.models.task import Task, TaskState
from trackl.models.event import Event
from trackl.models.context import InstrumentedInfo, RequestContext

__all__ = [
    "Task",
    "TaskState",
    "Event",
    "InstrumentedInfo",
    "RequestContext",
]
