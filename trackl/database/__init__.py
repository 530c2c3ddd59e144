"""Persistence layer for trackl."""

from trackl.database.repository import SQLTaskStore, StoreError, TaskNotFoundError, TaskStore
from trackl.database.instrumented import InstrumentedStore

__all__ = [
    "SQLTaskStore",
    "StoreError",
    "TaskNotFoundError",
    "TaskStore",
    "InstrumentedStore",
]
