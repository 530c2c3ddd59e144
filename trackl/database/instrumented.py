"""Timing decorator for TaskStore implementations."""

import time
from datetime import timedelta
from typing import List

from trackl.models.context import RequestContext
from trackl.models.event import Event
from trackl.models.task import Task, TaskState
from trackl.database.repository import TaskStore


class InstrumentedStore(TaskStore):
    """Wraps another TaskStore and records each call on the request context.

    Calls are counted and timed whether or not the wrapped store raises.
    """

    def __init__(self, store: TaskStore):
        self.store = store

    def _timed(self, ctx: RequestContext, fn, *args):
        start = time.perf_counter()
        try:
            return fn(ctx, *args)
        finally:
            ctx.instrumented.add_call(timedelta(seconds=time.perf_counter() - start))

    def list_tasks(self, ctx: RequestContext, namespace: str) -> List[Task]:
        return self._timed(ctx, self.store.list_tasks, namespace)

    def find_task(self, ctx: RequestContext, namespace: str, task_id: str) -> Task:
        return self._timed(ctx, self.store.find_task, namespace, task_id)

    def create_task(self, ctx: RequestContext, namespace: str, task: Task) -> str:
        return self._timed(ctx, self.store.create_task, namespace, task)

    def set_task_state(self, ctx: RequestContext, namespace: str, task_id: str, state: TaskState) -> None:
        return self._timed(ctx, self.store.set_task_state, namespace, task_id, state)

    def list_events(self, ctx: RequestContext, namespace: str) -> List[Event]:
        return self._timed(ctx, self.store.list_events, namespace)

    def create_event(self, ctx: RequestContext, namespace: str, event: Event) -> str:
        return self._timed(ctx, self.store.create_event, namespace, event)

    def close(self) -> None:
        self.store.close()
