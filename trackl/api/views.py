"""HTML rendering for trackl.

The renderer is built once by the application factory and shared by all
handlers. Every dynamic value goes through `html.escape` (text) or `quote`
(URL path segments).
"""

from datetime import datetime
from html import escape
from typing import List, Optional
from urllib.parse import quote

from trackl.engine.progress import days_left, percent_done
from trackl.models.context import InstrumentedInfo
from trackl.models.event import Event
from trackl.models.task import Task

STATE_LABELS = {
    "not-done": "not done",
    "started": "started",
    "done": "done",
}


def namespace_url(namespace: str, *parts: str) -> str:
    """Absolute path under a namespace, e.g. namespace_url("abc", "tasks") -> "/abc/tasks"."""
    segments = [quote(namespace, safe="")] + [quote(p, safe="") for p in parts]
    return "/" + "/".join(segments)


class ViewRenderer:
    """Renders the trackl pages and fragments as HTML strings."""

    def __init__(self, title: str = "trackl"):
        self.title = title

    def _page(self, body: str) -> str:
        return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{escape(self.title)}</title>
    <link rel="stylesheet" href="/css/trackl.css">
    <link rel="icon" href="/img/trackl.svg" type="image/svg+xml">
</head>
<body>
{body}
    <script src="/js/trackl.js"></script>
</body>
</html>
"""

    def task(self, task: Task) -> str:
        """Fragment for a single task; clicking its icon advances it to the next state."""
        next_url = namespace_url(task.namespace, "tasks", task.id, task.state.next().value)
        state = task.state.value
        return (
            f'<li class="task task-{state}" id="task-{escape(task.id)}">'
            f'<button class="task-icon" data-next-url="{escape(next_url)}" '
            f'title="{escape(STATE_LABELS[state])}">{escape(task.icon)}</button>'
            f'<span class="task-description">{escape(task.description)}</span>'
            f"</li>"
        )

    def _event(self, event: Event, now: datetime) -> str:
        percent = percent_done(event, now)
        remaining = days_left(event, now)
        bar_width = min(max(percent, 0.0), 100.0)
        return (
            f'<li class="event">'
            f'<span class="event-icon">{escape(event.icon)}</span>'
            f'<span class="event-days-left" data-days-left="{remaining}">{remaining} days left</span>'
            f'<span class="event-date">{event.date.date().isoformat()}</span>'
            f'<div class="progress"><div class="progress-bar" style="width: {bar_width:.1f}%"></div></div>'
            f'<span class="event-percent">{percent:.0f}%</span>'
            f"</li>"
        )

    def home(
        self,
        namespace: str,
        tasks: List[Task],
        events: List[Event],
        now: datetime,
        instrumented: Optional[InstrumentedInfo] = None,
    ) -> str:
        """Full page listing tasks and events. Events are rendered in the given order."""
        tasks_html = "\n".join(self.task(task) for task in tasks) or '<li class="empty">No tasks yet.</li>'
        events_html = "\n".join(self._event(event, now) for event in events) or '<li class="empty">No events.</li>'

        footer = ""
        if instrumented is not None:
            millis = instrumented.db_duration.total_seconds() * 1000
            footer = (
                f'<footer class="muted">{instrumented.num_db_calls} db calls, '
                f"{millis:.2f}ms</footer>"
            )

        body = f"""    <header>
        <h1><a href="{escape(namespace_url(namespace))}">{escape(self.title)}</a></h1>
        <a class="new-task" href="{escape(namespace_url(namespace, "tasks", "new"))}">+ task</a>
    </header>
    <main>
        <section class="tasks">
            <ul id="tasks">
{tasks_html}
            </ul>
        </section>
        <section class="events">
            <ul id="events">
{events_html}
            </ul>
        </section>
    </main>
    {footer}"""
        return self._page(body)

    def new_task(self, namespace: str, error: Optional[str] = None, icon: str = "", description: str = "") -> str:
        """Task creation form, optionally showing an error and the submitted values."""
        error_html = f'<p class="error">{escape(error)}</p>' if error else ""
        body = f"""    <header>
        <h1><a href="{escape(namespace_url(namespace))}">{escape(self.title)}</a></h1>
    </header>
    <main>
        {error_html}
        <form method="post" action="{escape(namespace_url(namespace, "tasks"))}">
            <label>Icon <input name="icon" value="{escape(icon)}" autofocus></label>
            <label>Description <input name="description" value="{escape(description)}"></label>
            <button type="submit">Create</button>
        </form>
    </main>"""
        return self._page(body)
