"""Per-request context for trackl handlers."""

from dataclasses import dataclass, field
from datetime import timedelta


@dataclass
class InstrumentedInfo:
    """Store calls made while serving one request."""

    num_db_calls: int = 0
    db_duration: timedelta = field(default_factory=timedelta)

    def add_call(self, duration: timedelta) -> None:
        self.num_db_calls += 1
        self.db_duration += duration


@dataclass
class RequestContext:
    """Request-scoped data threaded explicitly through handlers and the store.

    Attributes:
        namespace: Resolved namespace for this request
        from_path: Whether the namespace came from the URL path
        instrumented: Store call accounting for this request
    """

    namespace: str
    from_path: bool = False
    instrumented: InstrumentedInfo = field(default_factory=InstrumentedInfo)
