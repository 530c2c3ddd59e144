"""Command line entry point for trackl.

    python -m trackl serve [--addr HOST:PORT] [--database-url URL]
    python -m trackl add-event NAMESPACE ICON DATE [--reference-date DATE]
"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import List, Optional

import uvicorn
from dateutil import parser as date_parser

from trackl.config import Settings, parse_addr
from trackl.database.database import build_engine, build_session_factory, init_db
from trackl.database.repository import SQLTaskStore, StoreError
from trackl.engine.progress import utcnow
from trackl.logging_setup import setup_logging
from trackl.models.context import RequestContext
from trackl.models.event import Event

logger = logging.getLogger("trackl")


def parse_date(value: str) -> datetime:
    """Parse a user-supplied date into naive UTC."""
    parsed = date_parser.parse(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _serve(settings: Settings) -> int:
    host, port = parse_addr(settings.addr)
    logger.info(f"Listening on http://{host}:{port}")

    from trackl.api.app import create_app

    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)
    return 0


def _add_event(settings: Settings, args: argparse.Namespace) -> int:
    engine = build_engine(settings)
    init_db(engine, settings)
    store = SQLTaskStore(build_session_factory(engine), engine)
    try:
        event = Event(
            namespace=args.namespace,
            icon=args.icon,
            date=args.date,
            reference_date=args.reference_date or utcnow(),
        )
        event_id = store.create_event(RequestContext(namespace=args.namespace), args.namespace, event)
    except StoreError as e:
        logger.error(f"Could not add event: {e}")
        return 1
    finally:
        store.close()

    print(event_id)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trackl", description="Minimal personal task and event tracker")
    parser.add_argument("--database-url", help="SQLAlchemy database URL (default: $DATABASE_URL or sqlite:///./trackl.db)")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the web server")
    serve.add_argument("--addr", help="The address for the server to listen on (default: $TRACKL_ADDR or 0.0.0.0:5000)")

    add_event = sub.add_parser("add-event", help="Add a dated event to a namespace")
    add_event.add_argument("namespace")
    add_event.add_argument("icon")
    add_event.add_argument("date", type=parse_date, help="Target date, e.g. 2026-12-24")
    add_event.add_argument("--reference-date", type=parse_date, help="Start of the tracking window (default: now)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env().with_overrides(
        database_url=args.database_url,
        addr=getattr(args, "addr", None),
    )
    setup_logging(settings.log_level)

    if args.command == "serve":
        return _serve(settings)
    return _add_event(settings, args)


if __name__ == "__main__":
    sys.exit(main())
