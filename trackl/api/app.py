"""FastAPI web application for trackl."""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from trackl.api.namespace import apply_namespace_cookie, resolve_namespace
from trackl.api.views import ViewRenderer, namespace_url
from trackl.config import Settings
from trackl.database.database import build_engine, build_session_factory, init_db
from trackl.database.instrumented import InstrumentedStore
from trackl.database.repository import SQLTaskStore, StoreError, TaskStore
from trackl.engine.progress import sort_by_days_left, utcnow
from trackl.models.constants import DESCRIPTION_REQUIRED, ERROR_SEPARATOR, ICON_REQUIRED
from trackl.models.context import RequestContext
from trackl.models.task import Task, TaskState

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

router = APIRouter()


def get_store(request: Request) -> TaskStore:
    """Application store (dependency for FastAPI)."""
    return request.app.state.store


def get_renderer(request: Request) -> ViewRenderer:
    """Application view renderer (dependency for FastAPI)."""
    return request.app.state.renderer


@router.get("/_/health")
def health():
    """Health check endpoint.

    Lives under "/_/" so every single-segment path stays a namespace.
    """
    return {"status": "healthy"}


@router.get("/", response_class=HTMLResponse)
@router.get("/{namespace}", response_class=HTMLResponse)
def home(
    ctx: RequestContext = Depends(resolve_namespace),
    store: TaskStore = Depends(get_store),
    renderer: ViewRenderer = Depends(get_renderer),
):
    """List the tasks and upcoming events of the namespace."""
    now = utcnow()
    try:
        tasks = store.list_tasks(ctx, ctx.namespace)
        events = store.list_events(ctx, ctx.namespace)
    except StoreError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e

    events = sort_by_days_left(events, now)
    html = renderer.home(ctx.namespace, tasks, events, now, ctx.instrumented)
    return apply_namespace_cookie(ctx, HTMLResponse(html))


@router.get("/{namespace}/tasks/new", response_class=HTMLResponse)
def new_task(
    ctx: RequestContext = Depends(resolve_namespace),
    renderer: ViewRenderer = Depends(get_renderer),
):
    """Render the task creation form."""
    return HTMLResponse(renderer.new_task(ctx.namespace))


@router.post("/{namespace}/tasks", response_class=HTMLResponse)
def create_task(
    icon: str = Form(""),
    description: str = Form(""),
    ctx: RequestContext = Depends(resolve_namespace),
    store: TaskStore = Depends(get_store),
    renderer: ViewRenderer = Depends(get_renderer),
):
    """Create a task from the submitted form.

    All problems are collected and shown together on the re-rendered form;
    on success the browser is sent back to the namespace's list.
    """
    errors = []
    if icon == "":
        errors.append(ICON_REQUIRED)
    if description == "":
        errors.append(DESCRIPTION_REQUIRED)

    if not errors:
        try:
            task_id = store.create_task(
                ctx,
                ctx.namespace,
                Task(namespace=ctx.namespace, icon=icon, description=description),
            )
            logger.info(f"Created task {task_id} in namespace {ctx.namespace}")
        except StoreError as e:
            errors.append(str(e))

    if errors:
        return HTMLResponse(
            renderer.new_task(ctx.namespace, ERROR_SEPARATOR.join(errors), icon, description),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    return RedirectResponse(url=namespace_url(ctx.namespace), status_code=status.HTTP_303_SEE_OTHER)


@router.post("/{namespace}/tasks/{task_id}/{state}", response_class=HTMLResponse)
def change_task_state(
    task_id: str,
    state: str,
    ctx: RequestContext = Depends(resolve_namespace),
    store: TaskStore = Depends(get_store),
    renderer: ViewRenderer = Depends(get_renderer),
):
    """Set a task to the state named in the path and return its updated fragment."""
    if not TaskState.valid(state):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="unknown state")
    new_state = TaskState(state)

    try:
        task = store.find_task(ctx, ctx.namespace, task_id)
    except StoreError as e:
        logger.error(f"Failed to look up task {task_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e

    try:
        store.set_task_state(ctx, ctx.namespace, task.id, new_state)
    except StoreError as e:
        logger.error(f"Failed to change state of task {task_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    task = task.model_copy(update={"state": new_state})
    return HTMLResponse(renderer.task(task))


async def plain_text_http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as plain text; this is an HTML app, not a JSON API.

    A namespace resolved for the failing request still gets its cookie, so a
    generated namespace is not lost on an error page.
    """
    response = PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None))
    ctx = getattr(request.state, "namespace_context", None)
    if ctx is not None:
        apply_namespace_cookie(ctx, response)
    return response


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[TaskStore] = None,
    renderer: Optional[ViewRenderer] = None,
) -> FastAPI:
    """Build the trackl application.

    Args:
        settings: Runtime configuration (read from the environment when omitted)
        store: Store to use; when omitted a SQL store is built from settings
        renderer: View renderer (a default ViewRenderer when omitted)

    Returns:
        Configured FastAPI application. The store is wrapped in an
        InstrumentedStore and closed on application shutdown.
    """
    if store is None:
        settings = settings or Settings.from_env()
        engine = build_engine(settings)
        init_db(engine, settings)
        store = SQLTaskStore(build_session_factory(engine), engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        logger.info("Closing store")
        app.state.store.close()

    app = FastAPI(
        title="trackl",
        description="Minimal personal task and event tracker",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.store = InstrumentedStore(store)
    app.state.renderer = renderer or ViewRenderer()

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        route = request.scope.get("route")
        route_pattern = getattr(route, "path", None) or request.url.path
        logger.info(
            f"{request.method} {route_pattern} {response.status_code} - "
            f"took {(time.perf_counter() - start) * 1000:.2f}ms"
        )
        return response

    app.add_exception_handler(StarletteHTTPException, plain_text_http_exception_handler)

    app.mount("/css", StaticFiles(directory=str(STATIC_DIR / "css")), name="css")
    app.mount("/js", StaticFiles(directory=str(STATIC_DIR / "js")), name="js")
    app.mount("/img", StaticFiles(directory=str(STATIC_DIR / "img")), name="img")
    app.include_router(router)

    return app
