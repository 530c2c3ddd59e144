"""Namespace resolution for trackl requests.

A namespace scopes every task and event to one browser. It comes from the URL
path when present (so a view can be shared by link), otherwise from a
long-lived cookie, otherwise it is generated.
"""

import logging
import secrets
from fastapi import HTTPException, Request, Response, status

from trackl.models.constants import (
    NAMESPACE_COOKIE,
    NAMESPACE_COOKIE_MAX_AGE,
    NAMESPACE_COOKIE_SAMESITE,
    NAMESPACE_TOKEN_BYTES,
)
from trackl.models.context import RequestContext

logger = logging.getLogger(__name__)


def generate_namespace() -> str:
    """Return a new random namespace token (16 hex characters)."""
    return secrets.token_hex(NAMESPACE_TOKEN_BYTES)


def resolve_namespace(request: Request) -> RequestContext:
    """Build the request context for the namespace of this request (FastAPI dependency).

    Raises:
        HTTPException: 500 if no random namespace could be generated
    """
    path_namespace = request.path_params.get("namespace")
    if path_namespace:
        return RequestContext(namespace=path_namespace, from_path=True)

    namespace = request.cookies.get(NAMESPACE_COOKIE)
    if not namespace:
        try:
            namespace = generate_namespace()
        except (OSError, NotImplementedError) as e:
            logger.error(f"Failed to generate namespace: {type(e).__name__}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=str(e),
            ) from e
        logger.debug(f"Generated namespace {namespace}")

    ctx = RequestContext(namespace=namespace)
    # Read back by the error handler to set the cookie on error responses
    request.state.namespace_context = ctx
    return ctx


def apply_namespace_cookie(ctx: RequestContext, response: Response) -> Response:
    """Write (or refresh) the namespace cookie unless the namespace came from the path."""
    if not ctx.from_path:
        response.set_cookie(
            key=NAMESPACE_COOKIE,
            value=ctx.namespace,
            max_age=NAMESPACE_COOKIE_MAX_AGE,
            path="/",
            samesite=NAMESPACE_COOKIE_SAMESITE,
        )
    return response
