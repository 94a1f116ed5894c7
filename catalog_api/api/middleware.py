"""API middleware for the Catalog API.

Provides:
- Request ID correlation
- Bearer token authentication for catalog endpoints
- Error handling
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

from catalog_api.infrastructure.security import InvalidTokenError, decode_access_token

logger = structlog.get_logger()


# ============================================================================
# Request ID Middleware
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag every request with an ``X-Request-ID``.

    A caller-supplied ID is reused, otherwise one is generated. The ID is
    bound into the structlog context for the lifetime of the request and
    echoed in the response headers.
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid4())

        started = time.perf_counter()
        response = None
        with structlog.contextvars.bound_contextvars(request_id=request_id):
            try:
                response = await call_next(request)
            finally:
                logger.info(
                    "Request completed",
                    method=request.method,
                    path=request.url.path,
                    status_code=getattr(response, "status_code", 500),
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )

        response.headers[self.HEADER_NAME] = request_id
        return response


# ============================================================================
# Bearer Token Authentication Middleware
# ============================================================================


# Path prefix guarded by authentication
PROTECTED_PREFIX = "/api/"

# Paths under the protected prefix that don't require authentication
PUBLIC_PATHS = {
    "/api/search",
}


def _unauthorized(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"success": False, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


def _is_routed(request: Request) -> bool:
    """Whether some route fully matches the request's path and method."""
    return any(
        route.matches(request.scope)[0] == Match.FULL
        for route in request.app.router.routes
    )


class BearerAuthMiddleware(BaseHTTPMiddleware):
    """Middleware for bearer token authentication.

    Validates that catalog endpoints carry a valid access token:
    "Authorization: Bearer <token>". Signup, signin, search, health and
    documentation endpoints are public. Requests that no route would
    serve pass straight through so they get the regular 404.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Validate the access token for protected endpoints.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response or 401 error.
        """
        path = request.url.path.rstrip("/")
        if (
            not request.url.path.startswith(PROTECTED_PREFIX)
            or path in PUBLIC_PATHS
            or not _is_routed(request)
        ):
            return await call_next(request)

        auth_header = request.headers.get("Authorization")
        if not auth_header:
            logger.warning(
                "Missing authorization header",
                path=path,
                method=request.method,
            )
            return _unauthorized("Unauthorized access. Missing token.")

        parts = auth_header.split(" ", 1)
        if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
            logger.warning(
                "Invalid authorization format",
                path=path,
                method=request.method,
            )
            return _unauthorized("Invalid Authorization header format. Use 'Bearer <token>'")

        try:
            claims = decode_access_token(parts[1].strip())
        except InvalidTokenError as e:
            logger.warning(
                "Invalid access token",
                path=path,
                method=request.method,
                reason=str(e),
            )
            return _unauthorized("Unauthorized access. Invalid token.")

        # Handler logs carry the caller
        with structlog.contextvars.bound_contextvars(user_id=claims.user_id):
            return await call_next(request)


# ============================================================================
# Error Handling Middleware
# ============================================================================


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turn any unhandled exception into a generic 500 envelope.

    Domain errors never get here; main.py maps those. What does is a
    store or programming failure, so the client only sees a fixed message
    and the traceback goes to the log.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"success": False, "message": "Internal Server error."},
            )


# ============================================================================
# Middleware Setup
# ============================================================================


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application.

    Middleware is added in reverse order (last added = first executed).

    Args:
        app: FastAPI application instance.
    """
    # Error handling (innermost - wraps the router)
    app.add_middleware(ErrorHandlerMiddleware)

    # Bearer token authentication
    app.add_middleware(BearerAuthMiddleware)

    # Request ID correlation (outermost - every response gets the header)
    app.add_middleware(RequestIdMiddleware)
