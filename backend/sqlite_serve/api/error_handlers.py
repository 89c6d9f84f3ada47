"""Error Handlers — global exception handlers for served routes.

Invariants:
    - RequestError -> its HTTP status (400 parameter, 500 query/template/render;
      template-not-found may be configured to 404)
    - HTML requests get an HTML error page; ?format=json requests get the JSON envelope
    - Error details shown in HTML are escaped
    - Exception (catch-all) -> 500, never leaks internal details
    - 4xx logged at WARNING, 5xx at ERROR

Design Decisions:
    - Two-layer handler: domain (SqliteServeError), catch-all (Exception)
"""

import html
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, Response

from sqlite_serve.core.errors import ErrorSeverity, RequestError, SqliteServeError
from sqlite_serve.services.serve_route import OutputFormat, http_status_for, negotiate_format

logger = logging.getLogger(__name__)

ERROR_PAGE = """<!DOCTYPE html>
<html>
<head><title>Error - sqlite-serve</title></head>
<body style="font-family: monospace; max-width: 800px; margin: 2rem auto; padding: 0 1rem;">
    <h1 style="color: #CC9393;">Request Processing Error</h1>
    <p style="color: #A6A689;">An error occurred while processing your request.</p>
    <details style="margin-top: 1rem; padding: 1rem; border-left: 3px solid #CC9393;">
        <summary style="cursor: pointer; font-weight: bold;">Error Details</summary>
        <pre style="margin-top: 1rem; overflow-x: auto;">{code}: {detail}</pre>
    </details>
    <p style="margin-top: 2rem;"><a href="/">Back to Home</a></p>
</body>
</html>"""


def render_error_page(error: SqliteServeError) -> str:
    return ERROR_PAGE.format(
        code=html.escape(error.code), detail=html.escape(error.message),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_generic_error_handler(app)


def _status_for(request: Request, exc: SqliteServeError) -> int:
    if isinstance(exc, RequestError):
        settings = getattr(request.app.state, "settings", None)
        not_found_status = settings.template_not_found_status if settings else 500
        return http_status_for(exc, not_found_status)
    return exc.http_status


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register sqlite-serve domain/infrastructure error handler."""

    @app.exception_handler(SqliteServeError)
    async def sqlite_serve_error_handler(
        request: Request, exc: SqliteServeError,
    ) -> Response:
        """Handle all sqlite-serve request and configuration errors."""
        http_status = _status_for(request, exc)
        log = logger.warning if http_status < 500 else logger.error
        log(
            f"SqliteServeError: {exc.message}",
            extra={
                "error_code": exc.code, "route_path": request.url.path,
                "http_status": http_status,
            },
        )
        if negotiate_format(request) is OutputFormat.JSON:
            return JSONResponse(status_code=http_status, content=exc.to_response())
        return HTMLResponse(status_code=http_status, content=render_error_page(exc))


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
