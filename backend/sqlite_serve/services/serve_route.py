"""Serve Route — per-request orchestration of one configured route.

Invariants:
    - One RequestVariableResolver per request; Route and processor are shared
    - ?format=json skips template stages and returns the converted rows
    - Failures propagate as RequestError; api/error_handlers.py maps them to responses
    - Every outcome is logged here or in the error handler, never in core/

Design Decisions:
    - Sync function: FastAPI runs it in the threadpool, so concurrent requests
      each get their own thread while the core stays single-threaded
    - Processor built from real adapters in one place (build_processor)
"""

import logging
from enum import Enum

from fastapi import Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from sqlite_serve.core.errors import RequestError, TemplateNotFoundError
from sqlite_serve.core.processor import RequestProcessor
from sqlite_serve.core.route import Route
from sqlite_serve.infrastructure.request_variables import RequestVariableResolver
from sqlite_serve.infrastructure.sqlite_executor import SqliteQueryExecutor
from sqlite_serve.infrastructure.template_files import FileTemplateLoader
from sqlite_serve.infrastructure.template_renderer import ChevronRenderer

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    HTML = "html"
    JSON = "json"


def negotiate_format(request: Request) -> OutputFormat:
    """JSON when asked for with ?format=json, HTML otherwise."""
    if request.query_params.get("format", "").lower() == OutputFormat.JSON.value:
        return OutputFormat.JSON
    return OutputFormat.HTML


def http_status_for(error: RequestError, template_not_found_status: int = 500) -> int:
    if isinstance(error, TemplateNotFoundError):
        return template_not_found_status
    return error.http_status


def build_processor() -> RequestProcessor:
    return RequestProcessor(
        executor=SqliteQueryExecutor(),
        loader=FileTemplateLoader(),
        renderer=ChevronRenderer(),
    )


def serve_route(
    route: Route, request: Request, processor: RequestProcessor,
) -> Response:
    """Run the route for this request. Raises RequestError on failure."""
    resolver = RequestVariableResolver(request)
    output_format = negotiate_format(request)

    if output_format is OutputFormat.JSON:
        rows = processor.fetch_rows(route, resolver)
        logger.info(
            f"Returned {len(rows)} JSON rows for {route.path}",
            extra={
                "route_path": route.path, "row_count": len(rows),
                "param_count": len(route.bindings),
                "output_format": output_format.value,
            },
        )
        return JSONResponse(rows)

    body = processor.process(route, resolver)
    logger.info(
        f"Rendered {route.template.path} for {route.path} "
        f"with {len(route.bindings)} params",
        extra={
            "route_path": route.path, "template": route.template.path,
            "param_count": len(route.bindings),
            "output_format": output_format.value,
        },
    )
    return HTMLResponse(body)
