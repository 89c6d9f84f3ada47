"""SQL Routes — mounts every loaded Route as a GET endpoint.

Invariants:
    - One endpoint per Route in the registry; failed routes are not mounted
    - Endpoints are plain `def`: FastAPI runs them in its threadpool
    - The endpoint closes over its Route; nothing is looked up per request
"""

from collections.abc import Callable

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from sqlite_serve.core.processor import RequestProcessor
from sqlite_serve.core.route import Route
from sqlite_serve.services.route_registry import RouteRegistry
from sqlite_serve.services.serve_route import serve_route


def _endpoint_for(
    route: Route, processor: RequestProcessor,
) -> Callable[[Request], Response]:
    def endpoint(request: Request) -> Response:
        return serve_route(route, request, processor)

    endpoint.__name__ = f"serve_{route.path.strip('/').replace('/', '_') or 'root'}"
    return endpoint


def build_router(registry: RouteRegistry, processor: RequestProcessor) -> APIRouter:
    router = APIRouter(tags=["sql"])
    for route in registry.routes.values():
        router.add_api_route(
            route.path,
            _endpoint_for(route, processor),
            methods=["GET"],
            response_class=HTMLResponse,
        )
    return router
