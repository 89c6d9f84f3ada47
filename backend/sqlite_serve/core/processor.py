"""Request Processor — one deterministic pass from Route to rendered body.

Invariants:
    - Steps run in fixed order: resolve -> assemble -> execute -> load -> convert -> render
    - First failure wins; nothing after it runs (the executor is never called if
      any parameter fails to resolve)
    - The executor receives exactly len(route.bindings) values, in declaration order
    - Route is only read; concurrent runs over one Route need no coordination
    - Templates and partials are reloaded on every run (no caching)
    - A partial referenced but never loaded fails at render time, not at load time

Design Decisions:
    - Capabilities injected through the constructor; the request-scoped resolver
      is passed per call so one processor can serve many requests
    - No logging here: errors carry the route path and the capability error,
      and the shell decides what to log
"""

from typing import Any

from sqlite_serve.core.bindings import ParameterValues, assemble_values
from sqlite_serve.core.capabilities import (
    QueryExecutor,
    TemplateLoader,
    TemplateRenderer,
    VariableResolver,
)
from sqlite_serve.core.errors import (
    ErrorContext,
    ParameterResolutionFailedError,
    QueryExecutionError,
    QueryExecutionFailedError,
    TemplateLoadError,
    TemplateNotFoundError,
    TemplateRenderError,
    TemplateRenderFailedError,
    VariableResolutionError,
)
from sqlite_serve.core.result_rows import build_render_context, convert_rows
from sqlite_serve.core.route import Route


def resolve_parameters(route: Route, resolver: VariableResolver) -> ParameterValues:
    """Resolve every binding in declaration order; abort on the first failure."""
    values: list[str] = []
    for binding in route.bindings:
        name = binding.variable.name
        try:
            values.append(resolver.resolve(name))
        except VariableResolutionError as e:
            raise ParameterResolutionFailedError(
                name, e, ErrorContext(route_path=route.path, field=binding.variable.raw),
            ) from e
    return assemble_values(route.bindings, values)


class RequestProcessor:
    """Runs routes against injected query, template and render capabilities."""

    def __init__(
        self,
        executor: QueryExecutor,
        loader: TemplateLoader,
        renderer: TemplateRenderer,
    ):
        self._executor = executor
        self._loader = loader
        self._renderer = renderer

    def _execute(self, route: Route, resolver: VariableResolver) -> list:
        params = resolve_parameters(route, resolver)
        try:
            return self._executor.execute(route.database, route.query, params)
        except QueryExecutionError as e:
            raise QueryExecutionFailedError(
                route.query.text, e, ErrorContext(route_path=route.path),
            ) from e

    def fetch_rows(
        self, route: Route, resolver: VariableResolver,
    ) -> list[dict[str, Any]]:
        """Resolve, execute and convert; no template work."""
        return convert_rows(self._execute(route, resolver))

    def process(self, route: Route, resolver: VariableResolver) -> str:
        """Produce the rendered body for one request or raise a RequestError."""
        rows = self._execute(route, resolver)

        roots = route.search_roots()
        try:
            main = self._loader.load(route.template, roots)
        except TemplateLoadError as e:
            raise TemplateNotFoundError(
                route.template.path, e, ErrorContext(route_path=route.path),
            ) from e
        partials = self._loader.list_partials(roots)

        context = build_render_context(convert_rows(rows))
        try:
            return self._renderer.render(main, partials, context)
        except TemplateRenderError as e:
            raise TemplateRenderFailedError(
                route.template.path, e, ErrorContext(route_path=route.path),
            ) from e
