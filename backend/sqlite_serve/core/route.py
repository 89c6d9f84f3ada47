"""Route — one configured unit of work, built once at load time.

Invariants:
    - A Route exists only if every field parsed and bindings share one mode
    - Route is frozen; request processing reads it and never writes to it
    - template_dir is the route's local search root; global_template_dir is optional
    - search_roots() is always [local, global?], local first

Design Decisions:
    - build_route takes raw strings so every config source goes through the same parsers
    - Route path and template_dir are plain strings: the core does no filesystem work
"""

from collections.abc import Iterable
from dataclasses import dataclass

from sqlite_serve.core.bindings import ParameterBinding, build_bindings
from sqlite_serve.core.domain_types import (
    DatabaseLocator,
    ReadOnlyQuery,
    TemplateLocator,
)
from sqlite_serve.core.errors import ConfigError


@dataclass(frozen=True)
class Route:
    """Validated route configuration, shared by reference across requests."""
    path: str
    database: DatabaseLocator
    query: ReadOnlyQuery
    template: TemplateLocator
    bindings: tuple[ParameterBinding, ...]
    template_dir: str
    global_template_dir: str | None = None

    def search_roots(self) -> list[str]:
        roots = [self.template_dir]
        if self.global_template_dir:
            roots.append(self.global_template_dir)
        return roots


def build_route(
    path: str,
    database: str,
    query: str,
    template: str,
    params: Iterable[tuple[str | None, str]] = (),
    template_dir: str = ".",
    global_template_dir: str | None = None,
) -> Route:
    """Parse raw route settings into a Route. Raises ConfigError on the first bad field."""
    try:
        return Route(
            path=path,
            database=DatabaseLocator.parse(database),
            query=ReadOnlyQuery.parse(query),
            template=TemplateLocator.parse(template),
            bindings=build_bindings(params),
            template_dir=template_dir,
            global_template_dir=global_template_dir or None,
        )
    except ConfigError as e:
        e.context.route_path = path
        raise
