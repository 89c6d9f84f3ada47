"""Capability Protocols — contracts between the core and the shell.

Invariants:
    - Core NEVER imports from infrastructure/, services/ or api/
    - Every effect (variables, database, filesystem, rendering) goes through a Protocol
    - Implementations raise the matching CapabilityError subclass on failure
    - Parameter values are always text; executors must not expect coerced types

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Sync methods: the processor is single-threaded and never suspends; hosts
      wanting concurrency run whole requests in parallel
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from sqlite_serve.core.bindings import ParameterValues
from sqlite_serve.core.domain_types import (
    DatabaseLocator,
    ReadOnlyQuery,
    TemplateLocator,
)

# Column name -> None | int | float | str | bytes, in column order
ResultRow = dict[str, Any]


@dataclass(frozen=True)
class TemplateSource:
    """Template body plus where it came from."""
    name: str
    text: str
    origin: str = ""


class VariableResolver(Protocol):
    """Request-scoped lookup of host variables. Raises VariableResolutionError."""
    def resolve(self, name: str) -> str: ...


class QueryExecutor(Protocol):
    """Runs a read-only query. Raises QueryExecutionError."""
    def execute(
        self,
        database: DatabaseLocator,
        query: ReadOnlyQuery,
        params: ParameterValues,
    ) -> list[ResultRow]: ...


class TemplateLoader(Protocol):
    """Reads templates from ordered search roots; the first root holding a name wins."""
    def load(
        self, locator: TemplateLocator, search_roots: Sequence[str],
    ) -> TemplateSource: ...

    def list_partials(self, search_roots: Sequence[str]) -> dict[str, str]:
        """Every readable partial by name; unreadable files are left out, never raised."""
        ...


class TemplateRenderer(Protocol):
    """Renders a main template with partials. Raises TemplateRenderError."""
    def render(
        self,
        main: TemplateSource,
        partials: Mapping[str, str],
        context: Mapping[str, Any],
    ) -> str: ...
