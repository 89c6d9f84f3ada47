"""Fake Capabilities — hand-written test doubles for the four core Protocols.

Invariants:
    - Every fake records its calls so tests can assert order and call counts
    - Fakes raise the same CapabilityError subclasses real adapters raise

Design Decisions:
    - Flat classes (no inheritance, no unittest.mock): explicit, easy to debug
"""

from sqlite_serve.core.capabilities import TemplateSource
from sqlite_serve.core.errors import (
    QueryExecutionError,
    ResolutionFailure,
    TemplateLoadError,
    TemplateRenderError,
    VariableResolutionError,
)


class FakeResolver:
    def __init__(self, values: dict[str, str] | None = None, decode_errors=()):
        self.values = values or {}
        self.decode_errors = set(decode_errors)
        self.calls: list[str] = []

    def resolve(self, name: str) -> str:
        self.calls.append(name)
        if name in self.decode_errors:
            raise VariableResolutionError(name, ResolutionFailure.DECODE, "bad bytes")
        if name not in self.values:
            raise VariableResolutionError(name, ResolutionFailure.NOT_FOUND)
        return self.values[name]


class SpyExecutor:
    def __init__(self, rows=None, error: str | None = None):
        self.rows = rows or []
        self.error = error
        self.calls: list[tuple] = []

    def execute(self, database, query, params):
        self.calls.append((database, query, params))
        if self.error:
            raise QueryExecutionError(self.error)
        return [dict(row) for row in self.rows]


class FakeLoader:
    def __init__(self, templates: dict[str, str] | None = None, partials=None):
        self.templates = templates or {}
        self.partials = partials or {}
        self.load_calls: list[tuple] = []
        self.partial_calls: list[list[str]] = []

    def load(self, locator, search_roots):
        self.load_calls.append((locator.path, list(search_roots)))
        if locator.path not in self.templates:
            raise TemplateLoadError(locator.path, "not found", not_found=True)
        return TemplateSource(locator.name, self.templates[locator.path], "memory")

    def list_partials(self, search_roots):
        self.partial_calls.append(list(search_roots))
        return dict(self.partials)


class RecordingRenderer:
    """Renders to a deterministic string and remembers what it was given."""

    def __init__(self, error: str | None = None):
        self.error = error
        self.calls: list[tuple] = []

    def render(self, main, partials, context):
        self.calls.append((main, dict(partials), context))
        if self.error:
            raise TemplateRenderError(self.error)
        rows = context["results"]
        return f"{main.name}|{sorted(partials)}|{rows!r}"
