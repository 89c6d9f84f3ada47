"""Route Registry — loads the routes file into validated Route objects.

Invariants:
    - A bad route entry is recorded as a RouteFailure; every other route still loads
    - A missing or unparseable routes file fails the whole load (RoutesFileError)
    - Routes inherit database/query/template/params from `defaults` when unset
    - Each route's local template directory is document_root/<route path>
    - Duplicate paths: the first declaration wins, later ones are failures
    - The registry is built once at startup and only read afterwards

Design Decisions:
    - Failures kept as data (not exceptions) so readiness can report them
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pydantic

from sqlite_serve.config import Settings
from sqlite_serve.core.errors import ConfigError
from sqlite_serve.core.route import Route, build_route
from sqlite_serve.schemas.route_config import RouteConfig, RouteDefaults, RoutesFile

logger = logging.getLogger(__name__)


class RoutesFileError(ConfigError):
    """The routes file itself could not be read or parsed."""
    def __init__(self, path: str, detail: str):
        super().__init__(f"cannot load routes file {path}: {detail}", "ROUTES_FILE_INVALID")
        self.path = path


@dataclass(frozen=True)
class RouteFailure:
    path: str
    code: str
    message: str


@dataclass
class RouteRegistry:
    routes: dict[str, Route] = field(default_factory=dict)
    failures: list[RouteFailure] = field(default_factory=list)

    def get(self, path: str) -> Route | None:
        return self.routes.get(path)


def read_routes_file(path: str) -> RoutesFile:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return RoutesFile.model_validate(data)
    except OSError as e:
        raise RoutesFileError(path, str(e)) from e
    except (json.JSONDecodeError, pydantic.ValidationError) as e:
        raise RoutesFileError(path, str(e)) from e


def local_template_dir(document_root: str, route_path: str) -> str:
    return str(Path(document_root) / route_path.strip("/"))


def _entry_path(entry: Any, index: int) -> str:
    if isinstance(entry, dict) and isinstance(entry.get("path"), str):
        return entry["path"]
    return f"<route #{index}>"


def _build_one(
    entry: dict[str, Any],
    defaults: RouteDefaults,
    document_root: str,
    global_templates_dir: str | None,
) -> Route:
    config = RouteConfig.model_validate(entry).merged_with(defaults)
    return build_route(
        path=config.path,
        database=config.database or "",
        query=config.query or "",
        template=config.template or "",
        params=[p.as_pair() for p in config.params or []],
        template_dir=local_template_dir(document_root, config.path),
        global_template_dir=global_templates_dir,
    )


def build_registry(
    routes_file: RoutesFile,
    document_root: str = ".",
    global_templates_dir: str | None = None,
) -> RouteRegistry:
    """Validate every route entry; collect failures instead of stopping."""
    registry = RouteRegistry()
    for index, entry in enumerate(routes_file.routes):
        path = _entry_path(entry, index)
        try:
            route = _build_one(entry, routes_file.defaults, document_root, global_templates_dir)
        except pydantic.ValidationError as e:
            _record_failure(registry, path, "ROUTE_SCHEMA_INVALID", str(e))
            continue
        except ConfigError as e:
            _record_failure(registry, path, e.code, e.message)
            continue

        if route.path in registry.routes:
            _record_failure(
                registry, route.path, "DUPLICATE_ROUTE",
                f"route {route.path} declared more than once",
            )
            continue
        registry.routes[route.path] = route
        logger.info(
            f"Loaded route {route.path} ({len(route.bindings)} params)",
            extra={"route_path": route.path, "template": route.template.path},
        )
    return registry


def _record_failure(registry: RouteRegistry, path: str, code: str, message: str):
    registry.failures.append(RouteFailure(path, code, message))
    logger.error(
        f"Route {path} disabled: {message}",
        extra={"route_path": path, "error_code": code},
    )


def load_registry(settings: Settings) -> RouteRegistry:
    routes_file = read_routes_file(settings.routes_file)
    return build_registry(
        routes_file,
        document_root=settings.document_root,
        global_templates_dir=settings.global_templates_dir,
    )
