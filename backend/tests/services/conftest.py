"""Service test fixtures — a small site on disk + FastAPI test client.

Invariants:
    - Every test gets its own document root, shared template dir, routes file and database
    - Apps are built through create_app(Settings(...)), the same path production uses
    - make_client writes the routes file, then builds the app (routes load once)

Design Decisions:
    - Real adapters end to end: SQLite file, template files, chevron
    - The books route has a local header.hbs that shadows the shared one
"""

import json
from dataclasses import dataclass
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from sqlite_serve.config import Settings
from sqlite_serve.main import create_app
from tests.services.site_routes import BOOKS_ROUTE, SEARCH_ROUTE, TEMPLATES


@dataclass
class Site:
    root: Path
    document_root: Path
    shared: Path
    routes_file: Path
    database: str


@pytest.fixture
def site(tmp_path, book_db) -> Site:
    for relative, body in TEMPLATES.items():
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
    return Site(
        root=tmp_path,
        document_root=tmp_path / "www",
        shared=tmp_path / "shared",
        routes_file=tmp_path / "routes.json",
        database=book_db,
    )


@pytest.fixture
def make_client(site):
    """Build a test client for the given route entries."""
    def _make(routes, defaults=None, **overrides) -> AsyncClient:
        site.routes_file.write_text(json.dumps({
            "defaults": {"database": site.database, **(defaults or {})},
            "routes": routes,
        }), encoding="utf-8")
        settings = Settings(
            routes_file=str(site.routes_file),
            document_root=str(site.document_root),
            global_templates_dir=str(site.shared),
            **overrides,
        )
        app = create_app(settings)
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    return _make


@pytest.fixture
async def client(make_client):
    """Client serving the books and search routes."""
    async with make_client([BOOKS_ROUTE, SEARCH_ROUTE]) as c:
        yield c
