"""Root conftest — shared fixtures: a small book catalog database on disk.

Invariants:
    - Every test gets its own database file under tmp_path
    - The catalog has INTEGER, TEXT, REAL, BLOB and NULL values

Design Decisions:
    - Built with SQLAlchemy so fixtures use the same driver stack as the executor
"""

import pytest
from sqlalchemy import create_engine


BOOKS = [
    (1, "The Pragmatic Programmer", "Andrew Hunt", 2019, "Programming", 4.5, None),
    (2, "Clean Code", "Robert C. Martin", 2008, "Programming", 4.7, b"\xde\xad"),
    (3, "Designing Data-Intensive Applications", "Martin Kleppmann", 2017, "Databases", 4.8, b"\x00\xff"),
]


@pytest.fixture
def book_db(tmp_path) -> str:
    path = tmp_path / "book_catalog.db"
    engine = create_engine(f"sqlite:///{path}")
    with engine.begin() as conn:
        conn.exec_driver_sql(
            "CREATE TABLE books (id INTEGER PRIMARY KEY, title TEXT NOT NULL, "
            "author TEXT, year INTEGER, genre TEXT, rating REAL, cover BLOB)",
        )
        conn.exec_driver_sql(
            "INSERT INTO books VALUES (?, ?, ?, ?, ?, ?, ?)", BOOKS,
        )
    engine.dispose()
    return str(path)
