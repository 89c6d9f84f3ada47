"""SQLite Query Executor — runs a route's read-only query through SQLAlchemy.

Invariants:
    - The database is opened read-only (SQLite URI mode=ro); a missing file is an error
    - One engine per call, disposed afterwards (no cross-request pooling or caching)
    - Positional values bind to `?`, named values to `:label`; all values are text
    - Every SQLAlchemy exception is mapped to QueryExecutionError (core/errors.py)
    - Rows come back as column-ordered dicts of raw SQLite values (bytes for blobs)

Design Decisions:
    - exec_driver_sql over text(): keeps `?` placeholders and the exact query text
    - NullPool: a pool would outlive the request and hold the file open
"""

import logging
from urllib.parse import quote

from sqlalchemy import create_engine
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.pool import NullPool

from sqlite_serve.core.bindings import ParameterValues
from sqlite_serve.core.capabilities import ResultRow
from sqlite_serve.core.domain_types import (
    PARAM_LABEL_MARKER,
    DatabaseLocator,
    ReadOnlyQuery,
)
from sqlite_serve.core.errors import QueryExecutionError

logger = logging.getLogger(__name__)


def read_only_url(database: DatabaseLocator) -> str:
    """SQLAlchemy URL opening the file through SQLite's URI read-only mode."""
    return f"sqlite:///file:{quote(database.as_text())}?mode=ro&uri=true"


def driver_parameters(params: ParameterValues) -> tuple | dict:
    """sqlite3 wants a tuple for `?` and label-without-marker keys for `:label`."""
    if isinstance(params, dict):
        return {
            label.removeprefix(PARAM_LABEL_MARKER): value
            for label, value in params.items()
        }
    return tuple(params)


class SqliteQueryExecutor:
    """QueryExecutor backed by SQLAlchemy's pysqlite dialect."""

    def execute(
        self,
        database: DatabaseLocator,
        query: ReadOnlyQuery,
        params: ParameterValues,
    ) -> list[ResultRow]:
        engine = create_engine(read_only_url(database), poolclass=NullPool)
        try:
            with engine.connect() as conn:
                result = conn.exec_driver_sql(query.text, driver_parameters(params))
                columns = list(result.keys())
                return [dict(zip(columns, row)) for row in result]
        except OperationalError as e:
            logger.debug(f"SQLite operational error on {database.as_text()}: {e}")
            raise QueryExecutionError(
                f"cannot run query on {database.as_text()}: {e.orig}",
            ) from e
        except DBAPIError as e:
            raise QueryExecutionError(f"database driver error: {e.orig}") from e
        except SQLAlchemyError as e:
            raise QueryExecutionError(f"query failed: {e}") from e
        finally:
            engine.dispose()
