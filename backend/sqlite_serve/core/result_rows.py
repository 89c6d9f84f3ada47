"""Result Row Conversion — SQL values into template data.

Invariants:
    - Pure: same rows in, same data out; input rows are not modified
    - Column order is preserved
    - None -> None, int/float -> number, str -> str, blob -> lowercase hex
    - Non-finite floats (NaN, inf) become None: they have no JSON number form
"""

import math
from collections.abc import Iterable
from typing import Any

from sqlite_serve.core.capabilities import ResultRow

RESULTS_KEY = "results"


def convert_value(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    raise TypeError(f"unsupported column value type: {type(value).__name__}")


def convert_row(row: ResultRow) -> dict[str, Any]:
    return {column: convert_value(value) for column, value in row.items()}


def convert_rows(rows: Iterable[ResultRow]) -> list[dict[str, Any]]:
    return [convert_row(row) for row in rows]


def build_render_context(rows: list[dict[str, Any]]) -> dict[str, Any]:
    return {RESULTS_KEY: rows}
