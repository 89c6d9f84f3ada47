"""Result Rows — tests for the SQL value -> template value table.

Tests cover:
    - None, int, float, str pass through
    - bytes-like values become lowercase hex (two digits per byte, no separators)
    - Non-finite floats become None
    - Column order preserved; render context key is "results"
"""

import math

import pytest

from sqlite_serve.core.result_rows import (
    RESULTS_KEY,
    build_render_context,
    convert_row,
    convert_rows,
    convert_value,
)


@pytest.mark.parametrize("value", [None, 0, -7, 4.5, "", "Clean Code"])
def test_plain_values_pass_through(value):
    assert convert_value(value) == value


@pytest.mark.parametrize("value,expected", [
    (b"\xde\xad", "dead"),
    (b"\x00\x0f\xff", "000fff"),
    (bytearray(b"\xab"), "ab"),
    (memoryview(b"\x01\x02"), "0102"),
    (b"", ""),
])
def test_blobs_become_lowercase_hex(value, expected):
    assert convert_value(value) == expected


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_non_finite_floats_become_none(value):
    assert convert_value(value) is None


def test_unsupported_type_is_rejected():
    with pytest.raises(TypeError):
        convert_value(object())


def test_convert_row_keeps_column_order():
    row = {"z": 1, "a": b"\xff", "m": None}
    converted = convert_row(row)
    assert list(converted) == ["z", "a", "m"]
    assert converted == {"z": 1, "a": "ff", "m": None}


def test_render_context_wraps_rows():
    rows = convert_rows([{"id": 1}, {"id": 2}])
    assert build_render_context(rows) == {RESULTS_KEY: [{"id": 1}, {"id": 2}]}
    assert RESULTS_KEY == "results"
