"""Request Variable Resolver — tests for nginx-style variable lookup.

Tests cover:
    - arg_<name>: first occurrence, percent and plus decoding, UTF-8
    - arg_<name> with invalid UTF-8 -> DECODE; absent -> NOT_FOUND
    - http_<name> with "_" matching "-"; cookie_<name>
    - Request line variables (uri, args, request_uri, request_method, host, remote_addr)
    - Unknown names -> NOT_FOUND
"""

import pytest
from fastapi import Request

from sqlite_serve.core.errors import ResolutionFailure, VariableResolutionError
from sqlite_serve.infrastructure.request_variables import RequestVariableResolver


def _resolver(query=b"", headers=None, path="/books"):
    scope = {
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "path": path,
        "root_path": "",
        "query_string": query,
        "headers": [(b"host", b"library.test")] + list(headers or []),
        "server": ("library.test", 80),
        "client": ("10.0.0.7", 51234),
    }
    return RequestVariableResolver(Request(scope))


def test_argument_decoding():
    resolver = _resolver(b"q=design+patterns&author=Gamma%20et%20al&city=K%C3%B8benhavn")
    assert resolver.resolve("arg_q") == "design patterns"
    assert resolver.resolve("arg_author") == "Gamma et al"
    assert resolver.resolve("arg_city") == "København"


def test_first_argument_wins():
    assert _resolver(b"id=1&id=2").resolve("arg_id") == "1"


def test_empty_argument_is_empty_text():
    assert _resolver(b"id=&x=1").resolve("arg_id") == ""


def test_absent_argument_not_found():
    with pytest.raises(VariableResolutionError) as exc:
        _resolver(b"other=1").resolve("arg_id")
    assert exc.value.kind is ResolutionFailure.NOT_FOUND
    assert exc.value.name == "arg_id"


def test_invalid_utf8_argument_is_decode_failure():
    with pytest.raises(VariableResolutionError) as exc:
        _resolver(b"id=%ff%fe").resolve("arg_id")
    assert exc.value.kind is ResolutionFailure.DECODE


def test_invalid_bytes_elsewhere_do_not_matter():
    assert _resolver(b"junk=%ff&id=3").resolve("arg_id") == "3"


def test_headers_and_cookies():
    resolver = _resolver(headers=[
        (b"x-api-key", b"secret"),
        (b"cookie", b"session=abc123; theme=dark"),
    ])
    assert resolver.resolve("http_x_api_key") == "secret"
    assert resolver.resolve("http_host") == "library.test"
    assert resolver.resolve("cookie_theme") == "dark"
    with pytest.raises(VariableResolutionError):
        resolver.resolve("cookie_missing")
    with pytest.raises(VariableResolutionError):
        resolver.resolve("http_authorization")


def test_request_line_variables():
    resolver = _resolver(b"id=1&page=2", path="/books/detail")
    assert resolver.resolve("uri") == "/books/detail"
    assert resolver.resolve("args") == "id=1&page=2"
    assert resolver.resolve("request_uri") == "/books/detail?id=1&page=2"
    assert resolver.resolve("request_method") == "GET"
    assert resolver.resolve("host") == "library.test"
    assert resolver.resolve("scheme") == "http"
    assert resolver.resolve("remote_addr") == "10.0.0.7"


def test_request_uri_without_query():
    assert _resolver().resolve("request_uri") == "/books"


def test_unknown_variable_not_found():
    with pytest.raises(VariableResolutionError) as exc:
        _resolver().resolve("server_secret")
    assert exc.value.kind is ResolutionFailure.NOT_FOUND
