"""Request Variable Resolver — nginx-style variable names over an HTTP request.

Invariants:
    - One resolver per request; it only reads the request
    - arg_<name>    -> first query argument <name>, percent-decoded as UTF-8
    - http_<name>   -> request header <name> ("_" matches "-"), decoded as UTF-8
    - cookie_<name> -> cookie value
    - uri, args, request_uri, request_method, host, scheme, remote_addr -> request line data
    - Unknown names and absent arguments/headers/cookies raise NOT_FOUND
    - Bytes that are not valid UTF-8 raise DECODE; nothing is replaced silently
"""

from collections.abc import Callable
from urllib.parse import unquote_to_bytes

from fastapi import Request

from sqlite_serve.core.errors import ResolutionFailure, VariableResolutionError


def _unquote(raw: bytes) -> bytes:
    return unquote_to_bytes(raw.replace(b"+", b" "))


class RequestVariableResolver:
    """VariableResolver bound to one FastAPI request."""

    def __init__(self, request: Request):
        self._request = request
        self._simple: dict[str, Callable[[], str | None]] = {
            "uri": lambda: request.url.path,
            "args": self._query_string,
            "query_string": self._query_string,
            "request_uri": self._request_uri,
            "request_method": lambda: request.method,
            "host": lambda: request.url.hostname,
            "scheme": lambda: request.url.scheme,
            "remote_addr": lambda: request.client.host if request.client else None,
        }

    def resolve(self, name: str) -> str:
        if name.startswith("arg_"):
            value = self._argument(name, name[len("arg_"):])
        elif name.startswith("http_"):
            value = self._header(name, name[len("http_"):])
        elif name.startswith("cookie_"):
            value = self._request.cookies.get(name[len("cookie_"):])
        elif name in self._simple:
            value = self._simple[name]()
        else:
            value = None

        if value is None:
            raise VariableResolutionError(name, ResolutionFailure.NOT_FOUND)
        return value

    # ─── Sources ─────────────────────────────────────────────────

    def _raw_query(self) -> bytes:
        return self._request.scope.get("query_string", b"")

    def _query_string(self) -> str:
        return self._raw_query().decode("latin-1")

    def _request_uri(self) -> str:
        query = self._query_string()
        return f"{self._request.url.path}?{query}" if query else self._request.url.path

    def _argument(self, name: str, key: str) -> str | None:
        for part in self._raw_query().split(b"&"):
            raw_key, _, raw_value = part.partition(b"=")
            if not raw_key or _unquote(raw_key).decode("utf-8", "replace") != key:
                continue
            try:
                return _unquote(raw_value).decode("utf-8")
            except UnicodeDecodeError as e:
                raise VariableResolutionError(
                    name, ResolutionFailure.DECODE, str(e),
                ) from e
        return None

    def _header(self, name: str, key: str) -> str | None:
        wanted = key.lower().replace("_", "-").encode("latin-1", "replace")
        for header, value in self._request.scope.get("headers", []):
            if header.lower() == wanted:
                try:
                    return value.decode("utf-8")
                except UnicodeDecodeError as e:
                    raise VariableResolutionError(
                        name, ResolutionFailure.DECODE, str(e),
                    ) from e
        return None
