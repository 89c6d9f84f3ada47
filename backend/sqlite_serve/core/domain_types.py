"""Domain Types — validated wrappers that replace bare configuration strings.

Invariants:
    - Every type is built only through parse(); a constructed value is always valid
    - parse() is pure: returns the value or raises a ValidationError subclass
    - ReadOnlyQuery keeps the original text verbatim (casing and whitespace)
    - VariableReference keeps both the raw text and the sigil-stripped name
    - ParamLabel "" means positional, any ":"-prefixed name means named

Design Decisions:
    - Frozen dataclasses over NewType: validation must run, and values are shared
      across threads by reference
    - Markers live in module constants so tests and adapters agree on them
"""

import re
from dataclasses import dataclass

from sqlite_serve.core.errors import (
    InvalidDatabaseLocatorError,
    InvalidParamLabelError,
    InvalidQueryError,
    InvalidTemplateLocatorError,
    InvalidVariableReferenceError,
)


# ─── Markers ─────────────────────────────────────────────────────

READ_ONLY_MARKER = "select"
TEMPLATE_EXTENSION = ".hbs"
VARIABLE_SIGIL = "$"
PARAM_LABEL_MARKER = ":"

_LEADING_TOKEN = re.compile(r"[A-Za-z]+")
_PARAM_LABEL = re.compile(re.escape(PARAM_LABEL_MARKER) + r".+", re.DOTALL)
_PATH_SEPARATORS = re.compile(r"[\\/]")


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class DatabaseLocator:
    """Identifier or filesystem path of a data source."""
    raw: str

    @classmethod
    def parse(cls, raw: str) -> "DatabaseLocator":
        if not isinstance(raw, str) or not raw.strip():
            raise InvalidDatabaseLocatorError("database locator cannot be empty", raw)
        return cls(raw)

    def as_text(self) -> str:
        return self.raw


@dataclass(frozen=True)
class ReadOnlyQuery:
    """Query text whose leading keyword is SELECT."""
    text: str

    @classmethod
    def parse(cls, raw: str) -> "ReadOnlyQuery":
        if not isinstance(raw, str) or not raw.strip():
            raise InvalidQueryError("query cannot be empty", raw)
        token = _LEADING_TOKEN.match(raw.strip())
        if token is None or token.group(0).casefold() != READ_ONLY_MARKER:
            raise InvalidQueryError(
                f"only {READ_ONLY_MARKER.upper()} queries are allowed", raw,
            )
        return cls(raw)


@dataclass(frozen=True)
class TemplateLocator:
    """Relative path of a template file below a search root."""
    path: str

    @classmethod
    def parse(cls, raw: str) -> "TemplateLocator":
        if not isinstance(raw, str) or not raw:
            raise InvalidTemplateLocatorError("template path cannot be empty", raw)
        if not raw.endswith(TEMPLATE_EXTENSION) or raw == TEMPLATE_EXTENSION:
            raise InvalidTemplateLocatorError(
                f"template must be a {TEMPLATE_EXTENSION} file", raw,
            )
        if raw.startswith(("/", "\\")) or re.match(r"[A-Za-z]:", raw):
            raise InvalidTemplateLocatorError("template path must be relative", raw)
        if ".." in _PATH_SEPARATORS.split(raw):
            raise InvalidTemplateLocatorError(
                "template path cannot contain '..' segments", raw,
            )
        return cls(raw)

    @property
    def name(self) -> str:
        """Filename without directory or extension."""
        return _PATH_SEPARATORS.split(self.path)[-1][: -len(TEMPLATE_EXTENSION)]


@dataclass(frozen=True)
class VariableReference:
    """$-prefixed name of a request variable."""
    raw: str

    @classmethod
    def parse(cls, raw: str) -> "VariableReference":
        if not isinstance(raw, str) or not raw:
            raise InvalidVariableReferenceError("variable name cannot be empty", raw)
        if not raw.startswith(VARIABLE_SIGIL):
            raise InvalidVariableReferenceError(
                f"variable name must start with {VARIABLE_SIGIL}", raw,
            )
        if len(raw) == len(VARIABLE_SIGIL):
            raise InvalidVariableReferenceError(
                f"variable name after {VARIABLE_SIGIL} cannot be empty", raw,
            )
        return cls(raw)

    @property
    def name(self) -> str:
        return self.raw[len(VARIABLE_SIGIL):]


@dataclass(frozen=True)
class ParamLabel:
    """Named-parameter label (":book_id"), or "" for positional."""
    text: str = ""

    @classmethod
    def parse(cls, raw: str) -> "ParamLabel":
        if raw == "":
            return cls("")
        if not isinstance(raw, str) or not _PARAM_LABEL.fullmatch(raw):
            raise InvalidParamLabelError(
                f"parameter label must be empty or {PARAM_LABEL_MARKER} "
                f"followed by a name",
                raw,
            )
        return cls(raw)

    @classmethod
    def positional(cls) -> "ParamLabel":
        return cls("")

    @property
    def is_positional(self) -> bool:
        return self.text == ""
