"""Error Hierarchy — typed, categorized exceptions for every sqlite-serve failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Configuration errors are raised once at load time and only invalidate one route
    - Request errors are raised per request; the process keeps serving others
    - Capability errors are raised by shell adapters and wrapped by the processor
    - Every error keeps the offending input or the underlying capability error

Design Decisions:
    - Single hierarchy with SqliteServeError base: FastAPI handlers catch all of it
    - ErrorContext as dataclass: observability data without coupling to logging
    - Exceptions instead of Result values: parse() either returns the value or raises
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    PARAMETER = "parameter"
    DATABASE = "database"
    TEMPLATE = "template"
    INTERNAL = "internal"


class ValidationKind(str, Enum):
    """Which raw configuration value failed to parse."""
    DATABASE_LOCATOR = "database_locator"
    QUERY = "query"
    TEMPLATE_LOCATOR = "template_locator"
    VARIABLE_REFERENCE = "variable_reference"
    PARAM_LABEL = "param_label"


class ResolutionFailure(str, Enum):
    """Why a request variable could not be resolved."""
    NOT_FOUND = "not_found"
    DECODE = "decode"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    route_path: str | None = None
    field: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class SqliteServeError(Exception):
    """Base exception for all sqlite-serve errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "route_path": self.context.route_path,
                    "field": self.context.field,
                },
            }
        }


# ─── Configuration Errors (load time) ───────────────────────────

class ConfigError(SqliteServeError):
    """Route configuration rejected at load time."""
    def __init__(
        self, message: str, code: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class ValidationError(ConfigError):
    """A raw configuration string could not be parsed into a domain type."""
    kind: ValidationKind = ValidationKind.DATABASE_LOCATOR
    code: str = "INVALID_CONFIG_VALUE"

    def __init__(
        self, reason: str, raw: object, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field = ctx.field or self.kind.value
        super().__init__(
            f"invalid {self.kind.value} {raw!r}: {reason}",
            type(self).code, ctx,
        )
        self.reason = reason
        self.raw = raw


class InvalidDatabaseLocatorError(ValidationError):
    kind = ValidationKind.DATABASE_LOCATOR
    code = "INVALID_DATABASE_LOCATOR"


class InvalidQueryError(ValidationError):
    kind = ValidationKind.QUERY
    code = "INVALID_QUERY"


class InvalidTemplateLocatorError(ValidationError):
    kind = ValidationKind.TEMPLATE_LOCATOR
    code = "INVALID_TEMPLATE_LOCATOR"


class InvalidVariableReferenceError(ValidationError):
    kind = ValidationKind.VARIABLE_REFERENCE
    code = "INVALID_VARIABLE_REFERENCE"


class InvalidParamLabelError(ValidationError):
    kind = ValidationKind.PARAM_LABEL
    code = "INVALID_PARAM_LABEL"


class MixedBindingStyleError(ConfigError):
    """A route declared both positional and named parameters."""
    def __init__(
        self, positional: int, named: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"parameters mix positional ({positional}) and named ({named}) "
            f"bindings; a route must use one style",
            "MIXED_BINDING_STYLE", context,
        )
        self.positional = positional
        self.named = named


# ─── Capability Errors (raised by shell adapters) ───────────────

class CapabilityError(Exception):
    """Failure reported by an injected capability."""


class VariableResolutionError(CapabilityError):
    def __init__(self, name: str, kind: ResolutionFailure, detail: str = ""):
        super().__init__(
            f"variable ${name} {kind.value.replace('_', ' ')}"
            + (f": {detail}" if detail else "")
        )
        self.name = name
        self.kind = kind
        self.detail = detail


class QueryExecutionError(CapabilityError):
    """Query could not be prepared or executed."""


class TemplateLoadError(CapabilityError):
    def __init__(self, locator: str, detail: str, not_found: bool = False):
        super().__init__(f"template {locator!r}: {detail}")
        self.locator = locator
        self.detail = detail
        self.not_found = not_found


class TemplateRenderError(CapabilityError):
    """Template body could not be rendered."""


# ─── Request Errors (per request) ───────────────────────────────

class RequestError(SqliteServeError):
    """A single request failed; other requests are unaffected."""
    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        cause: CapabilityError,
        http_status: int,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message, code, category, severity, context, http_status)
        self.cause = cause


class ParameterResolutionFailedError(RequestError):
    """A bound request variable was missing or undecodable."""
    def __init__(
        self, name: str, reason: VariableResolutionError,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Parameter ${name} could not be resolved: {reason}",
            "PARAMETER_RESOLUTION_FAILED", ErrorCategory.PARAMETER,
            reason, 400, ErrorSeverity.WARNING, context,
        )
        self.name = name
        self.reason = reason


class QueryExecutionFailedError(RequestError):
    def __init__(
        self, query: str, cause: QueryExecutionError,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Query execution failed: {cause}",
            "QUERY_EXECUTION_FAILED", ErrorCategory.DATABASE,
            cause, 500, ErrorSeverity.ERROR, context,
        )
        self.query = query


class TemplateNotFoundError(RequestError):
    def __init__(
        self, locator: str, cause: TemplateLoadError,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Template not found: {cause}",
            "TEMPLATE_NOT_FOUND", ErrorCategory.TEMPLATE,
            cause, 500, ErrorSeverity.ERROR, context,
        )
        self.locator = locator


class TemplateRenderFailedError(RequestError):
    def __init__(
        self, locator: str, cause: TemplateRenderError,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Template rendering failed: {cause}",
            "TEMPLATE_RENDER_FAILED", ErrorCategory.TEMPLATE,
            cause, 500, ErrorSeverity.ERROR, context,
        )
        self.locator = locator
