"""Route Config Schemas — pydantic models for the JSON routes file.

Invariants:
    - A param is "$var" (positional), ":label $var" (named) or {"label", "variable"}
    - Route paths start with "/" and carry no trailing slash except for "/" itself
    - Missing route fields are filled from `defaults`; the result is still raw text,
      validated later by core/route.py
    - Each route entry is validated on its own so one bad entry cannot sink the file

Design Decisions:
    - Shape checks here (pydantic), meaning checks in core (domain types)
    - model_validator(mode="before") turns the directive string form into fields
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator


class ParamDeclaration(BaseModel):
    """One `sqlite_param`-style declaration."""
    label: str = ""
    variable: str

    @model_validator(mode="before")
    @classmethod
    def from_directive(cls, data: Any) -> Any:
        if isinstance(data, str):
            parts = data.split()
            if len(parts) == 1:
                return {"variable": parts[0]}
            if len(parts) == 2:
                return {"label": parts[0], "variable": parts[1]}
            raise ValueError("param must be '$variable' or ':label $variable'")
        return data

    def as_pair(self) -> tuple[str, str]:
        return (self.label, self.variable)


class RouteDefaults(BaseModel):
    """Values inherited by every route that leaves them out."""
    database: str | None = None
    query: str | None = None
    template: str | None = None
    params: list[ParamDeclaration] | None = None


class RouteConfig(RouteDefaults):
    path: str = Field(min_length=1, pattern=r"^/")

    @field_validator("path")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/") or "/"

    def merged_with(self, defaults: RouteDefaults) -> "RouteConfig":
        """Fill unset fields from defaults (child settings win)."""
        return self.model_copy(update={
            "database": self.database or defaults.database,
            "query": self.query or defaults.query,
            "template": self.template or defaults.template,
            "params": self.params if self.params else defaults.params,
        })


class RoutesFile(BaseModel):
    """Top-level routes file."""
    defaults: RouteDefaults = Field(default_factory=RouteDefaults)
    routes: list[dict[str, Any]] = Field(default_factory=list)
