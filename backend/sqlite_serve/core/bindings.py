"""Parameter Bindings — how a route's placeholders map onto request variables.

Invariants:
    - Declaration order is preserved exactly
    - All bindings of one route share one mode (positional XOR named)
    - A mixed declaration raises MixedBindingStyleError at load time, never per request
    - Values are always text; no coercion happens here

Design Decisions:
    - Two frozen dataclasses + a Union alias instead of a class hierarchy
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Union

from sqlite_serve.core.domain_types import ParamLabel, VariableReference
from sqlite_serve.core.errors import InvalidParamLabelError, MixedBindingStyleError


class BindingMode(str, Enum):
    NONE = "none"
    POSITIONAL = "positional"
    NAMED = "named"


@dataclass(frozen=True)
class PositionalBinding:
    """Value fills the next `?` placeholder."""
    variable: VariableReference


@dataclass(frozen=True)
class NamedBinding:
    """Value fills the `:label` placeholder."""
    label: ParamLabel
    variable: VariableReference


ParameterBinding = Union[PositionalBinding, NamedBinding]

# Resolved values handed to the query executor
ParameterValues = Union[list[str], dict[str, str]]


def build_bindings(
    pairs: Iterable[tuple[str | None, str]],
) -> tuple[ParameterBinding, ...]:
    """Parse (label, variable) pairs into bindings of a single mode."""
    bindings: list[ParameterBinding] = []
    for raw_label, raw_variable in pairs:
        label = ParamLabel.parse(raw_label or "")
        variable = VariableReference.parse(raw_variable)
        if label.is_positional:
            bindings.append(PositionalBinding(variable))
            continue
        # labels become mapping keys, so each must be unique
        if any(isinstance(b, NamedBinding) and b.label == label for b in bindings):
            raise InvalidParamLabelError("parameter label declared twice", raw_label)
        bindings.append(NamedBinding(label, variable))

    positional = sum(isinstance(b, PositionalBinding) for b in bindings)
    named = len(bindings) - positional
    if positional and named:
        raise MixedBindingStyleError(positional, named)
    return tuple(bindings)


def binding_mode(bindings: Sequence[ParameterBinding]) -> BindingMode:
    if not bindings:
        return BindingMode.NONE
    if isinstance(bindings[0], NamedBinding):
        return BindingMode.NAMED
    return BindingMode.POSITIONAL


def assemble_values(
    bindings: Sequence[ParameterBinding], values: Sequence[str],
) -> ParameterValues:
    """Pair resolved values with their bindings: list for positional, dict for named."""
    if binding_mode(bindings) is BindingMode.NAMED:
        return {
            binding.label.text: value
            for binding, value in zip(bindings, values)
        }
    return list(values)
