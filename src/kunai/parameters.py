"""
Parameters that override values the engine would otherwise inject.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Parameter:
    """
    A named value attached to a binding or an activation request.

    A parameter carries either a constant ``value``, returned as is even when
    it is callable, or a ``factory`` invoked with the injection target each
    time the value is read.
    """

    name: str
    value: Any = None
    factory: Callable[[Any], Any] | None = None
    should_inherit: bool = False

    def __post_init__(self) -> None:
        if self.value is not None and self.factory is not None:
            raise ValueError(f"Parameter '{self.name}' takes either a value or a factory, not both")

    def get_value(self, target: Any = None) -> Any:
        """Get the value of this parameter for the given injection target."""
        if self.factory is not None:
            return self.factory(target)
        return self.value

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.name})"


@dataclass(frozen=True)
class ConstructorArgument(Parameter):
    """Overrides the constructor parameter with the same name."""


@dataclass(frozen=True)
class PropertyValue(Parameter):
    """Overrides the injected value of the property with the same name."""


def find_parameter(parameters: tuple[Parameter, ...], kind: type[Parameter], name: str) -> Parameter | None:
    """Find the first parameter of the given kind with the given name."""
    for parameter in parameters:
        if isinstance(parameter, kind) and parameter.name == name:
            return parameter
    return None
