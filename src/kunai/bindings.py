"""
Binding definitions.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .generics import close_generic, generic_definition
from .parameters import Parameter, PropertyValue


class BindingTarget(Enum):
    """How a binding produces its instances."""

    SELF = "self"
    TYPE = "type"
    PROVIDER = "provider"
    METHOD = "method"
    CONSTANT = "constant"


@dataclass(frozen=True)
class Binding:
    """A registered mapping from a service type to an activation strategy."""

    service: Any
    target: BindingTarget
    implementation: type | Any | Callable[..., Any]
    condition: Callable[[Any], bool] | None = None
    is_default: bool = True
    name: str | None = None
    parameters: tuple[Parameter, ...] = ()
    is_implicit: bool = False

    @classmethod
    def to_self(cls, service: type) -> Binding:
        """Bind a concrete type to itself."""
        return cls(service, BindingTarget.SELF, service)

    @classmethod
    def to_type(cls, service: Any, implementation: type, **kwargs: Any) -> Binding:
        """Bind a service to an implementation type."""
        return cls(service, BindingTarget.TYPE, implementation, **kwargs)

    @property
    def is_conditional(self) -> bool:
        """Check if this binding carries a condition."""
        return self.condition is not None

    def matches(self, request: Any) -> bool:
        """Evaluate the binding's condition against a request."""
        if self.condition is None:
            return True
        return self.condition(request)

    def property_values(self) -> dict[str, PropertyValue]:
        """Get the property overrides attached to this binding, by property name."""
        return {p.name: p for p in self.parameters if isinstance(p, PropertyValue)}

    def specialize(self, closed_service: Any) -> Binding:
        """
        Create a copy of this open generic binding for a constructed generic service.

        Args:
            closed_service: The constructed generic that was requested, e.g. ``Box[int]``

        Returns:
            A binding for ``closed_service`` whose implementation is closed over
            the same type arguments when it is a generic type
        """
        implementation = self.implementation
        if self.target in (BindingTarget.SELF, BindingTarget.TYPE):
            implementation = close_generic(generic_definition(closed_service), closed_service, implementation)
        return dataclasses.replace(self, service=closed_service, implementation=implementation)

    def __str__(self) -> str:
        service_name = getattr(self.service, "__name__", str(self.service))
        impl_name = getattr(self.implementation, "__name__", str(self.implementation))
        name_str = f" named {self.name}" if self.name else ""
        cond_str = " (conditional)" if self.condition is not None else ""
        return f"{service_name}{name_str} -> {impl_name} ({self.target.value}){cond_str}"
