"""
Member introspection for implementation types.

Enumerates constructors, properties and methods of a class in declaration
order: the class itself first, then each base along the MRO, following the
body order of every class. A name defined on a nearer class hides the same
name on farther ones.
"""

from __future__ import annotations

import functools
import inspect
import types
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, get_origin, get_type_hints

from .generics import runtime_class
from .markers import CONSTRUCTOR_MARKER, INTERNAL_MARKER, has_marker

DELEGATE_TYPES: tuple[type, ...] = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    functools.partial,
)

_EXCLUDED_METHODS = frozenset({"__init__", "__new__", "__init_subclass__", "__class_getitem__"})


def is_delegate_type(target: Any) -> bool:
    """Check if ``target`` describes a callable type rather than a constructible class."""
    if target is Callable or get_origin(target) is Callable:
        return True
    return isinstance(target, type) and issubclass(target, DELEGATE_TYPES)


def is_private_name(name: str, declaring_type: type) -> bool:
    """Check if ``name`` is a name-mangled private attribute of ``declaring_type``."""
    return name.startswith(f"_{declaring_type.__name__.lstrip('_')}__")


def is_public_name(name: str) -> bool:
    return not name.startswith("_") or (name.startswith("__") and name.endswith("__"))


def type_hints(function: Any) -> dict[str, Any]:
    """Get evaluated type hints, falling back to raw annotations for unresolvable forward references."""
    try:
        return get_type_hints(function)
    except (NameError, TypeError):
        return dict(getattr(function, "__annotations__", {}))


def _signature_parameters(function: Any) -> list[inspect.Parameter]:
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return []
    return [
        parameter
        for parameter in signature.parameters.values()
        if parameter.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]


@dataclass(frozen=True)
class MemberInfo(ABC):
    """Base descriptor of a class member."""

    name: str
    declaring_type: type

    @property
    def is_public(self) -> bool:
        return is_public_name(self.name)

    @property
    def is_private(self) -> bool:
        return is_private_name(self.name, self.declaring_type)

    @abstractmethod
    def marker(self, attribute: str) -> bool:
        """Check whether the member carries the given marker attribute."""

    def __str__(self) -> str:
        return f"{self.declaring_type.__name__}.{self.name}"


@dataclass(frozen=True)
class ConstructorInfo(MemberInfo):
    """A way of creating instances: ``__init__`` or a ``@constructor`` classmethod."""

    function: Any
    factory: Callable[..., Any]
    parameters: tuple[inspect.Parameter, ...] = ()

    @property
    def is_primary(self) -> bool:
        return self.name == "__init__"

    @property
    def is_public(self) -> bool:
        if self.is_primary:
            return not has_marker(self.function, INTERNAL_MARKER)
        return is_public_name(self.name)

    def marker(self, attribute: str) -> bool:
        return has_marker(self.function, attribute)

    def type_hints(self) -> dict[str, Any]:
        return type_hints(self.function)


@dataclass(frozen=True)
class PropertyInfo(MemberInfo):
    """A ``property`` descriptor."""

    descriptor: property

    @property
    def fget(self) -> Callable[[Any], Any] | None:
        return self.descriptor.fget

    @property
    def fset(self) -> Callable[[Any, Any], None] | None:
        return self.descriptor.fset

    @property
    def can_write(self) -> bool:
        return self.descriptor.fset is not None

    @property
    def type_hint(self) -> Any:
        """The declared property type: the getter's return hint, else the setter's value hint."""
        if self.fget is not None:
            hint = type_hints(self.fget).get("return")
            if hint is not None:
                return hint
        if self.fset is not None:
            hints = type_hints(self.fset)
            hints.pop("return", None)
            if hints:
                return next(iter(hints.values()))
        return None

    def marker(self, attribute: str) -> bool:
        return has_marker(self.descriptor, attribute)


@dataclass(frozen=True)
class MethodInfo(MemberInfo):
    """A plain instance method."""

    function: Any

    @property
    def parameters(self) -> list[inspect.Parameter]:
        return _signature_parameters(self.function)[1:]

    def marker(self, attribute: str) -> bool:
        return has_marker(self.function, attribute)


class TypeIntrospector:
    """Discovers the members of a class."""

    @staticmethod
    def constructors(target: Any) -> list[ConstructorInfo]:
        """
        Enumerate every constructor of ``target``, public or not.

        The effective ``__init__`` comes first, followed by ``@constructor``
        classmethods in declaration order. Private constructors of base classes
        are not visible.
        """
        cls = runtime_class(target)
        result: list[ConstructorInfo] = []

        init_owner = next((c for c in cls.__mro__ if "__init__" in vars(c)), object)
        init = vars(init_owner)["__init__"]
        init_params = () if init is object.__init__ else tuple(_signature_parameters(init)[1:])
        result.append(ConstructorInfo("__init__", init_owner, init, target, init_params))

        seen: set[str] = {"__init__"}
        for owner in cls.__mro__:
            for name, attribute in vars(owner).items():
                if name in seen:
                    continue
                seen.add(name)
                if not isinstance(attribute, classmethod):
                    continue
                function = attribute.__func__
                if not has_marker(function, CONSTRUCTOR_MARKER):
                    continue
                if owner is not cls and is_private_name(name, owner):
                    continue
                factory = getattr(cls, name)
                params = tuple(_signature_parameters(function)[1:])
                result.append(ConstructorInfo(name, owner, function, factory, params))
        return result

    @staticmethod
    def properties(target: Any) -> list[PropertyInfo]:
        """
        Enumerate the properties visible on ``target``.

        Each name is resolved to its most-derived declaration. Private
        properties of base classes are not visible.
        """
        cls = runtime_class(target)
        result: list[PropertyInfo] = []
        seen: set[str] = set()
        for owner in cls.__mro__:
            for name, attribute in vars(owner).items():
                if name in seen:
                    continue
                seen.add(name)
                if not isinstance(attribute, property):
                    continue
                if owner is not cls and is_private_name(name, owner):
                    continue
                result.append(PropertyInfo(name, owner, attribute))
        return result

    @staticmethod
    def declared_properties(target: Any) -> list[PropertyInfo]:
        """Enumerate the properties declared directly in the body of ``target``."""
        cls = runtime_class(target)
        return [
            PropertyInfo(name, cls, attribute)
            for name, attribute in vars(cls).items()
            if isinstance(attribute, property)
        ]

    @staticmethod
    def methods(target: Any) -> list[MethodInfo]:
        """Enumerate the instance methods visible on ``target``."""
        cls = runtime_class(target)
        result: list[MethodInfo] = []
        seen: set[str] = set()
        for owner in cls.__mro__:
            for name, attribute in vars(owner).items():
                if name in seen:
                    continue
                seen.add(name)
                if name in _EXCLUDED_METHODS or not inspect.isfunction(attribute):
                    continue
                if owner is not cls and is_private_name(name, owner):
                    continue
                result.append(MethodInfo(name, owner, attribute))
        return result
