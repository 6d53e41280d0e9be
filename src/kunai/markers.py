"""
Marker decorators recognised by member introspection and the standard heuristics.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from .settings import INJECT_MARKER

F = TypeVar("F")

CONSTRUCTOR_MARKER = "__kunai_constructor__"
INTERNAL_MARKER = "__kunai_internal__"


def _mark(member: Any, attribute: str) -> None:
    if isinstance(member, property):
        # property objects have no __dict__, so the accessors carry the marker
        for accessor in (member.fget, member.fset):
            if accessor is not None:
                setattr(accessor, attribute, True)
    elif isinstance(member, (classmethod, staticmethod)):
        setattr(member.__func__, attribute, True)
    else:
        setattr(member, attribute, True)


def inject(member: F) -> F:
    """
    Mark a constructor, property or method for injection.

    Example:
        ```python
        class Dog:
            @inject
            @property
            def leash(self) -> Leash: ...

            @leash.setter
            def leash(self, value: Leash) -> None: ...
        ```
    """
    _mark(member, INJECT_MARKER)
    return member


def constructor(member: F) -> F:
    """Declare a classmethod as an additional constructor of its class."""
    if not isinstance(member, classmethod):
        raise TypeError("@constructor must be applied to a classmethod")
    _mark(member, CONSTRUCTOR_MARKER)
    return member


def internal(member: F) -> F:
    """Declare an ``__init__`` as non-public."""
    _mark(member, INTERNAL_MARKER)
    return member


def has_marker(member: Callable[..., Any] | property | None, attribute: str) -> bool:
    """Check whether a function, or either accessor of a property, carries a marker."""
    if member is None:
        return False
    if isinstance(member, property):
        return has_marker(member.fget, attribute) or has_marker(member.fset, attribute)
    return bool(getattr(member, attribute, False))
