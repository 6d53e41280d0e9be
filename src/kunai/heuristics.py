"""
Injection heuristics deciding which properties and methods receive injected values.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from .introspection import MemberInfo, PropertyInfo
from .settings import Settings


class InjectionHeuristic(ABC):
    """A predicate deciding whether a member should be injected."""

    @abstractmethod
    def should_inject(self, member: MemberInfo) -> bool:
        """Return True if ``member`` should be injected."""


class StandardInjectionHeuristic(InjectionHeuristic):
    """
    Approves members marked with ``@inject``.

    Properties additionally need a setter.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings if settings is not None else Settings()

    def should_inject(self, member: MemberInfo) -> bool:
        if not member.marker(self.settings.inject_marker):
            return False
        if isinstance(member, PropertyInfo):
            return member.can_write
        return True


class PredicateInjectionHeuristic(InjectionHeuristic):
    """Adapts a plain callable to the heuristic interface."""

    def __init__(self, predicate: Callable[[MemberInfo], bool]):
        self._predicate = predicate

    def should_inject(self, member: MemberInfo) -> bool:
        return bool(self._predicate(member))
