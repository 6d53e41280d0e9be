"""
Member selection: decides which constructors, properties and methods of an
implementation type take part in injection.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .errors import InvalidArgumentError
from .generics import runtime_class
from .heuristics import InjectionHeuristic, StandardInjectionHeuristic
from .introspection import (
    ConstructorInfo,
    MemberInfo,
    MethodInfo,
    PropertyInfo,
    TypeIntrospector,
    is_delegate_type,
)
from .scoring import ConstructorScorer, StandardConstructorScorer
from .settings import Settings

logger = logging.getLogger(__name__)


class Selector:
    """
    Selects members for injection.

    The selector owns a constructor scorer and an ordered list of injection
    heuristics. It keeps no per-call state and reads its settings on every
    call, so changes to the settings apply to the next selection.
    """

    def __init__(
        self,
        constructor_scorer: ConstructorScorer | None = None,
        injection_heuristics: Iterable[InjectionHeuristic] | None = None,
        settings: Settings | None = None,
    ):
        """
        Create a new Selector.

        Args:
            constructor_scorer: Scorer ranking constructor candidates, used by planners
            injection_heuristics: Heuristics consulted for every property and method
            settings: Visibility settings; shared with the default scorer and heuristic
        """
        self.settings = settings if settings is not None else Settings()
        self.constructor_scorer = (
            constructor_scorer if constructor_scorer is not None else StandardConstructorScorer(self.settings)
        )
        if injection_heuristics is None:
            injection_heuristics = [StandardInjectionHeuristic(self.settings)]
        self.injection_heuristics: list[InjectionHeuristic] = list(injection_heuristics)

    def select_constructor_candidates(self, target: Any) -> list[ConstructorInfo] | None:
        """
        Enumerate the constructors that may be used to create ``target``.

        Args:
            target: The implementation type

        Returns:
            The visible constructors in declaration order, or None for
            delegate-like types, which cannot be constructed at all

        Raises:
            InvalidArgumentError: If ``target`` is None
        """
        if target is None:
            raise InvalidArgumentError("target")

        if is_delegate_type(target):
            logger.debug("%s is delegate-like, no constructor candidates", target)
            return None

        return [c for c in TypeIntrospector.constructors(target) if self._is_visible(c)]

    def select_properties_for_injection(self, target: Any) -> list[PropertyInfo]:
        """
        Select the properties of ``target`` that should be injected.

        A visible property is selected when any heuristic approves it. With
        ``inject_parent_private_properties`` enabled, approved private
        properties declared on each base class are appended, nearest base first.

        Raises:
            InvalidArgumentError: If ``target`` is None
        """
        if target is None:
            raise InvalidArgumentError("target")

        selected = [
            p for p in TypeIntrospector.properties(target) if self._is_visible(p) and self._should_inject(p)
        ]

        if self.settings.inject_parent_private_properties:
            for ancestor in runtime_class(target).__mro__[1:]:
                selected.extend(self._private_properties(ancestor))

        logger.debug("Selected properties of %s: %s", target, [p.name for p in selected])
        return selected

    def select_methods_for_injection(self, target: Any) -> list[MethodInfo]:
        """
        Select the methods of ``target`` that should be injected.

        Raises:
            InvalidArgumentError: If ``target`` is None
        """
        if target is None:
            raise InvalidArgumentError("target")

        selected = [m for m in TypeIntrospector.methods(target) if self._is_visible(m) and self._should_inject(m)]
        logger.debug("Selected methods of %s: %s", target, [m.name for m in selected])
        return selected

    def _private_properties(self, ancestor: type) -> list[PropertyInfo]:
        return [
            p
            for p in TypeIntrospector.declared_properties(ancestor)
            if p.is_private and self._is_visible(p) and self._should_inject(p)
        ]

    def _is_visible(self, member: MemberInfo) -> bool:
        return member.is_public or self.settings.inject_non_public

    def _should_inject(self, member: MemberInfo) -> bool:
        return any(heuristic.should_inject(member) for heuristic in self.injection_heuristics)
