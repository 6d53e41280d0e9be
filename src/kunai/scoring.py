"""
Constructor scoring: ranks candidate constructors so a planner can pick one.
"""

from __future__ import annotations

import inspect
import logging
import sys
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from .bindings import Binding
from .errors import AmbiguousConstructorError
from .introspection import ConstructorInfo
from .multimap import Multimap
from .parameters import ConstructorArgument, Parameter, find_parameter
from .resolvers import BindingResolution, SelfBindingResolver
from .settings import Settings

logger = logging.getLogger(__name__)


class ConstructorScorer(ABC):
    """Scores a constructor; the highest score wins."""

    @abstractmethod
    def score(self, constructor: ConstructorInfo) -> int:
        """Score ``constructor``."""


class StandardConstructorScorer(ConstructorScorer):
    """
    Prefers constructors marked with ``@inject``, then the satisfiable constructor
    with the most parameters.

    A parameter is satisfiable when a ``ConstructorArgument`` with its name was
    supplied, when the resolution chain finds a binding for its annotation in
    ``bindings``, when its annotation is self-bindable, or when it has a default
    value. A constructor with an unsatisfiable parameter scores below zero.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        bindings: Multimap[Any, Binding] | None = None,
        resolution: BindingResolution | None = None,
        parameters: Sequence[Parameter] = (),
    ):
        self.settings = settings if settings is not None else Settings()
        self._bindings = bindings
        self._resolution = resolution if resolution is not None else BindingResolution()
        self._parameters = tuple(parameters)

    def score(self, constructor: ConstructorInfo) -> int:
        if constructor.marker(self.settings.inject_marker):
            return sys.maxsize

        hints = constructor.type_hints()
        score = 1
        for parameter in constructor.parameters:
            score += 1
            if not self._is_satisfiable(parameter, hints.get(parameter.name)) and score > 0:
                score -= sys.maxsize
        return score

    def _is_satisfiable(self, parameter: inspect.Parameter, hint: Any) -> bool:
        if find_parameter(self._parameters, ConstructorArgument, parameter.name) is not None:
            return True
        if hint is not None and not isinstance(hint, str):
            if self._bindings is not None and self._resolution.has_bindings(self._bindings, hint):
                return True
            if SelfBindingResolver.is_self_bindable(hint):
                return True
        return parameter.default is not inspect.Parameter.empty


def pick_constructor(
    candidates: Sequence[ConstructorInfo] | None, scorer: ConstructorScorer
) -> ConstructorInfo | None:
    """
    Pick the highest scoring constructor.

    Returns None when there are no candidates.

    Raises:
        AmbiguousConstructorError: If several candidates share the highest score
    """
    if not candidates:
        return None

    scored = [(scorer.score(candidate), candidate) for candidate in candidates]
    best = max(score for score, _ in scored)
    winners = [candidate for score, candidate in scored if score == best]
    if len(winners) > 1:
        raise AmbiguousConstructorError(winners[0].declaring_type, winners)

    logger.debug("Picked constructor %s with score %d", winners[0], best)
    return winners[0]
