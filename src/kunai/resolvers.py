"""
Binding resolution: strategies that find the bindings able to satisfy a request.
"""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import Any

from .bindings import Binding, BindingTarget
from .errors import GenericSpecializationError, InvalidArgumentError
from .generics import contains_typevar, generic_definition, is_constructed_generic, runtime_class
from .introspection import is_delegate_type
from .multimap import Multimap

logger = logging.getLogger(__name__)


class BindingResolver(ABC):
    """A strategy producing the registered bindings that apply to a service type."""

    @abstractmethod
    def resolve(self, bindings: Multimap[Any, Binding], service: Any) -> Iterable[Binding]:
        """
        Produce the bindings that could satisfy ``service``.

        Args:
            bindings: The grouped registry, read only
            service: The requested service type

        Returns:
            Zero or more bindings, in the resolver's own order
        """


class StandardBindingResolver(BindingResolver):
    """Returns the bindings registered for exactly the requested type."""

    def resolve(self, bindings: Multimap[Any, Binding], service: Any) -> Iterable[Binding]:
        return bindings[service]


class OpenGenericBindingResolver(BindingResolver):
    """
    Specializes bindings registered for an open generic definition.

    A request for ``Repository[Customer]`` finds the bindings registered for
    ``Repository`` and yields each one closed over ``Customer``. Requests for
    the bare definition, partially open requests and non-generic types yield
    nothing.

    Bindings whose implementation cannot be closed over the request, such as
    one fixing a type argument the request disagrees with, are skipped.
    """

    def resolve(self, bindings: Multimap[Any, Binding], service: Any) -> Iterable[Binding]:
        if not is_constructed_generic(service):
            return
        definition = generic_definition(service)
        for binding in bindings[definition]:
            try:
                yield binding.specialize(service)
            except GenericSpecializationError as e:
                logger.debug("Skipping %s for %s: %s", binding, service, e)


class MissingBindingResolver(ABC):
    """A strategy synthesizing bindings for services that have none registered."""

    @abstractmethod
    def resolve(self, service: Any) -> list[Binding]:
        """Produce implicit bindings for ``service``, or an empty list."""


class SelfBindingResolver(MissingBindingResolver):
    """Binds concrete classes to themselves."""

    def resolve(self, service: Any) -> list[Binding]:
        if not self.is_self_bindable(service):
            return []
        return [Binding(service, BindingTarget.SELF, service, is_implicit=True)]

    @staticmethod
    def is_self_bindable(service: Any) -> bool:
        """Check if ``service`` is a concrete, constructible, fully specified class."""
        if service is None or is_delegate_type(service) or contains_typevar(service):
            return False
        cls = runtime_class(service)
        if not isinstance(cls, type):
            return False
        if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
            return False
        return cls.__module__ != "builtins"


class BindingResolution:
    """
    An ordered chain of binding resolvers.

    The result of a resolution is the concatenation of every resolver's result,
    in resolver order. Bindings found by more than one resolver are reported
    once per resolver.
    """

    def __init__(
        self,
        resolvers: Iterable[BindingResolver] | None = None,
        missing_resolvers: Iterable[MissingBindingResolver] | None = None,
    ):
        if resolvers is None:
            resolvers = [StandardBindingResolver(), OpenGenericBindingResolver()]
        if missing_resolvers is None:
            missing_resolvers = [SelfBindingResolver()]
        self._resolvers: list[BindingResolver] = list(resolvers)
        self._missing_resolvers: list[MissingBindingResolver] = list(missing_resolvers)

    @property
    def resolvers(self) -> list[BindingResolver]:
        return list(self._resolvers)

    @property
    def missing_resolvers(self) -> list[MissingBindingResolver]:
        return list(self._missing_resolvers)

    def add_resolver(self, resolver: BindingResolver) -> None:
        """Append a resolver to the end of the chain."""
        self._resolvers.append(resolver)

    def add_missing_resolver(self, resolver: MissingBindingResolver) -> None:
        """Append a missing binding resolver."""
        self._missing_resolvers.append(resolver)

    def resolve(self, bindings: Multimap[Any, Binding], service: Any) -> Iterator[Binding]:
        """
        Lazily produce every binding the chain finds for ``service``.

        Arguments are validated immediately; resolvers run as the result is
        consumed.

        Raises:
            InvalidArgumentError: If ``bindings`` or ``service`` is None
        """
        if bindings is None:
            raise InvalidArgumentError("bindings")
        if service is None:
            raise InvalidArgumentError("service")
        return self._resolve(bindings, service)

    def _resolve(self, bindings: Multimap[Any, Binding], service: Any) -> Iterator[Binding]:
        for resolver in self._resolvers:
            count = 0
            for binding in resolver.resolve(bindings, service):
                count += 1
                yield binding
            logger.debug("%s produced %d binding(s) for %s", type(resolver).__name__, count, service)

    def resolve_missing(self, service: Any) -> list[Binding]:
        """
        Ask the missing binding resolvers for implicit bindings.

        Returns the first non-empty result, or an empty list.
        """
        if service is None:
            raise InvalidArgumentError("service")
        for resolver in self._missing_resolvers:
            found = resolver.resolve(service)
            if found:
                logger.debug("%s synthesized %d binding(s) for %s", type(resolver).__name__, len(found), service)
                return found
        return []

    def has_bindings(self, bindings: Multimap[Any, Binding], service: Any) -> bool:
        """Check if the chain finds at least one binding for ``service``."""
        return next(self.resolve(bindings, service), None) is not None
