"""
Exceptions raised by the resolution and selection engine.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class KunaiError(Exception):
    """Base class for all errors raised by kunai itself."""


class InvalidArgumentError(KunaiError, ValueError):
    """Raised when a required argument is missing."""

    def __init__(self, argument: str):
        self.argument = argument
        super().__init__(f"Argument '{argument}' must not be None")


class GenericSpecializationError(KunaiError, TypeError):
    """Raised when an open generic implementation cannot be closed over a request."""

    def __init__(self, service: Any, implementation: Any, reason: str = ""):
        self.service = service
        self.implementation = implementation
        impl_name = getattr(implementation, "__name__", str(implementation))
        msg = f"Cannot specialize {impl_name} for {service}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class AmbiguousConstructorError(KunaiError):
    """Raised when more than one constructor shares the highest score."""

    def __init__(self, target: type, candidates: Sequence[Any]):
        self.target = target
        self.candidates = list(candidates)
        names = ", ".join(str(c) for c in self.candidates)
        type_name = getattr(target, "__name__", str(target))
        super().__init__(f"Ambiguous constructors for {type_name}: {names}")
