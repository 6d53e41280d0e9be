"""
Kunai - binding resolution and member selection for dependency injection containers.

This library provides:
- A grouped registry of bindings keyed by exact service type
- A chain of pluggable binding resolvers, including open generic specialization
- Member selection: constructor candidates, injectable properties and methods
- Pluggable constructor scoring and injection heuristics
"""

from .bindings import Binding, BindingTarget
from .errors import AmbiguousConstructorError, GenericSpecializationError, InvalidArgumentError, KunaiError
from .heuristics import InjectionHeuristic, PredicateInjectionHeuristic, StandardInjectionHeuristic
from .introspection import ConstructorInfo, MemberInfo, MethodInfo, PropertyInfo, TypeIntrospector
from .markers import constructor, inject, internal
from .multimap import Multimap
from .parameters import ConstructorArgument, Parameter, PropertyValue
from .resolvers import (
    BindingResolution,
    BindingResolver,
    MissingBindingResolver,
    OpenGenericBindingResolver,
    SelfBindingResolver,
    StandardBindingResolver,
)
from .scoring import ConstructorScorer, StandardConstructorScorer, pick_constructor
from .selector import Selector
from .settings import Settings

__all__ = [
    "AmbiguousConstructorError",
    "Binding",
    "BindingResolution",
    "BindingResolver",
    "BindingTarget",
    "ConstructorArgument",
    "ConstructorInfo",
    "ConstructorScorer",
    "GenericSpecializationError",
    "InjectionHeuristic",
    "InvalidArgumentError",
    "KunaiError",
    "MemberInfo",
    "MethodInfo",
    "MissingBindingResolver",
    "Multimap",
    "OpenGenericBindingResolver",
    "Parameter",
    "PredicateInjectionHeuristic",
    "PropertyInfo",
    "PropertyValue",
    "SelfBindingResolver",
    "Selector",
    "Settings",
    "StandardBindingResolver",
    "StandardConstructorScorer",
    "StandardInjectionHeuristic",
    "TypeIntrospector",
    "constructor",
    "inject",
    "internal",
    "pick_constructor",
]
