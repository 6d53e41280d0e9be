"""
Generic type helpers: recognising constructed generics and closing open ones.

Open generic bindings are registered against the bare generic class
(``Repository`` for ``class Repository(Generic[T])``). A request such as
``Repository[Customer]`` is matched against that definition and every
binding found there is specialized with an explicit TypeVar map.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar, get_args, get_origin

from .errors import GenericSpecializationError


def contains_typevar(value: Any) -> bool:
    """Return whether a type expression still contains a TypeVar."""
    if isinstance(value, TypeVar):
        return True

    origin = get_origin(value)
    if origin is not None:
        return any(contains_typevar(argument) for argument in get_args(value))

    return bool(type_parameters(value))


def is_constructed_generic(value: Any) -> bool:
    """Check if ``value`` is a generic type with concrete arguments only."""
    if get_origin(value) is None:
        return False
    arguments = get_args(value)
    if not arguments:
        return False
    return not any(contains_typevar(argument) for argument in arguments)


def generic_definition(value: Any) -> Any | None:
    """Return the open generic definition of a parameterized type, or None."""
    return get_origin(value)


def type_parameters(value: Any) -> tuple[TypeVar, ...]:
    """Return the TypeVars a generic class or alias is parameterized over."""
    parameters = getattr(value, "__parameters__", ())
    if not isinstance(parameters, tuple):
        return ()
    return tuple(parameter for parameter in parameters if isinstance(parameter, TypeVar))


def runtime_class(value: Any) -> Any:
    """Return the class behind a parameterized alias, or ``value`` itself."""
    origin = get_origin(value)
    if isinstance(origin, type):
        return origin
    return value


def substitute_typevars(value: Any, mapping: Mapping[TypeVar, Any]) -> Any:
    """Replace TypeVars inside a type expression using ``mapping``."""
    if isinstance(value, TypeVar):
        return mapping.get(value, value)

    origin = get_origin(value)
    if origin is None:
        return value

    arguments = get_args(value)
    if not arguments:
        return value

    substituted = tuple(substitute_typevars(argument, mapping) for argument in arguments)
    return _rebuild(origin, substituted, value)


def match_typevars(template: Any, concrete: Any) -> dict[TypeVar, Any] | None:
    """
    Unify ``template`` with ``concrete``.

    Returns the TypeVar assignments that turn the template into the concrete
    type, or None when the two do not unify.
    """
    mapping: dict[TypeVar, Any] = {}
    if _match_node(template, concrete, mapping):
        return mapping
    return None


def close_generic(definition: Any, closed_service: Any, implementation: Any) -> Any:
    """
    Close an open generic ``implementation`` over the arguments of ``closed_service``.

    Args:
        definition: The open generic definition the binding was registered for
        closed_service: The constructed generic that was requested
        implementation: The implementation registered for ``definition``

    Returns:
        The implementation parameterized with the request's type arguments, or
        the implementation unchanged when it is not generic itself.

    Raises:
        GenericSpecializationError: If the implementation's parameters cannot
            be derived from the request
    """
    impl_parameters = type_parameters(implementation)
    if not isinstance(implementation, type) or not impl_parameters:
        return implementation

    arguments = get_args(closed_service)
    template = _base_template(implementation, definition)

    if template is not None:
        mapping = match_typevars(template, closed_service)
        if mapping is None:
            raise GenericSpecializationError(
                closed_service, implementation, f"{template} does not unify with the request"
            )
    elif len(impl_parameters) == len(arguments):
        mapping = dict(zip(impl_parameters, arguments))
    else:
        raise GenericSpecializationError(
            closed_service,
            implementation,
            f"expected {len(impl_parameters)} type arguments, got {len(arguments)}",
        )

    missing = [parameter for parameter in impl_parameters if parameter not in mapping]
    if missing:
        names = ", ".join(parameter.__name__ for parameter in missing)
        raise GenericSpecializationError(closed_service, implementation, f"unbound parameters {names}")

    return implementation[tuple(mapping[parameter] for parameter in impl_parameters)]


def _base_template(cls: type, definition: Any) -> Any | None:
    """Find how ``cls`` parameterizes ``definition``, expressed in ``cls``'s own TypeVars."""
    if cls is definition:
        parameters = type_parameters(cls)
        return _rebuild(cls, parameters, cls) if parameters else None

    for base in cls.__dict__.get("__orig_bases__", ()):
        base_origin = get_origin(base) or base
        if not isinstance(base_origin, type):
            continue
        if base_origin is definition:
            return base if get_args(base) else None
        if definition in getattr(base_origin, "__mro__", ()):
            inner = _base_template(base_origin, definition)
            if inner is None:
                continue
            base_mapping = dict(zip(type_parameters(base_origin), get_args(base)))
            return substitute_typevars(inner, base_mapping)
    return None


def _match_node(template: Any, concrete: Any, mapping: dict[TypeVar, Any]) -> bool:
    if isinstance(template, TypeVar):
        known = mapping.get(template)
        if known is None:
            mapping[template] = concrete
            return True
        return bool(known == concrete)

    template_origin = get_origin(template)
    if template_origin is None:
        return bool(template == concrete)

    if get_origin(concrete) != template_origin:
        return False

    template_arguments = get_args(template)
    concrete_arguments = get_args(concrete)
    if len(template_arguments) != len(concrete_arguments):
        return False

    return all(
        _match_node(template_argument, concrete_argument, mapping)
        for template_argument, concrete_argument in zip(template_arguments, concrete_arguments)
    )


def _rebuild(origin: Any, arguments: tuple[Any, ...], fallback: Any) -> Any:
    try:
        return origin[arguments]
    except TypeError:
        return fallback
