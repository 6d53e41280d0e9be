#!/usr/bin/env python3
"""
Unit tests for binding resolvers and the resolution chain.
"""

import unittest
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Generic, Protocol, TypeVar

from kunai import (
    Binding,
    BindingResolution,
    BindingResolver,
    BindingTarget,
    InvalidArgumentError,
    MissingBindingResolver,
    Multimap,
    OpenGenericBindingResolver,
    SelfBindingResolver,
    StandardBindingResolver,
)

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


class Animal:
    pass


class Dog(Animal):
    pass


class Box(Generic[T]):
    pass


class SqlBox(Box[T]):
    pass


class Pair(Generic[K, V]):
    pass


class PlainPair(Pair[K, V]):
    pass


class IntKeyed(Pair[int, V]):
    pass


class Shape(ABC):
    @abstractmethod
    def area(self) -> float: ...


class Greeter(Protocol):
    def greet(self) -> str: ...


class FixedResolver(BindingResolver):
    """Resolver returning a fixed list regardless of the registry."""

    def __init__(self, *bindings: Binding):
        self.bindings = list(bindings)

    def resolve(self, bindings, service):
        return self.bindings


class FailingResolver(BindingResolver):
    def __init__(self, error: Exception):
        self.error = error

    def resolve(self, bindings, service):
        raise self.error


class TestStandardBindingResolver(unittest.TestCase):
    """Test exact-match resolution."""

    def test_returns_group_for_exact_type(self):
        """Test that the registry group is returned verbatim."""
        b1 = Binding.to_self(Dog)
        b2 = Binding.to_type(Dog, Dog, name="other")
        bindings = Multimap()
        bindings.add(Dog, b1)
        bindings.add(Dog, b2)

        self.assertEqual(list(StandardBindingResolver().resolve(bindings, Dog)), [b1, b2])

    def test_never_matches_assignable_types(self):
        """Test that a binding for a base type does not satisfy a subtype request."""
        bindings = Multimap()
        bindings.add(Animal, Binding.to_type(Animal, Dog))

        self.assertEqual(list(StandardBindingResolver().resolve(bindings, Dog)), [])

    def test_unknown_type_yields_nothing(self):
        """Test resolution against an empty registry."""
        self.assertEqual(list(StandardBindingResolver().resolve(Multimap(), Dog)), [])


class TestOpenGenericBindingResolver(unittest.TestCase):
    """Test open generic resolution."""

    def setUp(self):
        self.open_binding = Binding.to_type(Box, SqlBox)
        self.bindings = Multimap()
        self.bindings.add(Box, self.open_binding)
        self.resolver = OpenGenericBindingResolver()

    def test_specializes_for_request(self):
        """Test that the open binding is closed over the request's arguments."""
        result = list(self.resolver.resolve(self.bindings, Box[str]))

        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].service, Box[str])
        self.assertEqual(result[0].implementation, SqlBox[str])
        self.assertEqual(result[0].target, BindingTarget.TYPE)

    def test_each_request_gets_its_own_specialization(self):
        """Test that different requests produce distinct bindings."""
        for_str = list(self.resolver.resolve(self.bindings, Box[str]))[0]
        for_int = list(self.resolver.resolve(self.bindings, Box[int]))[0]

        self.assertEqual(for_int.implementation, SqlBox[int])
        self.assertNotEqual(for_str, for_int)
        self.assertIs(self.open_binding.implementation, SqlBox)

    def test_open_form_is_not_matched(self):
        """Test that the bare definition and partially open requests yield nothing."""
        self.assertEqual(list(self.resolver.resolve(self.bindings, Box)), [])
        self.assertEqual(list(self.resolver.resolve(self.bindings, Box[T])), [])

    def test_non_generic_request_yields_nothing(self):
        """Test that plain types are ignored."""
        self.bindings.add(Dog, Binding.to_self(Dog))
        self.assertEqual(list(self.resolver.resolve(self.bindings, Dog)), [])

    def test_does_not_fall_back_to_exact_match(self):
        """Test that exact registrations of the constructed type are not returned."""
        bindings = Multimap()
        bindings.add(Box[int], Binding.to_type(Box[int], SqlBox[int]))

        self.assertEqual(list(self.resolver.resolve(bindings, Box[int])), [])

    def test_constant_bindings_keep_their_value(self):
        """Test that non-type targets are copied with the closed service only."""
        constant = object()
        bindings = Multimap()
        bindings.add(Box, Binding(Box, BindingTarget.CONSTANT, constant))

        result = list(self.resolver.resolve(bindings, Box[int]))

        self.assertIs(result[0].implementation, constant)
        self.assertEqual(result[0].service, Box[int])

    def test_partially_closed_implementation_is_skipped(self):
        """Test that an implementation fixing a disagreeing type argument is skipped."""
        plain = Binding.to_type(Pair, PlainPair)
        int_keyed = Binding.to_type(Pair, IntKeyed)
        bindings = Multimap()
        bindings.add(Pair, int_keyed)
        bindings.add(Pair, plain)

        for_str = list(self.resolver.resolve(bindings, Pair[str, str]))
        for_int = list(self.resolver.resolve(bindings, Pair[int, str]))

        self.assertEqual([b.implementation for b in for_str], [PlainPair[str, str]])
        self.assertEqual([b.implementation for b in for_int], [IntKeyed[str], PlainPair[int, str]])


class TestBindingResolution(unittest.TestCase):
    """Test the resolver chain."""

    def test_union_in_resolver_order(self):
        """Test that results are concatenated in registration order."""
        x = Binding.to_self(Dog)
        y = Binding.to_type(Animal, Dog)
        chain = BindingResolution([FixedResolver(x), FixedResolver(y)])

        self.assertEqual(list(chain.resolve(Multimap(), Dog)), [x, y])

    def test_no_deduplication(self):
        """Test that the same binding found twice is reported twice."""
        x = Binding.to_self(Dog)
        chain = BindingResolution([FixedResolver(x), FixedResolver(x)])

        result = list(chain.resolve(Multimap(), Dog))

        self.assertEqual(len(result), 2)
        self.assertIs(result[0], result[1])

    def test_default_chain_combines_exact_and_open(self):
        """Test that exact bindings precede specialized open bindings."""
        exact = Binding.to_type(Box[int], SqlBox[int], name="exact")
        bindings = Multimap()
        bindings.add(Box, Binding.to_type(Box, SqlBox))
        bindings.add(Box[int], exact)

        result = list(BindingResolution().resolve(bindings, Box[int]))

        self.assertEqual(len(result), 2)
        self.assertIs(result[0], exact)
        self.assertEqual(result[1].implementation, SqlBox[int])
        self.assertIsNone(result[1].name)

    def test_empty_result_is_not_an_error(self):
        """Test that an unknown service simply yields nothing."""
        chain = BindingResolution()
        self.assertEqual(list(chain.resolve(Multimap(), Dog)), [])
        self.assertFalse(chain.has_bindings(Multimap(), Dog))

    def test_unclosable_open_binding_does_not_break_the_union(self):
        """Test that a disagreeing open binding neither raises nor hides the rest."""
        exact = Binding.to_self(Pair[str, str])
        bindings = Multimap()
        bindings.add(Pair[str, str], exact)
        bindings.add(Pair, Binding.to_type(Pair, IntKeyed))
        chain = BindingResolution()

        self.assertEqual(list(chain.resolve(bindings, Pair[str, str])), [exact])
        self.assertTrue(chain.has_bindings(bindings, Pair[int, str]))

        bindings.remove(Pair[str, str], exact)
        self.assertFalse(chain.has_bindings(bindings, Pair[str, str]))

    def test_invalid_arguments_fail_immediately(self):
        """Test that None arguments are rejected before iteration."""
        chain = BindingResolution()

        with self.assertRaises(InvalidArgumentError) as context:
            chain.resolve(None, Dog)
        self.assertEqual(context.exception.argument, "bindings")

        with self.assertRaises(ValueError):
            chain.resolve(Multimap(), None)

    def test_resolution_is_lazy_and_failures_propagate(self):
        """Test that resolver errors surface unchanged when the result is consumed."""
        error = RuntimeError("resolver exploded")
        chain = BindingResolution([FailingResolver(error)])

        result = chain.resolve(Multimap(), Dog)

        with self.assertRaises(RuntimeError) as context:
            list(result)
        self.assertIs(context.exception, error)

    def test_add_resolver(self):
        """Test appending resolvers to the chain."""
        x = Binding.to_self(Dog)
        chain = BindingResolution([])
        chain.add_resolver(FixedResolver(x))

        self.assertEqual(len(chain.resolvers), 1)
        self.assertEqual(list(chain.resolve(Multimap(), Dog)), [x])


class TestMissingBindingResolution(unittest.TestCase):
    """Test implicit self bindings."""

    def test_concrete_class_is_self_bound(self):
        """Test that a concrete class yields an implicit self binding."""
        result = SelfBindingResolver().resolve(Dog)

        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].target, BindingTarget.SELF)
        self.assertIs(result[0].implementation, Dog)
        self.assertTrue(result[0].is_implicit)

    def test_constructed_generic_is_self_bound(self):
        """Test that a constructed generic of a concrete class is self-bindable."""
        self.assertTrue(SelfBindingResolver.is_self_bindable(Box[int]))

    def test_non_constructible_types_are_rejected(self):
        """Test abstract, protocol, builtin, open and callable types."""
        for service in (Shape, Greeter, int, str, Box, Box[T], Callable[[int], str], Callable):
            with self.subTest(service=service):
                self.assertFalse(SelfBindingResolver.is_self_bindable(service))
                self.assertEqual(SelfBindingResolver().resolve(service), [])

    def test_first_non_empty_missing_resolver_wins(self):
        """Test the order in which missing binding resolvers are asked."""

        class Nothing(MissingBindingResolver):
            def resolve(self, service):
                return []

        class Constant(MissingBindingResolver):
            def resolve(self, service):
                return [Binding(service, BindingTarget.CONSTANT, 42, is_implicit=True)]

        chain = BindingResolution(missing_resolvers=[Nothing(), Constant(), SelfBindingResolver()])
        result = chain.resolve_missing(Dog)

        self.assertEqual([b.implementation for b in result], [42])

    def test_missing_resolvers_are_not_part_of_resolve(self):
        """Test that implicit bindings are only produced on request."""
        chain = BindingResolution()

        self.assertEqual(list(chain.resolve(Multimap(), Dog)), [])
        self.assertEqual(len(chain.resolve_missing(Dog)), 1)
        self.assertEqual(chain.resolve_missing(int), [])


if __name__ == "__main__":
    unittest.main()
