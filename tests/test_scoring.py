#!/usr/bin/env python3
"""
Unit tests for constructor scoring and picking.
"""

import sys
import unittest
from abc import ABC, abstractmethod

from kunai import (
    AmbiguousConstructorError,
    Binding,
    ConstructorArgument,
    ConstructorScorer,
    Multimap,
    Selector,
    StandardConstructorScorer,
    TypeIntrospector,
    constructor,
    inject,
    pick_constructor,
)


class Leash:
    pass


class Shape(ABC):
    @abstractmethod
    def area(self) -> float: ...


class Square(Shape):
    def area(self) -> float:
        return 1.0


class Marked:
    @inject
    def __init__(self, shape: Shape):
        self.shape = shape


class NoArgs:
    pass


class TwoLeashes:
    def __init__(self, first: Leash, second: Leash):
        self.leashes = (first, second)


class NeedsShape:
    def __init__(self, shape: Shape):
        self.shape = shape


class NeedsCount:
    def __init__(self, count: int):
        self.count = count


class DefaultCount:
    def __init__(self, count: int = 3):
        self.count = count


class Studio:
    def __init__(self, shape: Shape):
        self.shape = shape

    @constructor
    @classmethod
    def with_leash(cls, leash: Leash) -> "Studio":
        return cls(Square())

    @constructor
    @classmethod
    def with_other_leash(cls, other: Leash) -> "Studio":
        return cls(Square())


def primary(target: type):
    return TypeIntrospector.constructors(target)[0]


class TestStandardConstructorScorer(unittest.TestCase):
    """Test the standard constructor scorer."""

    def setUp(self):
        self.scorer = StandardConstructorScorer()

    def test_marked_constructor_wins_outright(self):
        """Test that an @inject initializer gets the maximum score."""
        self.assertEqual(self.scorer.score(primary(Marked)), sys.maxsize)

    def test_score_grows_with_satisfiable_parameters(self):
        """Test that each satisfiable parameter adds to the score."""
        self.assertEqual(self.scorer.score(primary(NoArgs)), 1)
        self.assertEqual(self.scorer.score(primary(TwoLeashes)), 3)

    def test_unsatisfiable_parameters_score_below_zero(self):
        """Test that abstract and builtin parameters without bindings are penalized."""
        self.assertLess(self.scorer.score(primary(NeedsShape)), 0)
        self.assertLess(self.scorer.score(primary(NeedsCount)), 0)

    def test_default_values_are_satisfiable(self):
        """Test that parameters with defaults do not penalize."""
        self.assertEqual(self.scorer.score(primary(DefaultCount)), 2)

    def test_bindings_make_parameters_satisfiable(self):
        """Test that a registry binding satisfies an abstract parameter."""
        bindings = Multimap()
        bindings.add(Shape, Binding.to_type(Shape, Square))
        scorer = StandardConstructorScorer(bindings=bindings)

        self.assertEqual(scorer.score(primary(NeedsShape)), 2)

    def test_constructor_arguments_make_parameters_satisfiable(self):
        """Test that an explicit constructor argument satisfies a parameter by name."""
        scorer = StandardConstructorScorer(parameters=[ConstructorArgument("count", 7)])

        self.assertEqual(scorer.score(primary(NeedsCount)), 2)

    def test_custom_marker(self):
        """Test that the marker attribute is taken from the settings."""
        scorer = StandardConstructorScorer()
        scorer.settings.inject_marker = "__custom_inject__"

        self.assertLess(scorer.score(primary(Marked)), 0)


class TestPickConstructor(unittest.TestCase):
    """Test picking a constructor from the selector's candidates."""

    def setUp(self):
        self.selector = Selector()

    def test_highest_score_wins(self):
        """Test that a satisfiable alternative beats an unsatisfiable initializer."""
        candidates = [
            c for c in self.selector.select_constructor_candidates(Studio) if c.name != "with_other_leash"
        ]

        picked = pick_constructor(candidates, self.selector.constructor_scorer)

        self.assertEqual(picked.name, "with_leash")
        self.assertIsInstance(picked.factory(Leash()), Studio)

    def test_tie_is_ambiguous(self):
        """Test that two constructors sharing the top score are rejected."""
        candidates = self.selector.select_constructor_candidates(Studio)

        with self.assertRaises(AmbiguousConstructorError) as context:
            pick_constructor(candidates, self.selector.constructor_scorer)

        self.assertEqual([c.name for c in context.exception.candidates], ["with_leash", "with_other_leash"])

    def test_no_candidates(self):
        """Test that missing or empty candidates pick nothing."""
        self.assertIsNone(pick_constructor(None, self.selector.constructor_scorer))
        self.assertIsNone(pick_constructor([], self.selector.constructor_scorer))

    def test_scorer_failures_propagate(self):
        """Test that exceptions raised by a scorer are not wrapped."""
        error = ArithmeticError("scorer failed")

        class FailingScorer(ConstructorScorer):
            def score(self, constructor):
                raise error

        with self.assertRaises(ArithmeticError) as context:
            pick_constructor(self.selector.select_constructor_candidates(NoArgs), FailingScorer())
        self.assertIs(context.exception, error)


if __name__ == "__main__":
    unittest.main()
