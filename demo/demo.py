#!/usr/bin/env python3
"""
Demonstration of Kunai - binding resolution and member selection.

This demo shows:
1. Exact and open generic binding resolution
2. Implicit self bindings for unregistered concrete classes
3. Constructor candidates and scoring
4. Property and method selection
5. Private properties of base classes
"""

import logging
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from kunai import (
    Binding,
    BindingResolution,
    Multimap,
    Selector,
    Settings,
    StandardConstructorScorer,
    constructor,
    inject,
    pick_constructor,
)

T = TypeVar("T")

# Example domain: a small pet shop


class Repository(Generic[T], ABC):
    """Abstract storage of entities."""

    @abstractmethod
    def find(self, key: str) -> T | None:
        pass


class SqlRepository(Repository[T]):
    """SQL-backed repository."""

    def __init__(self, connection_string: str = "sqlite://"):
        self.connection_string = connection_string

    def find(self, key: str) -> T | None:
        return None


class Customer:
    pass


class Leash:
    pass


class Animal:
    @inject
    @property
    def __name(self) -> str:
        return self._stored_name

    @__name.setter
    def __name(self, value: str) -> None:
        self._stored_name = value


class Dog(Animal):
    def __init__(self, repository: Repository[Customer]):
        self.repository = repository

    @constructor
    @classmethod
    def on_leash(cls, leash: Leash, name: str = "rex") -> "Dog":
        return cls(SqlRepository[Customer]())

    @inject
    @property
    def leash(self) -> Leash:
        return self._leash

    @leash.setter
    def leash(self, value: Leash) -> None:
        self._leash = value

    @inject
    def feed(self, repository: Repository[Customer]) -> None:
        self.repository = repository


def main():
    logging.basicConfig(level=logging.INFO)

    print("=== Kunai Demo ===\n")

    print("1. Binding Resolution:")
    print("-" * 30)

    bindings: Multimap = Multimap()
    bindings.add(Repository, Binding.to_type(Repository, SqlRepository))
    resolution = BindingResolution()

    for binding in resolution.resolve(bindings, Repository[Customer]):
        print(f"Repository[Customer] -> {binding}")
    print(f"Unregistered Leash: {list(resolution.resolve(bindings, Leash))}")

    print("\n2. Implicit Self Bindings:")
    print("-" * 30)

    for binding in resolution.resolve_missing(Leash):
        print(f"Leash -> {binding} (implicit: {binding.is_implicit})")
    print(f"Repository is abstract, implicit bindings: {resolution.resolve_missing(Repository)}")

    print("\n3. Constructor Selection:")
    print("-" * 30)

    settings = Settings()
    selector = Selector(StandardConstructorScorer(settings, bindings, resolution), settings=settings)
    candidates = selector.select_constructor_candidates(Dog)
    for candidate in candidates:
        print(f"{candidate} scores {selector.constructor_scorer.score(candidate)}")
    print(f"Picked: {pick_constructor(candidates, selector.constructor_scorer)}")

    print("\n4. Property and Method Selection:")
    print("-" * 30)

    print(f"Properties: {[p.name for p in selector.select_properties_for_injection(Dog)]}")
    print(f"Methods: {[m.name for m in selector.select_methods_for_injection(Dog)]}")

    print("\n5. Private Properties of Base Classes:")
    print("-" * 30)

    settings.inject_non_public = True
    settings.inject_parent_private_properties = True
    print(f"Properties: {[p.name for p in selector.select_properties_for_injection(Dog)]}")

    print("\nDemo completed successfully!")


if __name__ == "__main__":
    main()
