# Bladework: Blade Algebra Engine (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0 | "Unbending" Paradigm

"""Exhaustive dispatch over the GATerm variants."""

from typing import Callable, TypeVar

from terms.ga_term import (
    Bivector,
    GATerm,
    GeneralMultivector,
    Scalar,
    Trivector,
    Vector,
)

R = TypeVar('R')


def match_term(term: GATerm,
               on_scalar: Callable[[Scalar], R],
               on_vector: Callable[[Vector], R],
               on_bivector: Callable[[Bivector], R],
               on_trivector: Callable[[Trivector], R],
               on_multivector: Callable[[GeneralMultivector], R]) -> R:
    """Calls the one handler matching the variant of *term*.

    Every handler is required, so adding a variant breaks every call site
    instead of silently falling through.

    Raises:
        TypeError: If *term* is not a GATerm.
    """
    handlers = {
        Scalar: on_scalar,
        Vector: on_vector,
        Bivector: on_bivector,
        Trivector: on_trivector,
        GeneralMultivector: on_multivector,
    }
    handler = handlers.get(type(term))
    if handler is None:
        raise TypeError(f"expected a GATerm, got {type(term).__name__}")
    return handler(term)


class GATermVisitor:
    """Class-based form of :func:`match_term`; override every ``visit_*``."""

    def visit_scalar(self, term: Scalar):
        raise NotImplementedError

    def visit_vector(self, term: Vector):
        raise NotImplementedError

    def visit_bivector(self, term: Bivector):
        raise NotImplementedError

    def visit_trivector(self, term: Trivector):
        raise NotImplementedError

    def visit_multivector(self, term: GeneralMultivector):
        raise NotImplementedError


def visit_term(term: GATerm, visitor: GATermVisitor):
    return match_term(
        term,
        visitor.visit_scalar,
        visitor.visit_vector,
        visitor.visit_bivector,
        visitor.visit_trivector,
        visitor.visit_multivector,
    )
