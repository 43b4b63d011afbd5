# Bladework: Blade Algebra Engine (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0 | "Unbending" Paradigm

"""Grade-checked operations on GATerms.

Addition is only defined between terms of the same variant and returns
``None`` otherwise, leaving it to the caller to skip, log or escalate.
Products always compute; they need the algebra whose Cayley tables define
the multiplication.
"""

import math
from typing import Callable, List, Optional

from core.algebra import BladeAlgebra
from core.blade import canonical_sign
from core.cayley import ProductKind
from core.grading import Grade, can_add as grades_can_add, inner_product_grade, outer_product_grade
from terms.convert import multivector_to_term, term_to_multivector
from terms.dispatch import match_term
from terms.ga_term import Entry, GATerm, Scalar, from_entries, get_grade


def _merge(lhs: List[Entry], rhs: List[Entry]) -> List[Entry]:
    """Combines like blades, keeping left order and appending new right blades.

    Blades written in a different order (``e1e0`` vs ``e0e1``) are the same
    blade; the right coefficient is re-signed to the left orientation.
    """
    result = [[idx, c] for idx, c in lhs]
    where = {}
    for pos, (idx, _) in enumerate(result):
        sign, key = canonical_sign(idx)
        where[key] = (pos, sign)
    for idx, c in rhs:
        sign, key = canonical_sign(idx)
        if key in where:
            pos, left_sign = where[key]
            if sign == left_sign:
                result[pos][1] = result[pos][1] + c
            else:
                result[pos][1] = result[pos][1] - c
        else:
            where[key] = (len(result), sign)
            result.append([idx, c])
    return [(tuple(idx), c) for idx, c in result]


def can_add(lhs: GATerm, rhs: GATerm) -> bool:
    return grades_can_add(get_grade(lhs), get_grade(rhs))


def add(lhs: GATerm, rhs: GATerm) -> Optional[GATerm]:
    """Sum of two terms of the same grade, or ``None`` if the grades differ."""
    if not can_add(lhs, rhs):
        return None
    if isinstance(lhs, Scalar):
        return Scalar(lhs.value + rhs.value)
    return from_entries(get_grade(lhs), _merge(lhs.entries(), rhs.entries()))


def scalar_multiply(s, term: GATerm) -> GATerm:
    """Scales every stored coefficient of *term* by *s*."""
    return match_term(
        term,
        lambda t: Scalar(s * t.value),
        lambda t: type(t)(tuple((i, s * c) for i, c in t.components)),
        lambda t: type(t)(tuple((i, j, s * c) for i, j, c in t.components)),
        lambda t: type(t)(tuple((i, j, k, s * c) for i, j, k, c in t.components)),
        lambda t: from_entries(Grade.MULTIVECTOR, [(idx, s * c) for idx, c in t.entries()]),
    )


def norm(term: GATerm) -> float:
    """``|value|`` for scalars, the coefficient 2-norm for everything else."""
    if isinstance(term, Scalar):
        return abs(term.value)
    return math.sqrt(sum(c * c for _, c in term.entries()))


def _fmt(c) -> str:
    if isinstance(c, float) and c.is_integer():
        return str(int(c))
    return str(c)


def _components(term: GATerm) -> str:
    return ", ".join(
        "".join(f"e{i}" for i in idx) + f":{_fmt(c)}" for idx, c in term.entries()
    )


def to_string(term: GATerm) -> str:
    """Readable form, e.g. ``Vector(e1:2, e2:3)``."""
    return match_term(
        term,
        lambda t: f"Scalar({_fmt(t.value)})",
        lambda t: f"Vector({_components(t)})",
        lambda t: f"Bivector({_components(t)})",
        lambda t: f"Trivector({_components(t)})",
        lambda t: f"Multivector({_components(t)})",
    )


# ----------------------------------------------------------------------
# Combinators
# ----------------------------------------------------------------------

def map_term(term: GATerm, f: Callable) -> GATerm:
    """Applies *f* to every coefficient, keeping the blade structure."""
    if isinstance(term, Scalar):
        return Scalar(f(term.value))
    return from_entries(get_grade(term), [(idx, f(c)) for idx, c in term.entries()])


def filter_term(term: GATerm, predicate: Callable) -> GATerm:
    """Keeps the blades whose coefficient satisfies *predicate*.

    A scalar has nothing to drop and is returned unchanged.
    """
    if isinstance(term, Scalar):
        return term
    return from_entries(get_grade(term), [(idx, c) for idx, c in term.entries() if predicate(c)])


def fold_term(term: GATerm, initial, f: Callable):
    acc = initial
    for _, c in term.entries():
        acc = f(acc, c)
    return acc


# ----------------------------------------------------------------------
# Products
# ----------------------------------------------------------------------

def _product(algebra: BladeAlgebra, lhs: GATerm, rhs: GATerm, kind: ProductKind):
    a = term_to_multivector(algebra, lhs)
    b = term_to_multivector(algebra, rhs)
    return a.product(b, kind)


def outer_product(algebra: BladeAlgebra, lhs: GATerm, rhs: GATerm) -> GATerm:
    """``lhs ^ rhs`` wrapped in the variant of grade ``g1 + g2``.

    Grades above 3 and general-multivector operands give a
    ``GeneralMultivector``.
    """
    grade = outer_product_grade(get_grade(lhs), get_grade(rhs))
    return multivector_to_term(_product(algebra, lhs, rhs, ProductKind.OUTER), grade)


def inner_product(algebra: BladeAlgebra, lhs: GATerm, rhs: GATerm) -> GATerm:
    """``lhs | rhs`` wrapped in the variant of grade ``|g1 - g2|``."""
    grade = inner_product_grade(get_grade(lhs), get_grade(rhs))
    return multivector_to_term(_product(algebra, lhs, rhs, ProductKind.INNER), grade)


def geometric_product(algebra: BladeAlgebra, lhs: GATerm, rhs: GATerm) -> GATerm:
    """``lhs rhs``; a single surviving grade keeps its variant, mixed grades
    give a ``GeneralMultivector``.
    """
    return multivector_to_term(_product(algebra, lhs, rhs, ProductKind.GEOMETRIC))
