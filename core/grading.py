# Bladework: Blade Algebra Engine (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0 | "Unbending" Paradigm

"""Grade admissibility rules.

One stateless policy shared by :class:`~core.multivector.Multivector` and the
grade-tagged term layer: addition needs equal grades, products always
compute but reach different result grades.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional

from core.cayley import ProductKind

MAX_NAMED_GRADE = 3


class Grade(IntEnum):
    SCALAR = 0
    VECTOR = 1
    BIVECTOR = 2
    TRIVECTOR = 3
    MULTIVECTOR = -1  # mixed or higher than trivector


def as_grade(k: int) -> Grade:
    """Named grade for an integer grade; anything above 3 is ``MULTIVECTOR``."""
    if 0 <= k <= MAX_NAMED_GRADE:
        return Grade(k)
    return Grade.MULTIVECTOR


def can_add(g1: int, g2: int) -> bool:
    return g1 == g2


def can_geometric_product(g1: int, g2: int) -> bool:
    return True


def can_outer_product(g1: int, g2: int) -> bool:
    return True


def can_inner_product(g1: int, g2: int) -> bool:
    return True


def geometric_product_grades(g1: int, g2: int, n: Optional[int] = None) -> List[int]:
    """Grades a geometric product of grade-g1 and grade-g2 blades can reach.

    ``|g1 - g2|, |g1 - g2| + 2, ..., g1 + g2``, capped at *n* when the
    algebra dimension is known. A ``MULTIVECTOR`` operand reaches every grade.
    """
    if g1 < 0 or g2 < 0:
        top = n if n is not None else MAX_NAMED_GRADE
        return list(range(top + 1))
    top = g1 + g2 if n is None else min(g1 + g2, n)
    return list(range(abs(g1 - g2), top + 1, 2))


def outer_product_grade(g1: int, g2: int) -> Grade:
    if g1 < 0 or g2 < 0:
        return Grade.MULTIVECTOR
    return as_grade(g1 + g2)


def inner_product_grade(g1: int, g2: int) -> Grade:
    if g1 < 0 or g2 < 0:
        return Grade.MULTIVECTOR
    return as_grade(abs(g1 - g2))


def reachable_grades(kind: ProductKind, g1: int, g2: int,
                     n: Optional[int] = None) -> List[int]:
    """Integer result grades *kind* can produce from grade-g1 and grade-g2 blades."""
    if kind is ProductKind.GEOMETRIC:
        return geometric_product_grades(g1, g2, n)
    if kind is ProductKind.OUTER:
        k = g1 + g2
        return [k] if n is None or k <= n else []
    return [abs(g1 - g2)]


@dataclass(frozen=True)
class OperationMatrix:
    """Admissibility summary for a pair of grades."""

    g1: int
    g2: int

    @property
    def can_add(self) -> bool:
        return can_add(self.g1, self.g2)

    @property
    def can_geometric_product(self) -> bool:
        return can_geometric_product(self.g1, self.g2)

    @property
    def can_outer_product(self) -> bool:
        return can_outer_product(self.g1, self.g2)

    @property
    def can_inner_product(self) -> bool:
        return can_inner_product(self.g1, self.g2)

    @property
    def outer_product_result(self) -> Grade:
        return outer_product_grade(self.g1, self.g2)

    @property
    def inner_product_result(self) -> Grade:
        return inner_product_grade(self.g1, self.g2)

    @property
    def geometric_product_results(self) -> List[int]:
        return geometric_product_grades(self.g1, self.g2)
