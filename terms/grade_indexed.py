# Bladework: Blade Algebra Engine (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0 | "Unbending" Paradigm

"""Grade-indexed values.

:class:`GradeIndexed` pairs a payload with a grade tag. The tag is checked
against the payload on construction and between operands on addition, so a
grade mismatch raises :class:`~core.validation.ShapeMismatch` instead of
computing nonsense.
"""

from numbers import Number
from typing import Generic, TypeVar

from core.algebra import BladeAlgebra
from core.grading import Grade, inner_product_grade, outer_product_grade
from core.multivector import Multivector
from core.validation import ShapeMismatch
from terms import operations
from terms.ga_term import (
    GATerm,
    get_grade,
    make_bivector,
    make_scalar,
    make_trivector,
    make_vector,
)

T = TypeVar('T')


def _check_tag(value, grade: Grade) -> None:
    if isinstance(value, GATerm):
        actual = get_grade(value)
        if actual is not grade:
            raise ShapeMismatch(f"payload is {actual.name}, tag says {grade.name}")
    elif isinstance(value, Multivector):
        if grade is Grade.MULTIVECTOR:
            return
        stray = sorted({b.grade for b in value.blades} - {int(grade)})
        if stray:
            raise ShapeMismatch(f"multivector holds grades {stray}, tag says {grade.name}")
    elif isinstance(value, Number) and grade is not Grade.SCALAR:
        raise ShapeMismatch(f"a bare number is a scalar, tag says {grade.name}")


class GradeIndexed(Generic[T]):
    """A value carrying its grade.

    Attributes:
        value (T): GATerm, Multivector or plain number.
        grade (Grade): The grade tag.
    """

    def __init__(self, value: T, grade: int):
        self.value = value
        self.grade = Grade(grade)
        _check_tag(value, self.grade)

    def __add__(self, other):
        """Same-grade addition; a grade mismatch raises ShapeMismatch."""
        if not isinstance(other, GradeIndexed):
            return NotImplemented
        if other.grade is not self.grade:
            raise ShapeMismatch(
                f"cannot add {self.grade.name} and {other.grade.name}"
            )
        if isinstance(self.value, GATerm):
            return GradeIndexed(operations.add(self.value, other.value), self.grade)
        return GradeIndexed(self.value + other.value, self.grade)

    def __mul__(self, s):
        """Scalar multiplication keeps the grade."""
        if isinstance(self.value, GATerm):
            return GradeIndexed(operations.scalar_multiply(s, self.value), self.grade)
        return GradeIndexed(self.value * s, self.grade)

    __rmul__ = __mul__

    @property
    def is_scalar(self) -> bool:
        return self.grade is Grade.SCALAR

    @property
    def is_vector(self) -> bool:
        return self.grade is Grade.VECTOR

    @property
    def is_bivector(self) -> bool:
        return self.grade is Grade.BIVECTOR

    @property
    def is_trivector(self) -> bool:
        return self.grade is Grade.TRIVECTOR

    @property
    def is_multivector(self) -> bool:
        return self.grade is Grade.MULTIVECTOR

    def __eq__(self, other):
        if not isinstance(other, GradeIndexed):
            return NotImplemented
        return self.grade is other.grade and self.value == other.value

    def __repr__(self):
        return f"GradeIndexed({self.value!r}, {self.grade.name})"


def scalar_type(value) -> GradeIndexed:
    return GradeIndexed(make_scalar(value), Grade.SCALAR)


def vector_type(components) -> GradeIndexed:
    return GradeIndexed(make_vector(components), Grade.VECTOR)


def bivector_type(components) -> GradeIndexed:
    return GradeIndexed(make_bivector(components), Grade.BIVECTOR)


def trivector_type(components) -> GradeIndexed:
    return GradeIndexed(make_trivector(components), Grade.TRIVECTOR)


def safe_add(lhs: GradeIndexed, rhs: GradeIndexed) -> GradeIndexed:
    return lhs + rhs


def safe_scalar_multiply(s, operand: GradeIndexed) -> GradeIndexed:
    return operand * s


def safe_outer_product(algebra: BladeAlgebra, lhs: GradeIndexed,
                       rhs: GradeIndexed) -> GradeIndexed:
    """Outer product tagged with ``g1 + g2`` (``MULTIVECTOR`` above 3)."""
    grade = outer_product_grade(lhs.grade, rhs.grade)
    if isinstance(lhs.value, Multivector) and isinstance(rhs.value, Multivector):
        return GradeIndexed(lhs.value ^ rhs.value, grade)
    if isinstance(lhs.value, GATerm) and isinstance(rhs.value, GATerm):
        return GradeIndexed(operations.outer_product(algebra, lhs.value, rhs.value), grade)
    raise TypeError("outer product needs two GATerm or two Multivector payloads")


def safe_inner_product(algebra: BladeAlgebra, lhs: GradeIndexed,
                       rhs: GradeIndexed) -> GradeIndexed:
    """Inner product tagged with ``|g1 - g2|``."""
    grade = inner_product_grade(lhs.grade, rhs.grade)
    if isinstance(lhs.value, Multivector) and isinstance(rhs.value, Multivector):
        return GradeIndexed(lhs.value | rhs.value, grade)
    if isinstance(lhs.value, GATerm) and isinstance(rhs.value, GATerm):
        return GradeIndexed(operations.inner_product(algebra, lhs.value, rhs.value), grade)
    raise TypeError("inner product needs two GATerm or two Multivector payloads")
