# Bladework: Blade Algebra Engine (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0 | "Unbending" Paradigm

"""Grade-tagged terms.

A :class:`GATerm` is exactly one of five variants: :class:`Scalar`,
:class:`Vector`, :class:`Bivector`, :class:`Trivector` or
:class:`GeneralMultivector`. The variant is the grade; there is no
"unknown grade" term. Within a term every blade appears at most once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, List, Tuple

from core.blade import canonical_sign
from core.grading import Grade, as_grade
from core.validation import check_unique

Index = int
Entry = Tuple[Tuple[int, ...], Any]


def _check_blades(entries: List[Entry], name: str) -> None:
    keys = []
    for indices, _ in entries:
        _, ordered = canonical_sign(indices)
        keys.append(ordered)
    check_unique(keys, name)


@dataclass(frozen=True)
class BladeTerm:
    """One weighted blade of a general multivector.

    Attributes:
        indices (Tuple[int, ...]): Strictly ascending basis indices.
        coefficient: Weight of the blade.
    """

    indices: Tuple[int, ...]
    coefficient: Any

    def __post_init__(self):
        indices = tuple(int(i) for i in self.indices)
        if any(a >= b for a, b in zip(indices, indices[1:])):
            raise ValueError(f"blade indices must be strictly ascending, got {indices}")
        object.__setattr__(self, 'indices', indices)

    @property
    def grade(self) -> Grade:
        return as_grade(len(self.indices))


class GATerm:
    """Base of the closed variant set. Do not subclass outside this module."""

    grade: ClassVar[Grade]

    def entries(self) -> List[Entry]:
        """``(indices, coefficient)`` for every stored blade."""
        raise NotImplementedError


@dataclass(frozen=True)
class Scalar(GATerm):
    value: Any

    grade: ClassVar[Grade] = Grade.SCALAR

    def entries(self) -> List[Entry]:
        return [((), self.value)]


@dataclass(frozen=True)
class Vector(GATerm):
    components: Tuple[Tuple[Index, Any], ...]

    grade: ClassVar[Grade] = Grade.VECTOR

    def __post_init__(self):
        comps = tuple((int(i), c) for i, c in self.components)
        object.__setattr__(self, 'components', comps)
        _check_blades(self.entries(), "vector")

    def entries(self) -> List[Entry]:
        return [((i,), c) for i, c in self.components]


@dataclass(frozen=True)
class Bivector(GATerm):
    components: Tuple[Tuple[Index, Index, Any], ...]

    grade: ClassVar[Grade] = Grade.BIVECTOR

    def __post_init__(self):
        comps = tuple((int(i), int(j), c) for i, j, c in self.components)
        object.__setattr__(self, 'components', comps)
        _check_blades(self.entries(), "bivector")

    def entries(self) -> List[Entry]:
        return [((i, j), c) for i, j, c in self.components]


@dataclass(frozen=True)
class Trivector(GATerm):
    components: Tuple[Tuple[Index, Index, Index, Any], ...]

    grade: ClassVar[Grade] = Grade.TRIVECTOR

    def __post_init__(self):
        comps = tuple((int(i), int(j), int(k), c) for i, j, k, c in self.components)
        object.__setattr__(self, 'components', comps)
        _check_blades(self.entries(), "trivector")

    def entries(self) -> List[Entry]:
        return [((i, j, k), c) for i, j, k, c in self.components]


@dataclass(frozen=True)
class GeneralMultivector(GATerm):
    terms: Tuple[BladeTerm, ...]

    grade: ClassVar[Grade] = Grade.MULTIVECTOR

    def __post_init__(self):
        terms = tuple(
            t if isinstance(t, BladeTerm) else BladeTerm(tuple(t[0]), t[1])
            for t in self.terms
        )
        object.__setattr__(self, 'terms', terms)
        check_unique([t.indices for t in terms], "multivector")

    def entries(self) -> List[Entry]:
        return [(t.indices, t.coefficient) for t in self.terms]


VARIANTS = (Scalar, Vector, Bivector, Trivector, GeneralMultivector)

_BY_GRADE = {
    Grade.SCALAR: Scalar,
    Grade.VECTOR: Vector,
    Grade.BIVECTOR: Bivector,
    Grade.TRIVECTOR: Trivector,
    Grade.MULTIVECTOR: GeneralMultivector,
}


def make_scalar(value) -> Scalar:
    return Scalar(value)


def make_vector(components: Iterable[Tuple[Index, Any]]) -> Vector:
    return Vector(tuple(components))


def make_bivector(components: Iterable[Tuple[Index, Index, Any]]) -> Bivector:
    return Bivector(tuple(components))


def make_trivector(components: Iterable[Tuple[Index, Index, Index, Any]]) -> Trivector:
    return Trivector(tuple(components))


def make_multivector(terms: Iterable) -> GeneralMultivector:
    """General multivector from :class:`BladeTerm` or ``(indices, coeff)`` pairs."""
    return GeneralMultivector(tuple(terms))


def from_entries(grade: Grade, entries: Iterable[Entry]) -> GATerm:
    """Builds the variant for *grade* from ``(indices, coefficient)`` pairs.

    For ``SCALAR`` the coefficients are summed (an empty list gives 0.0).
    """
    cls = _BY_GRADE[Grade(grade)]
    entries = list(entries)
    if cls is Scalar:
        return Scalar(sum((c for _, c in entries), 0.0))
    if cls is GeneralMultivector:
        return GeneralMultivector(tuple(BladeTerm(idx, c) for idx, c in entries))
    for idx, _ in entries:
        if len(idx) != int(cls.grade):
            raise ValueError(
                f"{cls.__name__} takes grade-{int(cls.grade)} blades, got indices {idx}"
            )
    return cls(tuple((*idx, c) for idx, c in entries))


def get_grade(term: GATerm) -> Grade:
    """Grade of *term*; ``MULTIVECTOR`` for general multivectors."""
    if not isinstance(term, GATerm):
        raise TypeError(f"expected a GATerm, got {type(term).__name__}")
    return type(term).grade
