# Bladework: Blade Algebra Engine (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0 | "Unbending" Paradigm

"""Bridge between grade-tagged terms and algebra multivectors."""

from typing import Optional

import torch

from core.algebra import BladeAlgebra
from core.grading import Grade, as_grade
from core.multivector import Multivector
from terms.ga_term import GATerm, from_entries


def term_to_multivector(algebra: BladeAlgebra, term: GATerm,
                        dtype=torch.float64) -> Multivector:
    """Multivector over exactly the blades stored in *term*.

    Raises:
        IndexError: If a basis index lies outside the algebra.
    """
    if not isinstance(term, GATerm):
        raise TypeError(f"expected a GATerm, got {type(term).__name__}")
    coeffs = {tuple(indices): c for indices, c in term.entries()}
    return Multivector.from_terms(algebra, coeffs, dtype=dtype)


def multivector_to_term(mv: Multivector, grade: Optional[Grade] = None) -> GATerm:
    """Wraps an unbatched multivector in a GATerm variant.

    Blades with a zero coefficient are dropped. With *grade* given the
    result is that variant and only blades of that grade are kept. Without
    it the variant follows the grades that survive: one named grade gives
    its variant, none gives ``Scalar(0.0)``, anything else a
    ``GeneralMultivector``.
    """
    if mv.tensor.ndim != 1:
        raise ValueError(
            f"only unbatched multivectors convert to terms, got shape {tuple(mv.tensor.shape)}"
        )
    live = [(b, c) for b, c in zip(mv.blades, mv.tensor.tolist()) if c != 0.0]

    if grade is None:
        grades = {b.grade for b, _ in live}
        if not grades:
            grade = Grade.SCALAR
        elif len(grades) == 1:
            grade = as_grade(grades.pop())
        else:
            grade = Grade.MULTIVECTOR
    grade = Grade(grade)

    if grade is not Grade.MULTIVECTOR:
        live = [(b, c) for b, c in live if b.grade == int(grade)]
    return from_entries(grade, [(b.indices, c) for b, c in live])
