# Bladework: Blade Algebra Engine (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0 | "Unbending" Paradigm

"""Grade-tagged terms over the blade algebra.

Provides the closed GATerm variant set, exhaustive dispatch, grade-checked
operations and grade-indexed values.
"""

from .ga_term import (
    Index,
    BladeTerm,
    GATerm,
    Scalar,
    Vector,
    Bivector,
    Trivector,
    GeneralMultivector,
    make_scalar,
    make_vector,
    make_bivector,
    make_trivector,
    make_multivector,
    get_grade,
)
from .dispatch import match_term, GATermVisitor, visit_term
from .convert import term_to_multivector, multivector_to_term
from .operations import (
    add,
    can_add,
    scalar_multiply,
    norm,
    to_string,
    map_term,
    filter_term,
    fold_term,
    outer_product,
    inner_product,
    geometric_product,
)
from .grade_indexed import (
    GradeIndexed,
    scalar_type,
    vector_type,
    bivector_type,
    trivector_type,
    safe_add,
    safe_scalar_multiply,
    safe_outer_product,
    safe_inner_product,
)

__all__ = [
    # variants
    "Index",
    "BladeTerm",
    "GATerm",
    "Scalar",
    "Vector",
    "Bivector",
    "Trivector",
    "GeneralMultivector",
    "make_scalar",
    "make_vector",
    "make_bivector",
    "make_trivector",
    "make_multivector",
    "get_grade",
    # dispatch
    "match_term",
    "GATermVisitor",
    "visit_term",
    # conversion
    "term_to_multivector",
    "multivector_to_term",
    # operations
    "add",
    "can_add",
    "scalar_multiply",
    "norm",
    "to_string",
    "map_term",
    "filter_term",
    "fold_term",
    "outer_product",
    "inner_product",
    "geometric_product",
    # grade-indexed
    "GradeIndexed",
    "scalar_type",
    "vector_type",
    "bivector_type",
    "trivector_type",
    "safe_add",
    "safe_scalar_multiply",
    "safe_outer_product",
    "safe_inner_product",
]
