# Bladework: Blade Algebra Engine (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0 | "Unbending" Paradigm

"""Core blade algebra kernel.

Provides metrics, blades, Cayley table construction and caching, the
algebra object, sparse multivectors, grade rules, validation and
configuration.
"""

from .metric import Metric
from .blade import Blade, canonical_sign, all_blades, blades_of_grade
from .cayley import (
    ProductKind,
    CayleyEntry,
    CayleyTable,
    CayleyCache,
    build_cayley_table,
    lookup,
)
from .algebra import BladeAlgebra
from .multivector import Multivector
from .grading import (
    Grade,
    OperationMatrix,
    can_add,
    geometric_product_grades,
    outer_product_grade,
    inner_product_grade,
    reachable_grades,
)
from .validation import ShapeMismatch, DimensionMismatch, DegenerateMetricEntry
from .config import resolve_device, algebra_from_config, load_algebra

__all__ = [
    # metric / blades
    "Metric",
    "Blade",
    "canonical_sign",
    "all_blades",
    "blades_of_grade",
    # cayley
    "ProductKind",
    "CayleyEntry",
    "CayleyTable",
    "CayleyCache",
    "build_cayley_table",
    "lookup",
    # algebra
    "BladeAlgebra",
    "Multivector",
    # grading
    "Grade",
    "OperationMatrix",
    "can_add",
    "geometric_product_grades",
    "outer_product_grade",
    "inner_product_grade",
    "reachable_grades",
    # errors
    "ShapeMismatch",
    "DimensionMismatch",
    "DegenerateMetricEntry",
    # config
    "resolve_device",
    "algebra_from_config",
    "load_algebra",
]
