# Bladework: Blade Algebra Engine
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want
# the industry to build upon this "unbending" paradigm.

import warnings
from typing import List, Optional, Union

import torch

from core.blade import Blade, all_blades, blades_of_grade, popcount
from core.cayley import (
    MAX_DIMENSION,
    CayleyCache,
    CayleyEntry,
    CayleyTable,
    ProductKind,
    build_cayley_table,
)
from core.metric import MatrixLike, Metric
from core.validation import (
    DegenerateMetricEntry,
    DimensionMismatch,
    check_blade_mask,
)
from log import get_logger

logger = get_logger(__name__)


class BladeAlgebra:
    """Blade algebra over a bilinear metric.

    Owns the metric and the Cayley cache its multivectors consult. Pass the
    algebra explicitly to everything that multiplies blades; two algebras
    only share tables when they are handed the same :class:`CayleyCache`.

    Supports degenerate (null) directions: a basis vector whose
    self-contraction is zero squares to zero, and every product through it
    is stored in the tables with sign 0.

    Attributes:
        metric (Metric): The bilinear form.
        n (int): Number of basis vectors.
        dim (int): Number of blades (2^n).
        cache (CayleyCache): Memoized Cayley tables for this algebra.
        device (str): Default device for multivectors built by the algebra.
    """

    def __init__(self, metric: Union[Metric, MatrixLike], dim: Optional[int] = None,
                 cache: Optional[CayleyCache] = None, device='cpu'):
        """Initialize the algebra. Tables are built on first use.

        Args:
            metric: A :class:`Metric` or a square matrix to build one from.
            dim (int, optional): Declared number of basis vectors.
            cache (CayleyCache, optional): Table store to share with other
                algebras. Defaults to a fresh cache owned by this algebra.
            device (str, optional): Default device. Defaults to 'cpu'.

        Raises:
            DimensionMismatch: If the metric size disagrees with *dim*.
        """
        if not isinstance(metric, Metric):
            metric = Metric(metric, dim)
        elif dim is not None and metric.n != dim:
            raise DimensionMismatch(
                f"metric has {metric.n} basis vectors but the algebra declares {dim}"
            )
        assert metric.n <= MAX_DIMENSION, (
            f"dimension must be <= {MAX_DIMENSION}, got {metric.n}"
        )

        self.metric = metric
        self.n = metric.n
        self.dim = 1 << self.n
        self.cache = cache if cache is not None else CayleyCache()
        self.device = device

        null = metric.null_directions()
        if null:
            warnings.warn(
                f"basis vectors {null} square to zero; their products vanish "
                f"with sign 0 in the Cayley tables",
                DegenerateMetricEntry,
                stacklevel=2,
            )

        # Reverse signs: blade of grade k gets (-1)^(k(k-1)/2)
        self.rev_signs = torch.tensor(
            [(-1.0) ** (k * (k - 1) // 2) for k in (popcount(m) for m in range(self.dim))],
            dtype=torch.float64,
        )

    @classmethod
    def euclidean(cls, n: int, **kwargs) -> 'BladeAlgebra':
        return cls(Metric.euclidean(n), **kwargs)

    @classmethod
    def from_signature(cls, p: int, q: int = 0, r: int = 0, **kwargs) -> 'BladeAlgebra':
        """``Cl(p, q, r)``: p positive, q negative, r null basis vectors."""
        return cls(Metric.from_signature(p, q, r), **kwargs)

    @classmethod
    def conformal(cls, euclidean_dim: int = 3, **kwargs) -> 'BladeAlgebra':
        """Null-basis conformal algebra over ``e0, e1..ed, ei``."""
        return cls(Metric.conformal(euclidean_dim), **kwargs)

    @property
    def num_grades(self) -> int:
        """Counts the number of grades (n + 1)."""
        return self.n + 1

    def table(self, kind: ProductKind = ProductKind.GEOMETRIC) -> CayleyTable:
        """Cayley table for *kind*, built once and then reused."""
        return build_cayley_table(self.metric, self.n, kind, cache=self.cache)

    def lookup(self, blade1, blade2,
               kind: ProductKind = ProductKind.GEOMETRIC) -> CayleyEntry:
        """Product of two basis blades (masks or :class:`Blade`)."""
        m1 = blade1.mask if isinstance(blade1, Blade) else int(blade1)
        m2 = blade2.mask if isinstance(blade2, Blade) else int(blade2)
        return self.table(kind).entry(m1, m2)

    def blades(self, grade: Optional[int] = None) -> List[Blade]:
        """All blades, or those of one grade, in ascending mask order."""
        if grade is None:
            return all_blades(self.n)
        return blades_of_grade(self.n, grade)

    def blade(self, *indices: int) -> Blade:
        blade = Blade.from_indices(indices)
        check_blade_mask(blade.mask, self.n, "blade")
        return blade

    def pseudoscalar(self) -> Blade:
        return Blade.pseudoscalar(self.n)

    def reverse_sign(self, blade) -> float:
        mask = blade.mask if isinstance(blade, Blade) else int(blade)
        check_blade_mask(mask, self.n, "blade")
        return float(self.rev_signs[mask])

    def multivector(self, terms, dtype=torch.float64, device=None):
        """Builds a :class:`~core.multivector.Multivector` from ``{blade: coeff}``.

        Keys may be :class:`Blade` instances, masks, or tuples of basis
        indices in any order (the reordering sign is applied).
        """
        from core.multivector import Multivector
        return Multivector.from_terms(self, terms, dtype=dtype, device=device)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BladeAlgebra):
            return NotImplemented
        return self.metric == other.metric

    def __hash__(self) -> int:
        return hash(self.metric)

    def __repr__(self) -> str:
        return f"BladeAlgebra({self.metric!r})"
