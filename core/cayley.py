# Bladework: Blade Algebra Engine
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want
# the industry to build upon this "unbending" paradigm.

"""Cayley tables: the multiplication law of basis blades.

For a metric and a product kind, a Cayley table maps every ordered pair of
blade masks to a result blade and a signed scale factor. Tables are total:
a vanishing product is stored as sign 0, never left out.
"""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

import torch

from core.blade import Blade, mask_to_indices, popcount
from core.metric import Metric
from core.validation import DimensionMismatch, check_blade_mask
from log import get_logger

logger = get_logger(__name__)

MAX_DIMENSION = 10


class ProductKind(Enum):
    GEOMETRIC = "geometric"
    OUTER = "outer"
    INNER = "inner"


@dataclass(frozen=True)
class CayleyEntry:
    """Result of multiplying two basis blades.

    Attributes:
        result (Blade): Blade the product lands on (scalar when it vanishes).
        sign (float): Signed scale factor; 0 when the product vanishes.
    """

    result: Blade
    sign: float

    @property
    def vanishes(self) -> bool:
        return self.sign == 0.0


@dataclass(frozen=True, eq=False)
class CayleyTable:
    """Total blade-pair table for one metric and one product kind.

    Attributes:
        kind (ProductKind): Product the table describes.
        n (int): Number of basis vectors.
        indices (torch.Tensor): ``[2^n, 2^n]`` result masks (long).
        signs (torch.Tensor): ``[2^n, 2^n]`` signed scale factors (float64).
    """

    kind: ProductKind
    n: int
    indices: torch.Tensor
    signs: torch.Tensor

    @property
    def dim(self) -> int:
        return 1 << self.n

    def entry(self, m1: int, m2: int) -> CayleyEntry:
        check_blade_mask(m1, self.n, "left blade")
        check_blade_mask(m2, self.n, "right blade")
        return CayleyEntry(
            Blade(int(self.indices[m1, m2])), float(self.signs[m1, m2])
        )


def _geometric_entry(metric: Metric, b1: int, b2: int) -> Tuple[int, float]:
    """Reorders ``b1 b2`` into canonical order, contracting repeated vectors.

    Gnome sort over the concatenated index list: a swap of two distinct
    vectors flips the sign, two equal neighbours annihilate into their
    self-contraction.
    """
    if b1 == 0:
        return b2, 1.0
    if b2 == 0:
        return b1, 1.0

    seq = mask_to_indices(b1) + mask_to_indices(b2)
    sign = 1.0
    k = 0
    while k < len(seq) - 1:
        a, b = seq[k], seq[k + 1]
        if a < b:
            k += 1
        elif a > b:
            seq[k], seq[k + 1] = b, a
            sign = -sign
            k = max(k - 1, 0)
        else:
            sq = metric.contraction(a, a)
            if sq == 0.0:
                return 0, 0.0
            sign *= sq
            del seq[k:k + 2]
            k = max(k - 1, 0)

    result = 0
    for i in seq:
        result |= 1 << i
    return result, sign


def _outer_entry(metric: Metric, b1: int, b2: int) -> Tuple[int, float]:
    if b1 & b2:
        return 0, 0.0
    # Disjoint blades never contract, so only the permutation sign remains
    return _geometric_entry(metric, b1, b2)


def _inner_entry(metric: Metric, b1: int, b2: int) -> Tuple[int, float]:
    """Contracting product of two blades.

    Every basis vector of the left blade is paired with the first remaining
    vector of the right blade it has a non-zero metric value with. Moving
    ``e_i`` to the end of the left residual and ``e_j`` to the front of the
    right residual costs one sign flip per vector passed.
    """
    if b1 == 0 or b2 == 0:
        return 0, 0.0

    lhs, rhs = b1, b2
    sign = 1.0
    for i in mask_to_indices(b1):
        for j in mask_to_indices(b2):
            if not (lhs >> i) & 1 or not (rhs >> j) & 1:
                continue
            g = metric.contraction(i, j)
            if g == 0.0:
                continue
            shifts = popcount(lhs >> (i + 1)) + popcount(rhs & ((1 << j) - 1))
            sign *= g * (-1.0) ** shifts
            lhs ^= 1 << i
            rhs ^= 1 << j
            break

    if lhs & rhs or popcount(lhs ^ rhs) != abs(popcount(b1) - popcount(b2)):
        return 0, 0.0
    return lhs ^ rhs, sign


_ENTRY_RULES = {
    ProductKind.GEOMETRIC: _geometric_entry,
    ProductKind.OUTER: _outer_entry,
    ProductKind.INNER: _inner_entry,
}


def _build(metric: Metric, kind: ProductKind) -> CayleyTable:
    n = metric.n
    assert n <= MAX_DIMENSION, f"dimension must be <= {MAX_DIMENSION}, got {n}"
    if kind is ProductKind.GEOMETRIC and not metric.is_diagonal():
        logger.warning(
            "Geometric table for a non-diagonal metric contracts diagonal "
            "entries only; off-diagonal terms appear in the inner table"
        )

    rule = _ENTRY_RULES[kind]
    dim = 1 << n
    indices = [[0] * dim for _ in range(dim)]
    signs = [[0.0] * dim for _ in range(dim)]
    for b1 in range(dim):
        for b2 in range(dim):
            indices[b1][b2], signs[b1][b2] = rule(metric, b1, b2)

    logger.debug(f"Built {kind.value} Cayley table for {metric!r} ({dim * dim} entries)")
    return CayleyTable(
        kind=kind,
        n=n,
        indices=torch.tensor(indices, dtype=torch.long),
        signs=torch.tensor(signs, dtype=torch.float64),
    )


class CayleyCache:
    """Compute-once store of Cayley tables.

    Keyed by ``(metric identity, product kind)``; the metric identity
    includes its dimension. Entries are never evicted. The first build of a
    key runs under a lock; published tables are read without it.
    """

    def __init__(self):
        self._tables: Dict[Tuple, CayleyTable] = {}
        self._lock = threading.Lock()

    def get(self, metric: Metric, kind: ProductKind) -> CayleyTable:
        key = (metric.key, kind)
        table = self._tables.get(key)
        if table is not None:
            return table
        with self._lock:
            table = self._tables.get(key)
            if table is None:
                table = _build(metric, kind)
                self._tables[key] = table
        return table

    def __contains__(self, item) -> bool:
        metric, kind = item
        return (metric.key, kind) in self._tables

    def __len__(self) -> int:
        return len(self._tables)


def build_cayley_table(metric: Metric, dimension: int, kind: ProductKind,
                       cache: Optional[CayleyCache] = None) -> CayleyTable:
    """Returns the Cayley table of *metric* for *kind*.

    Args:
        metric (Metric): Bilinear form over the basis vectors.
        dimension (int): Declared number of basis vectors.
        kind (ProductKind): Product to tabulate.
        cache (CayleyCache, optional): Store to memoize in. Without one the
            table is built afresh.

    Raises:
        DimensionMismatch: If *metric* is not ``dimension x dimension``.
    """
    if metric.n != dimension:
        raise DimensionMismatch(
            f"metric has {metric.n} basis vectors, expected {dimension}"
        )
    if cache is None:
        return _build(metric, kind)
    return cache.get(metric, kind)


def lookup(table: CayleyTable, blade1, blade2) -> CayleyEntry:
    """Table entry for ``blade1 * blade2``; blades may be masks or :class:`Blade`."""
    m1 = blade1.mask if isinstance(blade1, Blade) else int(blade1)
    m2 = blade2.mask if isinstance(blade2, Blade) else int(blade2)
    return table.entry(m1, m2)
