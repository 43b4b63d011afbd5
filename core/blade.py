# Bladework: Blade Algebra Engine (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0 | "Unbending" Paradigm

"""Basis blades as bitmasks.

Bit ``i`` of a mask is set when basis vector ``e_i`` is a factor of the
blade. ``e0`` is mask ``1``, ``e1`` is mask ``2``, ``e0e1`` is mask ``3``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple


def popcount(mask: int) -> int:
    """Number of set bits, i.e. the grade of the blade *mask*."""
    return bin(mask).count('1')


def mask_to_indices(mask: int) -> List[int]:
    """Ascending basis indices present in *mask*."""
    indices = []
    pos = 0
    while mask:
        if mask & 1:
            indices.append(pos)
        mask >>= 1
        pos += 1
    return indices


def indices_to_mask(indices: Iterable[int]) -> int:
    """Mask of the blade spanned by *indices* (order and repeats ignored)."""
    mask = 0
    for i in indices:
        mask |= 1 << i
    return mask


def canonical_sign(indices: Iterable[int]) -> Tuple[int, Tuple[int, ...]]:
    """Sort distinct basis indices, counting transpositions.

    Args:
        indices: Basis indices as written, e.g. ``(2, 0)`` for ``e2 e0``.

    Returns:
        ``(sign, sorted_indices)`` with ``e2 e0 == sign * e0 e2``.

    Raises:
        ValueError: If an index repeats (that is a product, not a blade).
    """
    seq = list(indices)
    if len(set(seq)) != len(seq):
        raise ValueError(f"repeated basis index in blade {tuple(seq)}")
    sign = 1
    # Insertion sort: each adjacent swap of distinct vectors anticommutes
    for k in range(1, len(seq)):
        j = k
        while j > 0 and seq[j - 1] > seq[j]:
            seq[j - 1], seq[j] = seq[j], seq[j - 1]
            sign = -sign
            j -= 1
    return sign, tuple(seq)


@dataclass(frozen=True)
class Blade:
    """A basis blade of the algebra.

    Equality and hashing use the mask only; ``grade`` is derived.

    Attributes:
        mask (int): Bitset of the basis vectors in the blade.
        grade (int): ``popcount(mask)``.
    """

    mask: int
    grade: int = field(init=False, compare=False)

    def __post_init__(self):
        if self.mask < 0:
            raise ValueError(f"blade mask must be non-negative, got {self.mask}")
        object.__setattr__(self, 'grade', popcount(self.mask))

    @classmethod
    def scalar(cls) -> Blade:
        return cls(0)

    @classmethod
    def pseudoscalar(cls, n: int) -> Blade:
        return cls((1 << n) - 1)

    @classmethod
    def basis(cls, i: int) -> Blade:
        """The grade-1 blade ``e_i``."""
        return cls(1 << i)

    @classmethod
    def from_indices(cls, indices: Iterable[int]) -> Blade:
        """Blade spanned by *indices*. Use :func:`canonical_sign` for the sign."""
        return cls(indices_to_mask(indices))

    @property
    def indices(self) -> Tuple[int, ...]:
        return tuple(mask_to_indices(self.mask))

    def __contains__(self, i: int) -> bool:
        return bool(self.mask & (1 << i))

    def __str__(self) -> str:
        if self.mask == 0:
            return "1"
        return "".join(f"e{i}" for i in self.indices)

    def __repr__(self) -> str:
        return f"Blade({self}, grade={self.grade})"


def all_blades(n: int) -> List[Blade]:
    """Every blade of ``Cl(n)`` in mask order."""
    return [Blade(m) for m in range(1 << n)]


def blades_of_grade(n: int, k: int) -> List[Blade]:
    """Blades of grade *k* in ``Cl(n)``, ascending by mask."""
    return [Blade(m) for m in range(1 << n) if popcount(m) == k]
