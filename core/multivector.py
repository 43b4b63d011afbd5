# Bladework: Blade Algebra Engine
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want
# the industry to build upon this "unbending" paradigm.

"""Sparse multivector container.

A multivector declares an ordered support (the blades it may hold) and
stores one coefficient per support blade in the last tensor dimension.
Products consult the owning algebra's Cayley tables.
"""

from typing import Iterable, Mapping, Optional, Sequence, Tuple

import torch

from core import validation
from core.algebra import BladeAlgebra
from core.blade import Blade, canonical_sign
from core.cayley import ProductKind
from core.grading import reachable_grades
from core.validation import (
    ShapeMismatch,
    check_basis_index,
    check_blade_mask,
    check_coefficients,
    check_same_algebra,
    check_same_support,
    check_unique,
)

Number = (int, float)


def _as_blade(algebra: BladeAlgebra, blade) -> Blade:
    if not isinstance(blade, Blade):
        blade = Blade(int(blade))
    check_blade_mask(blade.mask, algebra.n, "support blade")
    return blade


class Multivector:
    """Coefficients over a declared blade support.

    Allows natural mathematical syntax: ``A + B``, ``A * B`` (geometric),
    ``A ^ B`` (outer), ``A | B`` (inner), ``~A`` (reverse), ``s * A``.

    Attributes:
        algebra (BladeAlgebra): The algebra the blades belong to.
        blades (Tuple[Blade, ...]): Ordered, duplicate-free support.
        tensor (torch.Tensor): Coefficients ``[..., len(blades)]``.
    """

    def __init__(self, algebra: BladeAlgebra, blades: Iterable, tensor):
        """Initializes a Multivector.

        Args:
            algebra (BladeAlgebra): The algebra instance.
            blades: Support blades (:class:`Blade` or masks), in storage order.
            tensor: Coefficients; lists are converted to float64.

        Raises:
            IndexError: If a blade lies outside the algebra.
            ValueError: If a blade repeats in the support.
        """
        self.algebra = algebra
        self.blades: Tuple[Blade, ...] = tuple(_as_blade(algebra, b) for b in blades)
        check_unique(self.blades, "support")
        if not isinstance(tensor, torch.Tensor):
            tensor = torch.as_tensor(tensor, dtype=torch.float64)
        check_coefficients(tensor, len(self.blades), "tensor")
        self.tensor = tensor

    @classmethod
    def zeros(cls, algebra: BladeAlgebra, blades: Iterable, batch_shape=(),
              dtype=torch.float64, device=None) -> 'Multivector':
        """The zero multivector over *blades*."""
        blades = tuple(blades)
        device = device if device is not None else algebra.device
        return cls(algebra, blades,
                   torch.zeros(*batch_shape, len(blades), dtype=dtype, device=device))

    @classmethod
    def from_terms(cls, algebra: BladeAlgebra, terms: Mapping,
                   dtype=torch.float64, device=None) -> 'Multivector':
        """Creates a Multivector from ``{blade: coefficient}``.

        Keys are :class:`Blade` instances, masks, or tuples of basis indices.
        Index tuples are reordered canonically with the matching sign, so
        ``{(1, 0): 2.0}`` is ``-2 e0e1``. Keys naming the same blade are summed.
        The support follows first appearance.

        Args:
            algebra (BladeAlgebra): The algebra instance.
            terms (Mapping): Blade keys to scalar coefficients.

        Returns:
            Multivector: Unbatched multivector.
        """
        order = []
        coeffs = {}
        for key, value in terms.items():
            if isinstance(key, tuple):
                for i in key:
                    check_basis_index(i, algebra.n)
                sign, ordered = canonical_sign(key)
                blade = Blade.from_indices(ordered)
            else:
                sign, blade = 1, _as_blade(algebra, key)
            if blade not in coeffs:
                order.append(blade)
                coeffs[blade] = 0.0
            coeffs[blade] = coeffs[blade] + sign * value
        device = device if device is not None else algebra.device
        tensor = torch.tensor([float(coeffs[b]) for b in order], dtype=dtype, device=device)
        return cls(algebra, order, tensor)

    @classmethod
    def from_vectors(cls, algebra: BladeAlgebra, vectors: torch.Tensor) -> 'Multivector':
        """Creates a grade-1 Multivector from dense vectors ``[..., n]``."""
        check_coefficients(vectors, algebra.n, "vectors")
        return cls(algebra, algebra.blades(1), vectors)

    @classmethod
    def from_dense(cls, algebra: BladeAlgebra, tensor: torch.Tensor) -> 'Multivector':
        """Wraps a full ``[..., 2^n]`` coefficient tensor (mask order)."""
        return cls(algebra, algebra.blades(), tensor)

    @property
    def batch_shape(self) -> torch.Size:
        return self.tensor.shape[:-1]

    @property
    def dtype(self) -> torch.dtype:
        return self.tensor.dtype

    def grades(self) -> Tuple[int, ...]:
        """Distinct grades present in the support, ascending."""
        return tuple(sorted({b.grade for b in self.blades}))

    def coefficient(self, blade) -> torch.Tensor:
        """Coefficient of *blade*; zero for blades outside the support."""
        blade = _as_blade(self.algebra, blade)
        if blade in self.blades:
            return self.tensor[..., self.blades.index(blade)]
        return torch.zeros(self.batch_shape, dtype=self.dtype, device=self.tensor.device)

    def to_dense(self) -> torch.Tensor:
        """Coefficients over every blade of the algebra ``[..., 2^n]``."""
        out = torch.zeros(*self.batch_shape, self.algebra.dim,
                          dtype=self.dtype, device=self.tensor.device)
        if self.blades:
            idx = torch.tensor([b.mask for b in self.blades], device=self.tensor.device)
            out[..., idx] = self.tensor
        return out

    def __repr__(self):
        support = ", ".join(str(b) for b in self.blades)
        return (f"Multivector(shape={tuple(self.tensor.shape)}, support=[{support}], "
                f"algebra={self.algebra!r})")

    def __str__(self):
        if self.tensor.ndim != 1:
            return repr(self)
        parts = []
        for blade, c in zip(self.blades, self.tensor.tolist()):
            parts.append(f"{c:g}" if blade.mask == 0 else f"{c:g}*{blade}")
        return " + ".join(parts) if parts else "0"

    # ------------------------------------------------------------------
    # Linear structure
    # ------------------------------------------------------------------

    def add(self, other: 'Multivector') -> 'Multivector':
        """Coefficient-wise sum.

        Raises:
            ShapeMismatch: If the supports or algebras differ.
        """
        check_same_support(self, other, "add")
        return Multivector(self.algebra, self.blades, self.tensor + other.tensor)

    def scale(self, s) -> 'Multivector':
        """Multiplies every coefficient by *s* (a number or batch tensor)."""
        if isinstance(s, torch.Tensor) and s.ndim > 0:
            s = s.unsqueeze(-1)
        return Multivector(self.algebra, self.blades, self.tensor * s)

    def __add__(self, other):
        if isinstance(other, Multivector):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Multivector):
            return self.add(-other)
        return NotImplemented

    def __neg__(self):
        return Multivector(self.algebra, self.blades, -self.tensor)

    def __mul__(self, other):
        """Geometric Product (A * B), or scaling by a number."""
        if isinstance(other, Multivector):
            return self.product(other, ProductKind.GEOMETRIC)
        elif isinstance(other, Number) or isinstance(other, torch.Tensor):
            return self.scale(other)
        else:
            return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Number) or isinstance(other, torch.Tensor):
            return self.scale(other)
        return NotImplemented

    def __xor__(self, other):
        """Outer product (A ^ B)."""
        if isinstance(other, Multivector):
            return self.product(other, ProductKind.OUTER)
        return NotImplemented

    def __or__(self, other):
        """Inner product (A | B)."""
        if isinstance(other, Multivector):
            return self.product(other, ProductKind.INNER)
        return NotImplemented

    def __invert__(self):
        """Reversion (~A)."""
        return self.reverse()

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def product(self, other: 'Multivector', kind: ProductKind = ProductKind.GEOMETRIC,
                out_blades: Optional[Sequence] = None) -> 'Multivector':
        """Sparse product through the Cayley table of *kind*.

        Every pair of support blades with a non-zero table sign contributes
        ``a_i * b_j * sign`` to its result blade; pairs landing on the same
        blade are summed.

        Args:
            other (Multivector): Right operand.
            kind (ProductKind): Geometric, outer or inner.
            out_blades (Sequence, optional): Declared output support. Must
                contain every blade the product can reach. Defaults to exactly
                the reachable blades in ascending mask order.

        Returns:
            Multivector: The product, batch dims broadcast.

        Raises:
            ShapeMismatch: If the algebras differ or *out_blades* is too small.
        """
        check_same_algebra(self, other, f"{kind.value} product")
        algebra = self.algebra
        table = algebra.table(kind)

        A = self.tensor
        B = other.tensor
        device = A.device
        a_masks = torch.tensor([b.mask for b in self.blades], dtype=torch.long)
        b_masks = torch.tensor([b.mask for b in other.blades], dtype=torch.long)

        # Sub-table for the two supports: [|a|, |b|]
        sub_idx = table.indices[a_masks][:, b_masks]
        sub_sign = table.signs[a_masks][:, b_masks]
        live = sub_sign != 0
        reached = sorted(set(sub_idx[live].tolist()))

        allowed = set()
        for ga in self.grades():
            for gb in other.grades():
                allowed.update(reachable_grades(kind, ga, gb, algebra.n))
        validation.check_reachable((Blade(m).grade for m in reached), allowed,
                                   f"{kind.value} product")

        if out_blades is None:
            out = tuple(Blade(m) for m in reached)
        else:
            out = tuple(_as_blade(algebra, b) for b in out_blades)
            missing = set(reached) - {b.mask for b in out}
            if missing:
                raise ShapeMismatch(
                    f"{kind.value} product reaches blades "
                    f"{[str(Blade(m)) for m in sorted(missing)]} outside the declared output support"
                )

        batch = torch.broadcast_shapes(A.shape[:-1], B.shape[:-1])
        dtype = torch.promote_types(A.dtype, B.dtype)
        result = torch.zeros(*batch, len(out), dtype=dtype, device=device)
        if not out or not live.any():
            return Multivector(algebra, out, result)

        # Map result masks to output positions; only live pairs are scattered
        pos = torch.zeros(algebra.dim, dtype=torch.long)
        pos[torch.tensor([b.mask for b in out], dtype=torch.long)] = torch.arange(len(out))
        ii, jj = live.nonzero(as_tuple=True)
        target = pos[sub_idx[ii, jj]].to(device)
        signs = sub_sign[ii, jj].to(dtype=dtype, device=device)

        # terms[..., k] = a_i * b_j * sign(i, j) for the k-th live pair (i, j)
        terms = A.to(dtype)[..., ii.to(device)] * B.to(dtype)[..., jj.to(device)] * signs
        terms = terms.expand(*batch, -1).contiguous()
        result.index_add_(result.ndim - 1, target, terms)
        return Multivector(algebra, out, result)

    def geometric_product(self, other: 'Multivector', out_blades=None) -> 'Multivector':
        return self.product(other, ProductKind.GEOMETRIC, out_blades)

    def outer_product(self, other: 'Multivector', out_blades=None) -> 'Multivector':
        return self.product(other, ProductKind.OUTER, out_blades)

    def inner_product(self, other: 'Multivector', out_blades=None) -> 'Multivector':
        return self.product(other, ProductKind.INNER, out_blades)

    # ------------------------------------------------------------------
    # Grades and norms
    # ------------------------------------------------------------------

    def grade(self, k: int) -> 'Multivector':
        """Projects to grade k: the sub-multivector over grade-k support blades."""
        keep = [i for i, b in enumerate(self.blades) if b.grade == k]
        idx = torch.tensor(keep, dtype=torch.long, device=self.tensor.device)
        return Multivector(self.algebra, [self.blades[i] for i in keep],
                           self.tensor.index_select(-1, idx))

    def reverse(self) -> 'Multivector':
        """Reversion: grade-k blades flip by (-1)^(k(k-1)/2)."""
        masks = torch.tensor([b.mask for b in self.blades], dtype=torch.long)
        rev = self.algebra.rev_signs[masks].to(dtype=self.dtype, device=self.tensor.device)
        return Multivector(self.algebra, self.blades, self.tensor * rev)

    def norm(self) -> torch.Tensor:
        """Coefficient norm sqrt(sum c_i^2) over the support.

        This is the Euclidean norm of the coefficient vector, not a
        metric-aware norm; a null vector with non-zero coefficients has a
        positive norm here.
        """
        return self.tensor.pow(2).sum(dim=-1).sqrt()

    def grade_norms(self) -> torch.Tensor:
        """Coefficient norm of each grade slice ``[..., n + 1]``."""
        return torch.stack(
            [self.grade(k).norm() for k in range(self.algebra.num_grades)], dim=-1
        )
