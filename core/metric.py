# Bladework: Blade Algebra Engine
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want
# the industry to build upon this "unbending" paradigm.

"""Bilinear metrics over the basis vectors.

A metric supplies the scalar ``e_i . e_j`` for every pair of basis vectors.
Diagonal metrics cover the ``Cl(p, q, r)`` signatures; off-diagonal entries
describe null bases such as the conformal ``e0``/``ei`` pair.
"""

from typing import List, Optional, Sequence, Tuple, Union

import torch

from core.validation import DimensionMismatch, check_basis_index

MatrixLike = Union[torch.Tensor, Sequence[Sequence[float]]]


class Metric:
    """Immutable N x N bilinear form.

    Symmetry is not enforced. A zero on the diagonal marks a degenerate
    (null) direction: that basis vector squares to zero.

    Attributes:
        n (int): Number of basis vectors.
        matrix (torch.Tensor): ``[n, n]`` float64 values.
    """

    def __init__(self, matrix: MatrixLike, dim: Optional[int] = None):
        """Wraps a caller-supplied matrix.

        Args:
            matrix: Square matrix of bilinear-form values.
            dim (int, optional): Declared algebra dimension. When given the
                matrix must be ``dim x dim``.

        Raises:
            DimensionMismatch: If the matrix is not square or its size
                disagrees with *dim*.
        """
        values = torch.as_tensor(matrix, dtype=torch.float64).detach().clone()
        if values.ndim != 2 or values.shape[0] != values.shape[1]:
            raise DimensionMismatch(
                f"metric must be a square matrix, got shape {tuple(values.shape)}"
            )
        if dim is not None and values.shape[0] != dim:
            raise DimensionMismatch(
                f"metric is {values.shape[0]}x{values.shape[1]} but the algebra "
                f"declares dimension {dim}"
            )
        self.n = values.shape[0]
        self._matrix = values
        self._values = tuple(tuple(row) for row in values.tolist())

    @classmethod
    def euclidean(cls, n: int) -> 'Metric':
        """Identity metric: every basis vector squares to +1."""
        return cls(torch.eye(n, dtype=torch.float64))

    @classmethod
    def from_signature(cls, p: int, q: int = 0, r: int = 0) -> 'Metric':
        """Diagonal metric of ``Cl(p, q, r)``.

        ``p`` positive, then ``q`` negative, then ``r`` null basis vectors.
        """
        assert p >= 0, f"p must be non-negative, got {p}"
        assert q >= 0, f"q must be non-negative, got {q}"
        assert r >= 0, f"r must be non-negative, got {r}"
        diag = [1.0] * p + [-1.0] * q + [0.0] * r
        return cls(torch.diag(torch.tensor(diag, dtype=torch.float64)))

    @classmethod
    def conformal(cls, euclidean_dim: int = 3) -> 'Metric':
        """Null-basis conformal metric over ``e0, e1..ed, ei``.

        ``e0`` (origin) and ``ei`` (infinity) square to zero and satisfy
        ``e0 . ei = -1``.
        """
        n = euclidean_dim + 2
        m = torch.zeros(n, n, dtype=torch.float64)
        for i in range(1, euclidean_dim + 1):
            m[i, i] = 1.0
        m[0, n - 1] = -1.0
        m[n - 1, 0] = -1.0
        return cls(m)

    @property
    def matrix(self) -> torch.Tensor:
        return self._matrix.clone()

    @property
    def key(self) -> Tuple:
        """Identity of the metric: equal matrices give equal keys."""
        return (self.n, self._values)

    def contraction(self, i: int, j: int) -> float:
        """Bilinear value ``e_i . e_j``."""
        check_basis_index(i, self.n, "i")
        check_basis_index(j, self.n, "j")
        return self._values[i][j]

    def is_diagonal(self) -> bool:
        return all(
            self._values[i][j] == 0.0
            for i in range(self.n) for j in range(self.n) if i != j
        )

    def null_directions(self) -> List[int]:
        """Basis indices whose self-contraction is zero."""
        return [i for i in range(self.n) if self._values[i][i] == 0.0]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Metric):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        if self.is_diagonal():
            diag = [self._values[i][i] for i in range(self.n)]
            p = sum(1 for d in diag if d > 0)
            q = sum(1 for d in diag if d < 0)
            r = self.n - p - q
            if diag == [1.0] * p + [-1.0] * q + [0.0] * r:
                return f"Metric(Cl({p},{q},{r}))"
        return f"Metric(n={self.n})"
