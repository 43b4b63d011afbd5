# Bladework: Blade Algebra Engine (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0 | "Unbending" Paradigm

"""Error taxonomy and lightweight input validation for Bladework.

Precondition checks that guard public entry points raise the typed errors
below. Internal consistency checks use ``assert`` so they are free under
``python -O``; set ``VALIDATE = False`` to disable them even without -O.
"""

import torch

VALIDATE = True


class ShapeMismatch(ValueError):
    """Operands do not share the same blade support or grade tag."""


class DimensionMismatch(ValueError):
    """A metric's size disagrees with the declared algebra dimension."""


class DegenerateMetricEntry(UserWarning):
    """A basis vector squares to zero under the metric.

    Products through such a direction are present in every Cayley table
    with sign 0; they are never missing.
    """


def check_blade_mask(mask: int, n: int, name: str = "mask") -> None:
    """Raise ``IndexError`` unless *mask* addresses a blade of ``Cl(n)``."""
    if not 0 <= mask < (1 << n):
        raise IndexError(
            f"{name}: blade mask {mask} out of range [0, {1 << n}) "
            f"for an algebra of dimension {n}"
        )


def check_basis_index(index: int, n: int, name: str = "index") -> None:
    """Raise ``IndexError`` unless *index* names one of the ``n`` basis vectors."""
    if not 0 <= index < n:
        raise IndexError(
            f"{name}: basis index {index} out of range [0, {n})"
        )


def check_same_algebra(a, b, name: str = "operands") -> None:
    """Raise :class:`ShapeMismatch` if *a* and *b* live in different algebras."""
    if a.algebra is not b.algebra and a.algebra.metric != b.algebra.metric:
        raise ShapeMismatch(
            f"{name}: algebras differ ({a.algebra!r} vs {b.algebra!r})"
        )


def check_same_support(a, b, name: str = "operands") -> None:
    """Raise :class:`ShapeMismatch` unless *a* and *b* declare identical supports."""
    check_same_algebra(a, b, name)
    if a.blades != b.blades:
        raise ShapeMismatch(
            f"{name}: supports differ "
            f"({[str(x) for x in a.blades]} vs {[str(x) for x in b.blades]})"
        )


def check_coefficients(x: torch.Tensor, size: int, name: str = "x") -> None:
    """Assert *x* holds one coefficient per support blade in its last dim."""
    if not VALIDATE:
        return
    assert x.ndim >= 1, (
        f"{name}: expected ndim >= 1, got shape {tuple(x.shape)}"
    )
    assert x.shape[-1] == size, (
        f"{name}: last dim should be {size} (support size), "
        f"got {x.shape[-1]} (shape {tuple(x.shape)})"
    )


def check_reachable(grades, allowed, name: str = "product") -> None:
    """Assert every produced grade is one the grade rules allow."""
    if not VALIDATE:
        return
    stray = sorted(set(grades) - set(allowed))
    assert not stray, (
        f"{name}: produced grades {stray} outside reachable {sorted(set(allowed))}"
    )


def check_unique(keys, name: str = "components") -> None:
    """Raise ``ValueError`` if a blade key repeats within one term."""
    seen = set()
    for key in keys:
        if key in seen:
            raise ValueError(
                f"{name}: duplicate blade {key}; combine like terms first"
            )
        seen.add(key)
