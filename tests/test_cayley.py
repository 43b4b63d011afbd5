"""Tests for Cayley table construction across signature types.

Verifies the blade multiplication law for:
- Euclidean Cl(3,0): every basis vector squares to +1
- Minkowski Cl(1,3): mixed signs
- Degenerate Cl(3,0,1): a null direction annihilates its products
- Null-basis conformal metric: off-diagonal contraction e0 . ei = -1
"""

import concurrent.futures
import itertools

import pytest
import torch

from core.algebra import BladeAlgebra
from core.blade import Blade
from core.cayley import (
    CayleyCache,
    ProductKind,
    build_cayley_table,
    lookup,
)
from core.metric import Metric
from core.validation import DegenerateMetricEntry, DimensionMismatch


GEOMETRIC = ProductKind.GEOMETRIC
OUTER = ProductKind.OUTER
INNER = ProductKind.INNER


# ── Helpers ────────────────────────────────────────────────────────────

def _e(*indices):
    return Blade.from_indices(indices)


def _make_algebra(metric):
    if metric.null_directions():
        with pytest.warns(DegenerateMetricEntry):
            return BladeAlgebra(metric)
    return BladeAlgebra(metric)


# ── Algebraic laws over several signatures ─────────────────────────────

class TestLaws:
    """Structural properties every table must satisfy."""

    @pytest.fixture(params=[
        Metric.euclidean(3),
        Metric.from_signature(1, 3),
        Metric.from_signature(3, 0, 1),
        Metric.from_signature(2, 2),
    ], ids=["cl300", "cl130", "cl301", "cl220"])
    def algebra(self, request):
        return _make_algebra(request.param)

    def test_scalar_identity(self, algebra):
        table = algebra.table(GEOMETRIC)
        for b in algebra.blades():
            left = lookup(table, Blade.scalar(), b)
            right = lookup(table, b, Blade.scalar())
            assert left.result == b and left.sign == 1.0
            assert right.result == b and right.sign == 1.0

    def test_self_square(self, algebra):
        table = algebra.table(GEOMETRIC)
        for i in range(algebra.n):
            entry = lookup(table, _e(i), _e(i))
            assert entry.result == Blade.scalar()
            assert entry.sign == algebra.metric.contraction(i, i)

    def test_anticommutativity(self, algebra):
        table = algebra.table(GEOMETRIC)
        for i, j in itertools.permutations(range(algebra.n), 2):
            ij = lookup(table, _e(i), _e(j))
            ji = lookup(table, _e(j), _e(i))
            assert ij.result == ji.result == _e(i, j)
            assert ij.sign == -ji.sign
            assert abs(ij.sign) == 1.0

    def test_outer_grade_law(self, algebra):
        table = algebra.table(OUTER)
        for b1, b2 in itertools.product(algebra.blades(), repeat=2):
            entry = lookup(table, b1, b2)
            if entry.sign != 0:
                assert entry.result.grade == b1.grade + b2.grade
            else:
                assert b1.mask & b2.mask

    def test_inner_grade_law(self, algebra):
        table = algebra.table(INNER)
        for b1, b2 in itertools.product(algebra.blades(), repeat=2):
            entry = lookup(table, b1, b2)
            if entry.sign != 0:
                assert entry.result.grade == abs(b1.grade - b2.grade)

    def test_inner_agrees_with_geometric_on_diagonal_metrics(self, algebra):
        inner = algebra.table(INNER)
        geo = algebra.table(GEOMETRIC)
        for b1, b2 in itertools.product(algebra.blades(), repeat=2):
            entry = lookup(inner, b1, b2)
            if entry.sign != 0:
                assert lookup(geo, b1, b2) == entry

    def test_geometric_associativity(self, algebra):
        table = algebra.table(GEOMETRIC)
        for a, b, c in itertools.product(algebra.blades(), repeat=3):
            ab = lookup(table, a, b)
            left = lookup(table, ab.result, c)
            bc = lookup(table, b, c)
            right = lookup(table, a, bc.result)
            left_sign = ab.sign * left.sign
            right_sign = bc.sign * right.sign
            assert left_sign == right_sign
            if left_sign != 0:
                assert left.result == right.result

    def test_tables_are_total(self, algebra):
        for kind in ProductKind:
            table = algebra.table(kind)
            assert table.indices.shape == (algebra.dim, algebra.dim)
            assert table.signs.shape == (algebra.dim, algebra.dim)


# ── Concrete scenarios ─────────────────────────────────────────────────

class TestEuclidean3:
    @pytest.fixture
    def table(self):
        return BladeAlgebra.euclidean(3).table(GEOMETRIC)

    def test_e0_e1(self, table):
        entry = lookup(table, _e(0), _e(1))
        assert entry.result.mask == 0b011
        assert entry.result.grade == 2
        assert entry.sign == 1.0

    def test_e0_e0(self, table):
        entry = lookup(table, _e(0), _e(0))
        assert entry.result == Blade.scalar()
        assert entry.sign == 1.0

    def test_e01_e1(self, table):
        # e0 e1 e1 = e0 (e1 e1) = e0
        entry = lookup(table, _e(0, 1), _e(1))
        assert entry.result == _e(0)
        assert entry.sign == 1.0

    def test_e01_e0(self, table):
        # e0 e1 e0 = -e0 e0 e1 = -e1
        entry = lookup(table, _e(0, 1), _e(0))
        assert entry.result == _e(1)
        assert entry.sign == -1.0

    def test_pseudoscalar_squares_to_minus_one(self, table):
        entry = lookup(table, 0b111, 0b111)
        assert entry.result == Blade.scalar()
        assert entry.sign == -1.0

    def test_masks_accepted(self, table):
        assert lookup(table, 1, 2) == lookup(table, _e(0), _e(1))


class TestOuterAndInner:
    @pytest.fixture
    def algebra(self):
        return BladeAlgebra.euclidean(3)

    def test_outer_signs(self, algebra):
        assert algebra.lookup(_e(0), _e(1), OUTER).sign == 1.0
        assert algebra.lookup(_e(1), _e(0), OUTER).sign == -1.0
        entry = algebra.lookup(_e(1), _e(0, 2), OUTER)
        assert entry.result == _e(0, 1, 2)
        assert entry.sign == -1.0

    def test_outer_shared_vector_vanishes(self, algebra):
        entry = algebra.lookup(_e(0), _e(0, 1), OUTER)
        assert entry.vanishes
        assert entry.result == Blade.scalar()

    def test_inner_contracts(self, algebra):
        entry = algebra.lookup(_e(0), _e(0, 1), INNER)
        assert entry.result == _e(1)
        assert entry.sign == 1.0
        entry = algebra.lookup(_e(1), _e(0, 1), INNER)
        assert entry.result == _e(0)
        assert entry.sign == -1.0

    def test_inner_disjoint_vanishes(self, algebra):
        assert algebra.lookup(_e(0), _e(1), INNER).vanishes
        assert algebra.lookup(_e(0, 1), _e(2), INNER).vanishes

    def test_inner_with_scalar_vanishes(self, algebra):
        assert algebra.lookup(Blade.scalar(), _e(0), INNER).vanishes
        assert algebra.lookup(_e(0), Blade.scalar(), INNER).vanishes


class TestSignatures:
    def test_minkowski_signs(self):
        alg = BladeAlgebra.from_signature(1, 3)
        assert alg.lookup(_e(0), _e(0)).sign == 1.0
        assert alg.lookup(_e(1), _e(1)).sign == -1.0
        # (e0 e1)^2 = -e0 e0 e1 e1 = +1
        entry = alg.lookup(_e(0, 1), _e(0, 1))
        assert entry.result == Blade.scalar()
        assert entry.sign == 1.0

    def test_degenerate_direction(self):
        metric = Metric([[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 0]], dim=4)
        with pytest.warns(DegenerateMetricEntry):
            alg = BladeAlgebra(metric)
        entry = alg.lookup(_e(3), _e(3))
        assert entry.sign == 0.0
        assert entry.result == Blade.scalar()
        assert alg.lookup(_e(0, 3), _e(3)).vanishes
        # Products through the null vector without squaring it survive
        assert alg.lookup(_e(0), _e(3)).sign == 1.0

    def test_conformal_origin_infinity(self):
        with pytest.warns(DegenerateMetricEntry):
            alg = BladeAlgebra.conformal(3)
        e0, ei = _e(0), _e(4)
        assert alg.lookup(e0, ei, INNER).sign == -1.0
        assert alg.lookup(e0, ei, INNER).result == Blade.scalar()
        assert alg.lookup(ei, e0, INNER).sign == -1.0
        assert alg.lookup(e0, e0, GEOMETRIC).vanishes
        assert alg.lookup(e0, ei, OUTER).result == _e(0, 4)


# ── Memoization and preconditions ──────────────────────────────────────

class TestCache:
    def test_same_object_returned(self):
        alg = BladeAlgebra.euclidean(3)
        assert alg.table(GEOMETRIC) is alg.table(GEOMETRIC)
        assert alg.table(OUTER) is not alg.table(GEOMETRIC)

    def test_build_function_uses_cache(self):
        cache = CayleyCache()
        metric = Metric.euclidean(3)
        t1 = build_cayley_table(metric, 3, GEOMETRIC, cache=cache)
        t2 = build_cayley_table(Metric.euclidean(3), 3, GEOMETRIC, cache=cache)
        assert t1 is t2
        assert (metric, GEOMETRIC) in cache
        assert len(cache) == 1

    def test_uncached_build_is_deterministic(self):
        metric = Metric.from_signature(2, 1)
        t1 = build_cayley_table(metric, 3, GEOMETRIC)
        t2 = build_cayley_table(metric, 3, GEOMETRIC)
        assert t1 is not t2
        assert torch.equal(t1.indices, t2.indices)
        assert torch.equal(t1.signs, t2.signs)

    def test_shared_cache_between_algebras(self):
        cache = CayleyCache()
        a = BladeAlgebra.euclidean(3, cache=cache)
        b = BladeAlgebra.euclidean(3, cache=cache)
        assert a.table(INNER) is b.table(INNER)

    def test_separate_caches_do_not_share(self):
        a = BladeAlgebra.euclidean(2)
        b = BladeAlgebra.euclidean(2)
        assert a.table(GEOMETRIC) is not b.table(GEOMETRIC)

    def test_concurrent_first_use(self):
        cache = CayleyCache()
        metric = Metric.euclidean(4)
        with concurrent.futures.ThreadPoolExecutor(max_workers=8) as pool:
            tables = list(pool.map(lambda _: cache.get(metric, GEOMETRIC), range(16)))
        assert all(t is tables[0] for t in tables)
        assert len(cache) == 1

    def test_hit_does_not_format_metric(self):
        class CountingMetric(Metric):
            reprs = 0

            def __repr__(self):
                CountingMetric.reprs += 1
                return super().__repr__()

        cache = CayleyCache()
        built = cache.get(Metric.euclidean(3), GEOMETRIC)
        counting = CountingMetric.euclidean(3)
        for _ in range(10):
            assert cache.get(counting, GEOMETRIC) is built
        assert CountingMetric.reprs == 0

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatch):
            build_cayley_table(Metric.euclidean(3), 4, GEOMETRIC)

    def test_out_of_range_lookup(self):
        table = BladeAlgebra.euclidean(3).table(GEOMETRIC)
        with pytest.raises(IndexError):
            lookup(table, 8, 0)
        with pytest.raises(IndexError):
            lookup(table, 0, -1)
