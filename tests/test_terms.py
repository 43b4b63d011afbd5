# Tests for the grade-tagged term layer (terms/)

import pytest

from core.algebra import BladeAlgebra
from core.grading import Grade
from terms import (
    BladeTerm,
    Bivector,
    GATermVisitor,
    GeneralMultivector,
    Scalar,
    Trivector,
    Vector,
    add,
    can_add,
    filter_term,
    fold_term,
    geometric_product,
    get_grade,
    inner_product,
    make_bivector,
    make_multivector,
    make_scalar,
    make_trivector,
    make_vector,
    map_term,
    match_term,
    multivector_to_term,
    norm,
    outer_product,
    scalar_multiply,
    term_to_multivector,
    to_string,
    visit_term,
)


@pytest.fixture
def alg():
    return BladeAlgebra.euclidean(3)


class TestConstruction:
    def test_grades(self):
        assert get_grade(make_scalar(1.0)) is Grade.SCALAR
        assert get_grade(make_vector([(0, 1.0)])) is Grade.VECTOR
        assert get_grade(make_bivector([(0, 1, 1.0)])) is Grade.BIVECTOR
        assert get_grade(make_trivector([(0, 1, 2, 1.0)])) is Grade.TRIVECTOR
        assert get_grade(make_multivector([((), 1.0)])) is Grade.MULTIVECTOR

    def test_get_grade_rejects_non_terms(self):
        with pytest.raises(TypeError):
            get_grade(3.0)

    def test_duplicate_blade_rejected(self):
        with pytest.raises(ValueError):
            make_vector([(1, 2.0), (1, 3.0)])

    def test_reordered_duplicate_rejected(self):
        with pytest.raises(ValueError):
            make_bivector([(0, 1, 1.0), (1, 0, 2.0)])

    def test_general_multivector_needs_ascending_indices(self):
        with pytest.raises(ValueError):
            make_multivector([((1, 0), 1.0)])

    def test_general_multivector_accepts_blade_terms(self):
        mv = make_multivector([BladeTerm((0, 1, 2, 3), 5.0), ((), 1.0)])
        assert mv.terms[0].grade is Grade.MULTIVECTOR
        assert mv.terms[1].grade is Grade.SCALAR

    def test_terms_are_values(self):
        assert make_vector([(0, 1.0)]) == Vector(((0, 1.0),))
        assert make_vector([(0, 1.0)]) != make_vector([(0, 2.0)])


class TestDispatch:
    def test_match_term_exhaustive(self):
        handlers = (
            lambda t: "scalar",
            lambda t: "vector",
            lambda t: "bivector",
            lambda t: "trivector",
            lambda t: "multivector",
        )
        assert match_term(make_scalar(1.0), *handlers) == "scalar"
        assert match_term(make_vector([(0, 1.0)]), *handlers) == "vector"
        assert match_term(make_bivector([(0, 1, 1.0)]), *handlers) == "bivector"
        assert match_term(make_trivector([(0, 1, 2, 1.0)]), *handlers) == "trivector"
        assert match_term(make_multivector([]), *handlers) == "multivector"

    def test_match_term_rejects_non_terms(self):
        with pytest.raises(TypeError):
            match_term(1.0, *([lambda t: None] * 5))

    def test_visitor(self):
        class Counter(GATermVisitor):
            def visit_scalar(self, term):
                return 1

            def visit_vector(self, term):
                return len(term.components)

            def visit_bivector(self, term):
                return len(term.components)

            def visit_trivector(self, term):
                return len(term.components)

            def visit_multivector(self, term):
                return len(term.terms)

        v = make_vector([(0, 1.0), (2, 1.0)])
        assert visit_term(v, Counter()) == 2
        assert visit_term(make_scalar(4.0), Counter()) == 1

    def test_visitor_missing_handler(self):
        with pytest.raises(NotImplementedError):
            visit_term(make_scalar(1.0), GATermVisitor())


class TestAddition:
    def test_scalars(self):
        assert add(make_scalar(2.0), make_scalar(3.0)) == Scalar(5.0)

    def test_vectors_combine_like_terms(self):
        a = make_vector([(0, 1.0), (1, 2.0)])
        b = make_vector([(1, 3.0), (2, 4.0)])
        assert add(a, b) == Vector(((0, 1.0), (1, 5.0), (2, 4.0)))

    def test_grade_mismatch_gives_none(self):
        assert add(make_scalar(1.0), make_vector([(0, 1.0)])) is None
        assert add(make_vector([(0, 1.0)]), make_bivector([(0, 1, 1.0)])) is None
        assert not can_add(make_vector([(0, 1.0)]), make_bivector([(0, 1, 1.0)]))

    def test_bivector_orientation(self):
        a = make_bivector([(0, 1, 2.0)])
        b = make_bivector([(1, 0, 0.5)])
        assert add(a, b) == Bivector(((0, 1, 1.5),))

    def test_trivectors(self):
        a = make_trivector([(0, 1, 2, 1.0)])
        b = make_trivector([(0, 1, 2, 2.0)])
        assert add(a, b) == Trivector(((0, 1, 2, 3.0),))

    def test_general_multivectors(self):
        a = make_multivector([((), 1.0), ((0, 1, 2, 3), 2.0)])
        b = make_multivector([((0, 1, 2, 3), 1.0), ((1,), 4.0)])
        assert add(a, b) == GeneralMultivector((
            BladeTerm((), 1.0),
            BladeTerm((0, 1, 2, 3), 3.0),
            BladeTerm((1,), 4.0),
        ))


class TestElementwise:
    def test_scalar_multiply(self):
        assert scalar_multiply(2.0, make_scalar(1.5)) == Scalar(3.0)
        assert scalar_multiply(2.0, make_vector([(0, 1.0), (1, -2.0)])) == \
            Vector(((0, 2.0), (1, -4.0)))
        assert scalar_multiply(-1.0, make_bivector([(0, 2, 3.0)])) == \
            Bivector(((0, 2, -3.0),))

    def test_norm(self):
        assert norm(make_scalar(-2.5)) == 2.5
        assert norm(make_vector([(1, 3.0), (2, 4.0)])) == pytest.approx(5.0)

    def test_to_string(self):
        assert to_string(make_scalar(3.14)) == "Scalar(3.14)"
        assert to_string(make_vector([(1, 2.0), (2, 3.0)])) == "Vector(e1:2, e2:3)"
        assert to_string(make_bivector([(0, 1, 1.5)])) == "Bivector(e0e1:1.5)"
        assert to_string(make_multivector([((0, 1, 2, 3), 5.0)])) == \
            "Multivector(e0e1e2e3:5)"

    def test_map(self):
        v = make_vector([(1, 2.0), (2, 3.0)])
        assert map_term(v, lambda c: c * 2) == Vector(((1, 4.0), (2, 6.0)))
        assert map_term(make_scalar(3.0), abs) == Scalar(3.0)

    def test_filter(self):
        v = make_vector([(0, 1.0), (1, 2.0), (2, 3.0)])
        kept = filter_term(v, lambda c: c > 1.5)
        assert kept == Vector(((1, 2.0), (2, 3.0)))
        assert filter_term(make_scalar(0.0), lambda c: c > 1.5) == Scalar(0.0)

    def test_fold(self):
        v = make_vector([(0, 2.0), (1, 3.0), (2, 4.0)])
        assert fold_term(v, 0.0, lambda acc, c: acc + c) == 9.0
        assert fold_term(make_scalar(5.0), 1.0, lambda acc, c: acc * c) == 5.0


class TestProducts:
    def test_outer_of_vectors(self, alg):
        result = outer_product(alg, make_vector([(0, 1.0)]), make_vector([(1, 2.0)]))
        assert result == Bivector(((0, 1, 2.0),))

    def test_outer_anticommutes(self, alg):
        result = outer_product(alg, make_vector([(1, 2.0)]), make_vector([(0, 1.0)]))
        assert result == Bivector(((0, 1, -2.0),))

    def test_outer_above_trivector(self):
        alg4 = BladeAlgebra.euclidean(4)
        result = outer_product(alg4, make_bivector([(0, 1, 1.0)]), make_bivector([(2, 3, 1.0)]))
        assert result == GeneralMultivector((BladeTerm((0, 1, 2, 3), 1.0),))

    def test_outer_shared_vector(self, alg):
        result = outer_product(alg, make_vector([(0, 1.0)]), make_bivector([(0, 1, 1.0)]))
        assert result == Trivector(())

    def test_inner_of_vectors(self, alg):
        u = make_vector([(0, 1.0), (1, 2.0)])
        v = make_vector([(0, 3.0), (1, 4.0)])
        assert inner_product(alg, u, v) == Scalar(11.0)

    def test_inner_vector_bivector(self, alg):
        result = inner_product(alg, make_vector([(0, 1.0)]), make_bivector([(0, 1, 1.0)]))
        assert result == Vector(((1, 1.0),))

    def test_geometric_mixed_grades(self, alg):
        u = make_vector([(0, 1.0), (1, 2.0)])
        v = make_vector([(0, 3.0), (1, 4.0)])
        result = geometric_product(alg, u, v)
        assert result == GeneralMultivector((
            BladeTerm((), 11.0),
            BladeTerm((0, 1), -2.0),
        ))

    def test_geometric_single_grade(self, alg):
        result = geometric_product(alg, make_vector([(0, 1.0)]), make_vector([(1, 1.0)]))
        assert result == Bivector(((0, 1, 1.0),))

    def test_index_outside_algebra(self, alg):
        with pytest.raises(IndexError):
            outer_product(alg, make_vector([(5, 1.0)]), make_vector([(0, 1.0)]))


class TestConversion:
    def test_round_trip_keeps_orientation_sign(self, alg):
        mv = term_to_multivector(alg, make_bivector([(1, 0, 2.0)]))
        assert mv.tensor.tolist() == [-2.0]
        assert multivector_to_term(mv) == Bivector(((0, 1, -2.0),))

    def test_zero_multivector_is_scalar_zero(self, alg):
        mv = term_to_multivector(alg, make_vector([(0, 0.0)]))
        assert multivector_to_term(mv) == Scalar(0.0)

    def test_requested_grade_filters(self, alg):
        mv = alg.multivector({0: 1.0, (0,): 2.0, (1, 2): 3.0})
        assert multivector_to_term(mv, Grade.VECTOR) == Vector(((0, 2.0),))
        assert multivector_to_term(mv, Grade.SCALAR) == Scalar(1.0)

    def test_batched_rejected(self, alg):
        from core.multivector import Multivector
        mv = Multivector.zeros(alg, alg.blades(1), batch_shape=(2,))
        with pytest.raises(ValueError):
            multivector_to_term(mv)

    def test_non_term_rejected(self, alg):
        with pytest.raises(TypeError):
            term_to_multivector(alg, 1.0)
