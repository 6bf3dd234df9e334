"""
Lineality, Strata and Bound Ideals
==================================

Worked examples on the Plücker quadric of Gr(2,4)
(variables p12 p13 p14 p23 p24 p34) and on the square <x1 x4 - x2 x3>.

Run: python -m pytest tests/omega/test_strata_bounds.py -v
"""

import pytest

from core_algebra.builders import hypersimplex
from core_algebra.operators import ideals_equal, initial, is_subideal, is_zero_ideal
from core_algebra.spec import DegenerateIdealError, Ideal, InconsistentDimensionError, Ring
from omega import (
    cylinder_ideal,
    ideal_up_w,
    ideal_w,
    ideals_of_max_cells,
    lineality_space_H_rep,
    lineality_space_V_rep,
    max_cells,
    point_configuration,
    positive_grading,
    stratum,
)

WEIGHTS_24 = [
    (0, 0, 0, 0, 0, 0),
    (1, 0, 0, 0, 0, 0),
    (0, 0, 1, 1, 0, 0),
    (1, 1, 0, 0, 1, 1),
    (0, 1, 1, 1, 1, 0),
    (3, 0, 1, 2, 0, 1),
]


# =============================================================================
# TEST A: Lineality space and point configuration
# =============================================================================

def test_lineality_ranks_plucker(plucker_24):
    assert lineality_space_H_rep(plucker_24).rows == 2
    assert lineality_space_V_rep(plucker_24).rows == 4


def test_lineality_is_orthogonal(plucker_24):
    H = lineality_space_H_rep(plucker_24)
    V = lineality_space_V_rep(plucker_24)
    assert (H * V.T).is_zero_matrix


def test_point_configuration_shape(plucker_24):
    points = point_configuration(plucker_24)
    assert len(points) == 6
    assert all(len(p) == 4 for p in points)


def test_lineality_square(square):
    assert lineality_space_H_rep(square).rows == 1
    assert lineality_space_V_rep(square).rows == 3


def test_monomial_ideal_has_full_lineality():
    R = Ring.indexed(3)
    I = Ideal(R, ["x1*x2"])
    assert lineality_space_H_rep(I).rows == 0
    assert lineality_space_V_rep(I).rows == 3


def test_positive_grading(plucker_24, square):
    assert positive_grading(plucker_24) == (1,) * 6
    assert positive_grading(square) == (1,) * 4


def test_weighted_positive_grading():
    """x + y^2 is homogeneous for deg x = 2, deg y = 1."""
    R = Ring.from_names(["x", "y"])
    assert positive_grading(Ideal(R, ["x + y**2"])) == (2, 1)


def test_positive_grading_found_by_lp():
    """x1^2 x3 - x2 is homogeneous for deg x2 = 3, the other degrees 1."""
    R = Ring.indexed(3)
    assert positive_grading(Ideal(R, ["x1**2*x3 - x2"])) == (1, 3, 1)


def test_no_positive_grading():
    R = Ring.indexed(2)
    assert positive_grading(Ideal(R, ["x1 + x1**2"])) is None


def test_degenerate_ideals_raise():
    R = Ring.indexed(2)
    with pytest.raises(DegenerateIdealError):
        point_configuration(Ideal.zero(R))
    with pytest.raises(DegenerateIdealError):
        lineality_space_V_rep(Ideal.unit(R))


# =============================================================================
# TEST B: Stratum ideals
# =============================================================================

def test_stratum_of_all_variables_is_ideal(plucker_24):
    assert stratum(plucker_24, range(6)) is plucker_24


def test_stratum_dropping_p34(plucker_24):
    S = stratum(plucker_24, [0, 1, 2, 3, 4])
    assert ideals_equal(S, Ideal(plucker_24.ring, ["p13*p24 - p14*p23"]))


def test_stratum_of_square_triangle(square):
    assert ideals_equal(stratum(square, [1, 2, 3]), Ideal(square.ring, ["x2*x3"]))


def test_stratum_of_a_single_variable_is_zero(plucker_24):
    assert is_zero_ideal(stratum(plucker_24, [0]))


def test_stratum_index_out_of_range(plucker_24):
    with pytest.raises(InconsistentDimensionError):
        stratum(plucker_24, [0, 6])


# =============================================================================
# TEST C: Lower and upper bound ideals
# =============================================================================

def test_max_cells_zero_weight(plucker_24):
    assert max_cells(plucker_24, (0,) * 6) == ((0, 1, 2, 3, 4, 5),)
    [J] = ideals_of_max_cells(plucker_24, (0,) * 6)
    assert J is plucker_24


def test_ideal_w_first_coordinate(plucker_24):
    """Raising p12 gives two pyramids; both strata are <p13 p24 - p14 p23>."""
    w = (1, 0, 0, 0, 0, 0)
    expected = Ideal(plucker_24.ring, ["p13*p24 - p14*p23"])
    assert ideals_equal(ideal_w(plucker_24, w), expected)
    assert ideals_equal(ideal_w(plucker_24, w), initial(plucker_24, w))


def test_ideal_w_explicit_configuration(plucker_24):
    """The hypersimplex gives the same subdivisions as Δ(I)."""
    w = (1, 1, 0, 0, 1, 1)
    assert max_cells(plucker_24, w, hypersimplex(2, 4)) == max_cells(plucker_24, w)
    J = ideal_w(plucker_24, w, hypersimplex(2, 4))
    assert ideals_equal(J, Ideal(plucker_24.ring, ["p14*p23"]))


def test_ideal_up_w_first_coordinate(plucker_24):
    w = (1, 0, 0, 0, 0, 0)
    assert ideals_equal(ideal_up_w(plucker_24, w), Ideal(plucker_24.ring, ["p12*p34"]))


def test_ideal_up_w_triangulation_is_monomial(plucker_24):
    """Four tetrahedra around p14-p23: the upper bound forgets the binomial."""
    w = (1, 1, 0, 0, 1, 1)
    J = ideal_up_w(plucker_24, w)
    assert ideals_equal(J, Ideal(plucker_24.ring, ["p12*p34", "p13*p24"]))
    assert not ideals_equal(J, initial(plucker_24, [-x for x in w]))


def test_cylinder_of_full_cell(plucker_24):
    assert ideals_equal(cylinder_ideal(plucker_24, range(6)), plucker_24)


def test_cylinder_of_proper_cell(square):
    assert ideals_equal(cylinder_ideal(square, [0, 1, 2]), Ideal(square.ring, ["x4"]))


@pytest.mark.parametrize("w", WEIGHTS_24)
def test_lower_bound_inclusion(plucker_24, w):
    assert is_subideal(ideal_w(plucker_24, w), initial(plucker_24, w))


@pytest.mark.parametrize("w", WEIGHTS_24)
def test_upper_bound_inclusion(plucker_24, w):
    assert is_subideal(initial(plucker_24, [-x for x in w]), ideal_up_w(plucker_24, w))


def test_bounds_dimension_checks(plucker_24):
    with pytest.raises(InconsistentDimensionError):
        ideal_w(plucker_24, (1, 0, 0))
    with pytest.raises(InconsistentDimensionError):
        ideal_up_w(plucker_24, (0,) * 6, hypersimplex(2, 5))
