"""
Lineality Space and Point Configuration
=======================================

The point configuration Δ(I) of an ideal is read off the Gröbner basis.

DEFINITIONS:
    G = reduced Gröbner basis of I
    W⊥ = span{ u - u' : x^u, x^u' monomials of the same g in G }   (H-rep)
    W  = (W⊥)⊥  = lineality space                                  (V-rep)
    Δ(I) = columns of the V-rep matrix, column i <-> variable i

A weight w in W gives every element of G a single weight on all of its
terms, so I is W-homogeneous and in_w(I) = I for w in W.

EXAMPLE (Gr(2,4), variables p12 p13 p14 p23 p24 p34):
    G = { p12 p34 - p13 p24 + p14 p23 }
    W⊥ has rank 2, W has rank 4, Δ(I) = 6 points of an octahedron
    (a linear image of the hypersimplex Δ(2,4)).

FAIL-FAST:
    The zero ideal and the unit ideal raise DegenerateIdealError.
"""

from itertools import combinations
from typing import Optional, Tuple

from sympy import Matrix, Rational, eye, symbols
from sympy.solvers.simplex import InfeasibleLPError, lpmin

from core_algebra.operators import (
    reduced_groebner_basis,
    is_zero_ideal,
    is_unit_ideal,
)
from core_algebra.polyhedral import primitive_vector
from core_algebra.spec import DegenerateIdealError, Ideal


def _check_nondegenerate(ideal: Ideal):
    if is_zero_ideal(ideal):
        raise DegenerateIdealError(f"The zero ideal of {ideal.ring} has no point configuration")
    if is_unit_ideal(ideal):
        raise DegenerateIdealError(f"The unit ideal of {ideal.ring} has no point configuration")


def _nonzero_rows(M: Matrix) -> Matrix:
    reduced, pivots = M.rref()
    return reduced[:len(pivots), :]


def lineality_space_H_rep(ideal: Ideal) -> Matrix:
    """
    Hyperplane representation of the lineality space of Δ(I).

    Returns:
        row-reduced matrix (k × n) whose rows span W⊥; k may be 0
    """
    _check_nondegenerate(ideal)
    n = ideal.ngens
    differences = []
    for g in reduced_groebner_basis(ideal):
        for u, v in combinations(g.monoms(), 2):
            differences.append([a - b for a, b in zip(u, v)])
    if not differences:
        return Matrix.zeros(0, n)
    return _nonzero_rows(Matrix(differences))


def lineality_space_V_rep(ideal: Ideal) -> Matrix:
    """
    Vertex representation of the lineality space of Δ(I).

    Returns:
        row-reduced matrix (d × n) whose rows form a basis of W
    """
    n = ideal.ngens
    H = lineality_space_H_rep(ideal)
    if H.rows == 0:
        return eye(n)
    kernel = H.nullspace()
    if not kernel:
        return Matrix.zeros(0, n)
    return _nonzero_rows(Matrix.hstack(*kernel).T)


def matrix_rows(M: Matrix) -> Tuple[Tuple[Rational, ...], ...]:
    return tuple(tuple(M.row(i)) for i in range(M.rows))


def point_configuration(ideal: Ideal) -> Tuple[Tuple[Rational, ...], ...]:
    """
    Point configuration Δ(I): column i of the V-rep is point i.

    Returns:
        n points (one per variable, in variable order) of dimension dim W
    """
    M = lineality_space_V_rep(ideal)
    return tuple(tuple(M.col(i)) for i in range(M.cols))


def positive_grading(ideal: Ideal) -> Optional[Tuple[int, ...]]:
    """
    A strictly positive primitive integer vector of W, or None if W has none.

    (1, ..., 1) when it lies in W. Otherwise an exact rational LP over
    c = sum_j a_j V_j:
        minimize sum_i c_i  subject to  c_i >= 1
    """
    n = ideal.ngens
    H = lineality_space_H_rep(ideal)
    ones = (1,) * n
    if H.rows == 0 or all(x == 0 for x in H * Matrix(ones)):
        return ones

    V = lineality_space_V_rep(ideal)
    if V.rows == 0:
        return None
    coeffs = symbols(f"a0:{V.rows}")
    c = list(Matrix([coeffs]) * V)
    if any(not entry.free_symbols for entry in c):
        return None
    try:
        _, solution = lpmin(sum(c), [entry >= 1 for entry in c])
    except InfeasibleLPError:
        return None
    return primitive_vector(tuple(entry.subs(solution) for entry in c))
