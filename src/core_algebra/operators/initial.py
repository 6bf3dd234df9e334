"""
Initial Forms and Initial Ideals
================================

Trivial valuation on QQ, weight vector w (one entry per variable).

DEFINITIONS (min convention):
    in_w(f) = sum of the terms c_u x^u of f with w·u minimal
    in_w(I) = < in_w(f) : f in I >
Max convention: in^max_w = in^min_{-w}.

METHOD:
    Let v be the min-convention weight. Terms of minimal v-weight are the
    terms of MAXIMAL u-weight for u = -v. If u >= 0 then
        >_u := (u·m, then grevlex)
    is a global monomial order and, for a reduced Gröbner basis G under >_u,
        in_v(I) = < in_v(g) : g in G >.

    If u has negative entries we shift it along a strictly positive grading
    vector c of the ideal (I homogeneous w.r.t. c):
        u' = u + k·c,  k = smallest integer with u' >= 0.
    Every element of G is c-homogeneous, so its u'-maximal terms are its
    u-maximal terms, and the formula above still holds.

    Without such a grading we homogenize. With I^h the homogenization of I
    in QQ[x, h] (generated by the homogenized grevlex basis of I):
        in_v(I) = in_(v, 0)(I^h) |_(h = 1)
    and I^h is graded by (1, ..., 1), so the shift applies there.

FAIL-FAST:
    A grading passed explicitly must be strictly positive; otherwise
    SymbolicEngineFailure is raised.
"""

import logging
import math
from typing import Optional, Sequence, Tuple

import sympy as sp
from sympy import Poly, QQ, Rational, Symbol
from sympy.polys.orderings import MonomialOrder, grevlex

from ..spec.constants import HOMOGENIZING_VARIABLE_NAME
from ..spec.errors import InconsistentDimensionError, SymbolicEngineFailure
from ..spec.structures import Ideal, Ring, Valuation, MIN_VALUATION
from .groebner import groebner_basis, reduced_groebner_basis

logger = logging.getLogger(__name__)


class WeightOrder(MonomialOrder):
    """Global weight order: larger u·m first, ties broken by grevlex. Needs u >= 0."""

    alias = "weight"
    is_global = True

    def __init__(self, weight: Sequence[int]):
        weight = tuple(int(x) for x in weight)
        if any(x < 0 for x in weight):
            raise ValueError(f"WeightOrder needs a nonnegative weight, got {weight}")
        self.weight = weight

    def __call__(self, monomial):
        return (sum(a * e for a, e in zip(self.weight, monomial)), grevlex(monomial))

    def __repr__(self):
        return f"WeightOrder({self.weight})"

    def __eq__(self, other):
        return isinstance(other, WeightOrder) and other.weight == self.weight

    def __hash__(self):
        return hash((self.__class__.__name__, self.weight))


def check_weight(ring: Ring, weight: Sequence) -> Tuple[Rational, ...]:
    """Exact copy of a weight vector, validated against the ring."""
    if len(weight) != ring.ngens:
        raise InconsistentDimensionError(
            f"Weight of length {len(weight)} for a ring with {ring.ngens} variables"
        )
    return tuple(Rational(x) for x in weight)


def _integral(vector: Sequence[Rational]) -> Tuple[int, ...]:
    """Positive multiple of a rational vector with integer entries."""
    denominators = [int(x.q) for x in vector]
    scale = math.lcm(*denominators) if denominators else 1
    return tuple(int(x * scale) for x in vector)


def _dot(weight, monomial):
    return sum(a * e for a, e in zip(weight, monomial))


def initial_form(f: Poly, weight: Sequence, valuation: Valuation = MIN_VALUATION) -> Poly:
    """
    Initial form of a single polynomial.

    Args:
        f: nonzero Poly
        weight: one entry per generator of f
        valuation: min (default) or max convention

    Returns:
        sum of the terms of f whose weight is extremal for the convention
    """
    if f.is_zero:
        return f
    if len(weight) != len(f.gens):
        raise InconsistentDimensionError(
            f"Weight of length {len(weight)} for a polynomial in {len(f.gens)} variables"
        )
    weight = [Rational(x) for x in weight]
    terms = f.terms()
    values = [_dot(weight, m) for m, _ in terms]
    target = valuation.extremum(values)
    selected = {m: c for (m, c), value in zip(terms, values) if value == target}
    return Poly.from_dict(selected, *f.gens, domain=QQ)


def standard_grading(ideal: Ideal) -> Optional[Tuple[int, ...]]:
    """(1, ..., 1) if the ideal is homogeneous for the total degree, else None."""
    basis = reduced_groebner_basis(ideal)
    if all(g.is_homogeneous for g in basis):
        return (1,) * ideal.ngens
    return None


def _shift_to_nonnegative(u: Sequence[Rational], grading: Sequence[Rational]) -> Tuple[int, ...]:
    """u + k·c with the smallest integer k making every entry >= 0, made integral."""
    shift = max(0, max(int(sp.ceiling(-x / c)) for x, c in zip(u, grading)))
    return _integral([x + shift * c for x, c in zip(u, grading)])


def homogenize(f: Poly, h: Symbol) -> Poly:
    """Homogenization of f in QQ[gens of f, h] (h appended last)."""
    degree = f.total_degree()
    terms = {m + (degree - sum(m),): c for m, c in f.terms()}
    return Poly.from_dict(terms, *f.gens, h, domain=QQ)


def _initial_by_homogenization(ideal: Ideal, v: Sequence[Rational]) -> Ideal:
    ring = ideal.ring
    h = sp.Dummy(HOMOGENIZING_VARIABLE_NAME)
    symbols = ring.symbols + (h,)
    gens = [homogenize(g, h) for g in reduced_groebner_basis(ideal)]

    v_h = tuple(v) + (Rational(0),)
    order = WeightOrder(_shift_to_nonnegative([-x for x in v_h], [Rational(1)] * len(v_h)))
    basis = groebner_basis(gens, symbols, order)
    forms = [initial_form(g, v_h, MIN_VALUATION).as_expr().subs(h, 1) for g in basis]
    logger.debug("in_w via homogenization: %d generators", len(forms))
    return Ideal(ring, forms)


def initial(ideal: Ideal, weight: Sequence, valuation: Valuation = MIN_VALUATION,
            grading: Optional[Sequence[int]] = None) -> Ideal:
    """
    Initial ideal in_w(I) under the trivial valuation.

    Args:
        ideal: the ideal I
        weight: w, one entry per variable (integers or rationals)
        valuation: convention (explicit, never global)
        grading: strictly positive vector c with I c-homogeneous; when None the
            standard grading is tried, then homogenization

    Returns:
        in_w(I) as an Ideal of the same ring (generated by initial forms of a
        Gröbner basis)
    """
    ring = ideal.ring
    w = check_weight(ring, weight)
    if not ideal.gens:
        return ideal

    # min-convention weight v and the max-direction u = -v
    v = w if valuation.is_min else tuple(-x for x in w)
    u = [-x for x in v]

    if any(x < 0 for x in u):
        if grading is None:
            grading = standard_grading(ideal)
            if grading is None:
                return _initial_by_homogenization(ideal, v)
        if len(grading) != ring.ngens or any(Rational(c) <= 0 for c in grading):
            raise SymbolicEngineFailure(f"Grading {tuple(grading)} is not strictly positive")
        order = WeightOrder(_shift_to_nonnegative(u, [Rational(c) for c in grading]))
    else:
        order = WeightOrder(_integral(u))

    basis = groebner_basis(ideal.gens, ring.symbols, order)
    return Ideal(ring, [initial_form(g, v, MIN_VALUATION) for g in basis])
