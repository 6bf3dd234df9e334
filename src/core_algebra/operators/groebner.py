"""
Gröbner Bases and Ideal Comparison
==================================

Thin layer over sympy.groebner. Every other operator goes through
groebner_basis() so that sympy failures surface as SymbolicEngineFailure.

DEFINITIONS:
    reduced GB   unique monic, inter-reduced Gröbner basis for a fixed order
    I == J       reduced GB(I) == reduced GB(J) for CANONICAL_ORDER

CANONICAL FORM:
    A reduced Gröbner basis is a set of monic polynomials; we compare the
    set of {monomial: coefficient} dictionaries, which does not depend on
    how sympy happens to sort the basis.
"""

import logging
from typing import FrozenSet, Iterable, Sequence, Tuple

import sympy as sp
from sympy import Poly, QQ, Symbol
from sympy.polys.polyerrors import BasePolynomialError

from ..spec.constants import CANONICAL_ORDER
from ..spec.errors import InconsistentDimensionError, SymbolicEngineFailure
from ..spec.structures import Ideal, PolyLike

logger = logging.getLogger(__name__)


def groebner_basis(polys: Iterable[Poly], symbols: Sequence[Symbol],
                   order=CANONICAL_ORDER) -> Tuple[Poly, ...]:
    """
    Reduced Gröbner basis of the ideal generated by polys in QQ[symbols].

    Args:
        polys: generators (zero polynomials are ignored)
        symbols: variable order of the polynomial ring
        order: sympy order name or a MonomialOrder instance

    Returns:
        tuple of Poly in `symbols` (empty for the zero ideal)

    FAIL-FAST:
        Raises SymbolicEngineFailure if sympy cannot carry out the computation.
    """
    exprs = [p.as_expr() if isinstance(p, Poly) else p for p in polys]
    exprs = [e for e in exprs if e != 0]
    if not exprs:
        return ()
    try:
        gb = sp.groebner(exprs, *symbols, order=order, domain=QQ)
        basis = tuple(Poly(g, *symbols, domain=QQ) for g in gb.exprs)
    except BasePolynomialError as exc:
        raise SymbolicEngineFailure(
            f"Gröbner basis computation failed for {len(exprs)} generators "
            f"in {len(symbols)} variables: {exc}"
        ) from exc
    logger.debug("Gröbner basis (%s): %d generators -> %d elements",
                 order, len(exprs), len(basis))
    return basis


def reduced_groebner_basis(ideal: Ideal, order=CANONICAL_ORDER) -> Tuple[Poly, ...]:
    """Reduced Gröbner basis of an Ideal, as Polys of its ring."""
    return groebner_basis(ideal.gens, ideal.ring.symbols, order)


def canonical_key(ideal: Ideal) -> FrozenSet:
    """Order-independent fingerprint of the reduced canonical basis."""
    basis = reduced_groebner_basis(ideal, CANONICAL_ORDER)
    return frozenset(frozenset(g.as_dict().items()) for g in basis)


def _check_same_ring(I: Ideal, J: Ideal):
    if I.ring != J.ring:
        raise InconsistentDimensionError(
            f"Ideals live in different rings: {I.ring} and {J.ring}"
        )


def ideals_equal(I: Ideal, J: Ideal) -> bool:
    """I == J as ideals (same reduced canonical basis)."""
    _check_same_ring(I, J)
    return canonical_key(I) == canonical_key(J)


def is_zero_ideal(ideal: Ideal) -> bool:
    return len(ideal.gens) == 0


def is_unit_ideal(ideal: Ideal) -> bool:
    """True iff 1 is in the ideal (the reduced basis is {1})."""
    if any(g.is_ground for g in ideal.gens):
        return True
    basis = reduced_groebner_basis(ideal)
    return len(basis) == 1 and basis[0].is_ground


def contains(ideal: Ideal, f: PolyLike) -> bool:
    """Ideal membership via the normal form of f modulo the reduced basis."""
    ring = ideal.ring
    f = ring.poly(f)
    if f.is_zero:
        return True
    basis = reduced_groebner_basis(ideal)
    if not basis:
        return False
    try:
        _, remainder = sp.reduced(f.as_expr(), [g.as_expr() for g in basis],
                                  *ring.symbols, order=CANONICAL_ORDER, domain=QQ)
    except BasePolynomialError as exc:
        raise SymbolicEngineFailure(f"Normal form computation failed: {exc}") from exc
    return remainder == 0


def is_subideal(I: Ideal, J: Ideal) -> bool:
    """I ⊆ J."""
    _check_same_ring(I, J)
    return all(contains(J, g) for g in I.gens)


def ideal_sum(*ideals: Ideal) -> Ideal:
    """I_1 + ... + I_k (union of generators). Needs at least one ideal."""
    if not ideals:
        raise ValueError("ideal_sum needs at least one ideal")
    total = ideals[0]
    for other in ideals[1:]:
        total = total + other
    return total
