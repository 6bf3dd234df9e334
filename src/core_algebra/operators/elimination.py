"""
Elimination, Intersection and Contraction
=========================================

DEFINITIONS:
    eliminate(I, E)   = I ∩ QQ[x_i : i not in E], extended back to the full ring
    intersect(I, J)   = I ∩ J
    preimage(f, I)    = { g in dom(f) : f(g) in I }   (contraction along f)

METHODS:
    eliminate:  reduced GB for the block order  [x_E] >> [x_rest],
                keep the elements free of x_E.
    intersect:  I ∩ J = (t·I + (1 - t)·J) ∩ QQ[x]  for a fresh tag variable t.
    preimage:   for a variable embedding f: QQ[y] -> QQ[x], y_j -> x_{c_j},
                f^{-1}(I) = (I ∩ QQ[x_c]) renamed to y.

All three are exact and deterministic.
"""

from typing import Iterable, Sequence, Tuple

import sympy as sp
from sympy import Poly, QQ
from sympy.polys.orderings import MonomialOrder, grevlex

from ..spec.constants import TAG_VARIABLE_NAME
from ..spec.errors import InconsistentDimensionError
from ..spec.structures import Ideal, RingHom
from .groebner import groebner_basis, _check_same_ring


class EliminationOrder(MonomialOrder):
    """
    Block order: grevlex on the first k variables, ties broken by grevlex
    on the remaining ones. Any monomial involving the first block beats
    every monomial free of it.
    """

    alias = "elim"
    is_global = True

    def __init__(self, k: int):
        self.k = int(k)

    def __call__(self, monomial):
        return (grevlex(monomial[:self.k]), grevlex(monomial[self.k:]))

    def __repr__(self):
        return f"EliminationOrder({self.k})"

    def __eq__(self, other):
        return isinstance(other, EliminationOrder) and other.k == self.k

    def __hash__(self):
        return hash((self.__class__.__name__, self.k))


def _free_of_first(poly: Poly, k: int) -> bool:
    return all(not any(m[:k]) for m in poly.monoms())


def eliminate(ideal: Ideal, indices: Iterable[int]) -> Ideal:
    """
    Eliminate the variables x_i, i in indices, from the ideal.

    Returns:
        ideal of the SAME ring generated by I ∩ QQ[remaining variables]
    """
    ring = ideal.ring
    elim = ring.check_indices(indices)
    if not elim or not ideal.gens:
        return ideal
    keep = [i for i in range(ring.ngens) if i not in elim]
    symbols = [ring.symbols[i] for i in elim] + [ring.symbols[i] for i in keep]

    basis = groebner_basis(ideal.gens, symbols, EliminationOrder(len(elim)))
    kept = [g.as_expr() for g in basis if _free_of_first(g, len(elim))]
    return Ideal(ring, kept)


def intersect(I: Ideal, J: Ideal) -> Ideal:
    """I ∩ J via a tag variable."""
    _check_same_ring(I, J)
    ring = I.ring
    # A nonzero constant generator means the unit ideal
    if any(g.is_ground for g in I.gens):
        return J
    if any(g.is_ground for g in J.gens):
        return I
    if not I.gens or not J.gens:
        return Ideal.zero(ring)

    t = sp.Dummy(TAG_VARIABLE_NAME)
    symbols = (t,) + ring.symbols
    tagged = [t * g.as_expr() for g in I.gens] + [(1 - t) * g.as_expr() for g in J.gens]

    basis = groebner_basis(tagged, symbols, EliminationOrder(1))
    kept = [g.as_expr() for g in basis if _free_of_first(g, 1)]
    return Ideal(ring, kept)


def _pull_back(poly: Poly, images: Sequence[int], domain_symbols) -> Poly:
    """Rename a polynomial supported on x_{images} to the domain variables."""
    terms = {}
    for monom, coeff in poly.terms():
        terms[tuple(monom[i] for i in images)] = coeff
    return Poly.from_dict(terms, *domain_symbols, domain=QQ)


def preimage(hom: RingHom, ideal: Ideal) -> Ideal:
    """
    Contraction of an ideal of hom.codomain along a variable embedding.

    Returns:
        ideal of hom.domain
    """
    if hom.codomain != ideal.ring:
        raise InconsistentDimensionError(
            f"preimage: ideal lives in {ideal.ring}, homomorphism maps into {hom.codomain}"
        )
    outside = [i for i in range(ideal.ring.ngens) if i not in hom.images]
    contracted = eliminate(ideal, outside)
    gens = [_pull_back(g, hom.images, hom.domain.symbols) for g in contracted.gens]
    return Ideal(hom.domain, gens)


def contract_to_indices(ideal: Ideal, indices: Iterable[int]) -> Tuple[RingHom, Ideal]:
    """Embedding of subring(indices) together with the contraction of the ideal to it."""
    hom = RingHom.embedding(ideal.ring, sorted(indices))
    return hom, preimage(hom, ideal)
