"""
Stratum Ideals
==============

DEFINITION:
    For B ⊆ {0, ..., n-1} and N its complement,
        stratum(I, B) = (I + < x_N >) ∩ QQ[x_B]      extended to QQ[x]
    = the ideal of V(I) ∩ {x_N = 0}, seen as an ideal of the full ring
      that only involves the variables of B.

PROPERTY:
    stratum(I, all indices) = I          (nothing to eliminate)

Variable subsets are ALWAYS integer index sets over the ring's fixed
variable order, never sets of symbols.
"""

from typing import Iterable

from core_algebra.operators import eliminate
from core_algebra.spec import Ideal


def complement(ngens: int, indices: Iterable[int]):
    kept = set(indices)
    return [i for i in range(ngens) if i not in kept]


def stratum(ideal: Ideal, B: Iterable[int]) -> Ideal:
    """
    Stratum ideal of the coordinate subspace spanned by the variables in B.

    Args:
        ideal: I
        B: indices of the variables that are NOT set to zero

    Returns:
        eliminate(I + <x_N>, N) as an ideal of the full ring
    """
    ring = ideal.ring
    keep = ring.check_indices(B)
    drop = complement(ring.ngens, keep)
    if not drop:
        return ideal
    return eliminate(ideal + Ideal.coordinate(ring, drop), drop)
