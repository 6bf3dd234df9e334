"""
Plücker Ideals and Hypersimplices
=================================

Worked-example constructors for the Grassmannian Gr(2, n).

COORDINATES:
    One variable p_S per k-subset S of {1, ..., n}, in LEX order of S:
        Gr(2,4): p12, p13, p14, p23, p24, p34
    Index i of the ring = index i of subsets_lex(1..n, k) = point i of the
    hypersimplex Δ(k, n).

PLÜCKER RELATIONS (k = 2):
    For i < j < k < l:
        p_ij p_kl - p_ik p_jl + p_il p_jk
    These three-term relations generate the Plücker ideal of Gr(2, n):
        Gr(2,4): 1 quadric      Gr(2,5): 5 quadrics

HYPERSIMPLEX:
    Δ(k, n) = { e_S = sum_{s in S} e_s : |S| = k } ⊂ QQ^n
    Δ(2,4) is the octahedron, Δ(2,5) has 10 vertices in a 4-dim affine space.
"""

from itertools import combinations
from typing import List, Sequence, Tuple

from ..spec.structures import Ideal, Ring


def subsets_lex(S: Sequence[int], k: int) -> List[List[int]]:
    """
    The k-subsets of the sorted list S, sorted lexicographically.

    Example:
        subsets_lex([1, 2, 3, 4], 2)
        → [[1, 2], [1, 3], [1, 4], [2, 3], [2, 4], [3, 4]]
    """
    return sorted(list(c) for c in combinations(sorted(S), k))


def subsets_revlex(S: Sequence[int], k: int) -> List[List[int]]:
    """
    The k-subsets of S, sorted by their reversed tuples (colex order).

    Example:
        subsets_revlex([1, 2, 3, 4], 2)
        → [[1, 2], [1, 3], [2, 3], [1, 4], [2, 4], [3, 4]]
    """
    return sorted((list(c) for c in combinations(sorted(S), k)),
                  key=lambda c: c[::-1])


def plucker_label(subset: Sequence[int], prefix: str = "p") -> str:
    return prefix + "".join(str(s) for s in subset)


def plucker_ring(k: int, n: int, prefix: str = "p") -> Ring:
    """Ring with one Plücker coordinate per k-subset of {1..n}, lex order."""
    if not 0 < k < n:
        raise ValueError(f"Need 0 < k < n, got k={k}, n={n}")
    return Ring.from_names(plucker_label(S, prefix) for S in subsets_lex(range(1, n + 1), k))


def plucker_ideal_2(n: int, prefix: str = "p") -> Ideal:
    """
    Plücker ideal of Gr(2, n), generated by the three-term relations.

    Args:
        n: number of points, n >= 4

    Returns:
        Ideal in plucker_ring(2, n)
    """
    if n < 4:
        raise ValueError(f"Gr(2, n) has Plücker relations only for n >= 4, got n={n}")
    R = plucker_ring(2, n, prefix)
    index = {tuple(S): i for i, S in enumerate(subsets_lex(range(1, n + 1), 2))}
    x = R.symbols

    def p(a, b):
        return x[index[(a, b)]]

    relations = []
    for i, j, k, l in combinations(range(1, n + 1), 4):
        relations.append(p(i, j) * p(k, l) - p(i, k) * p(j, l) + p(i, l) * p(j, k))
    return Ideal(R, relations)


def hypersimplex(k: int, n: int) -> Tuple[Tuple[int, ...], ...]:
    """Vertices of Δ(k, n) in subsets_lex order (0/1 vectors with k ones)."""
    points = []
    for S in subsets_lex(range(1, n + 1), k):
        points.append(tuple(1 if i in S else 0 for i in range(1, n + 1)))
    return tuple(points)


def binomial_ideal(ring: Ring, plus: Sequence[int], minus: Sequence[int]) -> Ideal:
    """< prod x_plus - prod x_minus >, e.g. the square ideal <x1 x4 - x2 x3>."""
    x = ring.symbols
    lhs = 1
    for i in plus:
        lhs *= x[i]
    rhs = 1
    for i in minus:
        rhs *= x[i]
    return Ideal(ring, [lhs - rhs])
