"""
Hand-Built Secondary Fans
=========================

Two small secondary fans whose cones can be checked by hand. Larger ones
(Δ(2,5) and up) come from external tools through omega.gfan_io.

SQUARE (4 points, variables x1..x4, x1 x4 - x2 x3):
    points   x1=(0,0)  x2=(1,0)  x3=(0,1)  x4=(1,1)
    lineality  (1,1,1,1), (0,1,0,1), (0,0,1,1)          dim 3
    rays       e1+e4   (lift x1, x4: diagonal x2-x3)
               e2+e3   (lift x2, x3: diagonal x1-x4)
    cones      {}, {0}, {1}

OCTAHEDRON Δ(2,4) (variables p12 p13 p14 p23 p24 p34):
    lineality  the 4 coordinate functions of the hypersimplex      dim 4
    rays       r0 = e14 + e23,  r1 = e13 + e24,  r2 = e12 + e34
               (lift one pair of opposite vertices)
    cones      {}, {0}, {1}, {2}, {0,1}, {0,2}, {1,2}
    The 2-dim cones are the three triangulations, each with the diagonal
    through the pair of vertices NOT lifted.
"""

from typing import Tuple

from ..polyhedral.fans import Fan, polyhedral_fan
from ..spec.structures import Ideal, Ring
from .plucker import binomial_ideal, hypersimplex, subsets_lex


def square_ring(prefix: str = "x") -> Ring:
    return Ring.indexed(4, prefix)


def square_ideal(prefix: str = "x") -> Ideal:
    """<x1 x4 - x2 x3>."""
    return binomial_ideal(square_ring(prefix), plus=[0, 3], minus=[1, 2])


def square_secondary_fan() -> Fan:
    rays = [(1, 0, 0, 1), (0, 1, 1, 0)]
    lineality = [(1, 1, 1, 1), (0, 1, 0, 1), (0, 0, 1, 1)]
    return polyhedral_fan([[], [0], [1]], rays, lineality)


def _opposite_pair_ray(pairs: Tuple[Tuple[int, int], Tuple[int, int]]) -> Tuple[int, ...]:
    labels = [tuple(S) for S in subsets_lex(range(1, 5), 2)]
    return tuple(1 if S in pairs else 0 for S in labels)


def octahedron_secondary_fan() -> Fan:
    """Secondary fan of Δ(2,4), coordinates ordered like plucker_ring(2, 4)."""
    rays = [
        _opposite_pair_ray(((1, 4), (2, 3))),
        _opposite_pair_ray(((1, 3), (2, 4))),
        _opposite_pair_ray(((1, 2), (3, 4))),
    ]
    points = hypersimplex(2, 4)
    lineality = [tuple(p[s] for p in points) for s in range(4)]
    cones = [[], [0], [1], [2], [0, 1], [0, 2], [1, 2]]
    return polyhedral_fan(cones, rays, lineality)
