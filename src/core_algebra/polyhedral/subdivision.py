"""
Regular Subdivisions of Point Configurations
============================================

Exact (rational) regular subdivisions - NO floating point, NO LP solver.

DEFINITIONS:
    Δ = (p_0, ..., p_{n-1})   points of common dimension d
    v_i = (1, p_i)            homogenised points, spanning a space of rank r
    w = (w_0, ..., w_{n-1})   heights ("weights")

    A maximal cell of the regular subdivision Δ_w is the set
        C(a) = { i : <a, v_i> = w_i }
    for a linear functional a with
        <a, v_i> <= w_i   for all i            (LOWER envelope)
    whose equality set spans the whole rank-r space.

METHOD:
    Every maximal cell contains r linearly independent v_i, and those
    determine a on span(v). So we enumerate r-subsets S with rank r,
    compute the heights h_i = <a_S, v_i> of the functional interpolating w
    on S, and keep S when h <= w. Subsets inside an already found cell
    reproduce that cell and are skipped.

    Non-full-dimensional configurations need no special care: the whole
    computation lives in span(v).

PROPERTY:
    w in the lineality space (w_i = <a, v_i> for some a) gives the trivial
    subdivision: one maximal cell containing every point.
"""

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import Sequence, Tuple

from sympy import Matrix, Rational

from ..spec.constants import HOMOGENIZING_COORDINATE
from ..spec.errors import InconsistentDimensionError, PolyhedralEngineFailure

logger = logging.getLogger(__name__)

Point = Tuple[Rational, ...]


def as_point_configuration(points: Sequence[Sequence]) -> Tuple[Point, ...]:
    """Exact copy of a point configuration, checked for a common dimension."""
    pts = tuple(tuple(Rational(x) for x in p) for p in points)
    if not pts:
        raise PolyhedralEngineFailure("Point configuration is empty")
    dims = {len(p) for p in pts}
    if len(dims) != 1:
        raise InconsistentDimensionError(
            f"Points of a configuration must share one dimension, got dimensions {sorted(dims)}"
        )
    return pts


@dataclass(frozen=True)
class RegularSubdivision:
    """
    Regular subdivision Δ_w, exposed through its maximal cells.

    Fields:
        points: the configuration Δ
        weights: the heights w
        maximal_cells: sorted tuple of sorted point-index tuples
    """

    points: Tuple[Point, ...]
    weights: Tuple[Rational, ...]
    maximal_cells: Tuple[Tuple[int, ...], ...]

    @property
    def n_points(self) -> int:
        return len(self.points)

    @property
    def is_trivial(self) -> bool:
        """One maximal cell containing every point."""
        return self.maximal_cells == (tuple(range(self.n_points)),)

    def cell_variables(self, names: Sequence[str]):
        """Maximal cells written with variable names instead of indices."""
        return [tuple(names[i] for i in cell) for cell in self.maximal_cells]


def regular_subdivision(points: Sequence[Sequence], weights: Sequence) -> RegularSubdivision:
    """
    Regular subdivision of a point configuration at a weight (lower envelope).

    Args:
        points: n points of common dimension d
        weights: n heights, integers or rationals

    Returns:
        RegularSubdivision with its maximal cells

    FAIL-FAST:
        InconsistentDimensionError if len(weights) != len(points).
    """
    pts = as_point_configuration(points)
    n = len(pts)
    if len(weights) != n:
        raise InconsistentDimensionError(
            f"Weight of length {len(weights)} for a configuration of {n} points"
        )
    w = tuple(Rational(x) for x in weights)

    V = Matrix([[HOMOGENIZING_COORDINATE] + list(p) for p in pts])
    r = V.rank()
    all_cols = list(range(V.cols))

    cells = []
    for S in combinations(range(n), r):
        if any(set(S) <= set(c) for c in cells):
            continue
        B = V.extract(list(S), all_cols)
        _, pivots = B.rref()
        if len(pivots) < r:
            continue
        Bp = B.extract(list(range(r)), list(pivots))
        a = Bp.inv() * Matrix([w[j] for j in S])
        heights = V.extract(list(range(n)), list(pivots)) * a
        if all(heights[i] <= w[i] for i in range(n)):
            cell = tuple(i for i in range(n) if heights[i] == w[i])
            cells.append(cell)

    if not cells:
        raise PolyhedralEngineFailure(
            f"No lower facet found for {n} points at weight {w}"
        )
    maximal = tuple(sorted(set(cells)))
    logger.debug("Regular subdivision at w=%s: %d maximal cells", w, len(maximal))
    return RegularSubdivision(points=pts, weights=w, maximal_cells=maximal)


def maximal_cells(subdivision: RegularSubdivision) -> Tuple[Tuple[int, ...], ...]:
    return subdivision.maximal_cells
