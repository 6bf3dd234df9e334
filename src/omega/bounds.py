"""
Lower and Upper Bound Ideals of a Regular Subdivision
=====================================================

Given I, a weight w and the point configuration Δ = Δ(I), let Δ_w be the
regular subdivision of Δ at w with maximal cells C_1, ..., C_k (index sets).

LOWER BOUND:
    ideal_w(I, w) = stratum(I, C_1) + ... + stratum(I, C_k)

UPPER BOUND:
    cylinder(I, C) = f(f^{-1}(I)) + < x_i : i not in C >
        where f: QQ[y_C] -> QQ[x] is the embedding y_c -> x_c
        and f^{-1}(I) = I ∩ QQ[x_C] is the contraction
    ideal_up_w(I, w) = cylinder(I, C_1) ∩ ... ∩ cylinder(I, C_k)
        computed as a fold with the unit ideal as seed

DIMENSIONS:
    |Δ| = number of variables = |w|, otherwise InconsistentDimensionError.
    Δ defaults to point_configuration(I); pass it explicitly to avoid
    recomputing the lineality space for every weight.
"""

import logging
from functools import reduce
from typing import List, Optional, Sequence, Tuple

from core_algebra.operators import ideal_sum, intersect, preimage
from core_algebra.polyhedral import as_point_configuration, regular_subdivision
from core_algebra.spec import Ideal, InconsistentDimensionError, RingHom

from .lineality import point_configuration
from .strata import complement, stratum

logger = logging.getLogger(__name__)


def resolve_configuration(ideal: Ideal, delta: Optional[Sequence[Sequence]] = None):
    """Δ given by the caller, or Δ(I); checked against the number of variables."""
    if delta is None:
        delta = point_configuration(ideal)
    points = as_point_configuration(delta)
    if len(points) != ideal.ngens:
        raise InconsistentDimensionError(
            f"Point configuration has {len(points)} points but the ring has "
            f"{ideal.ngens} variables"
        )
    return points


def max_cells(ideal: Ideal, w: Sequence, delta=None) -> Tuple[Tuple[int, ...], ...]:
    """Maximal cells of Δ_w as index tuples."""
    points = resolve_configuration(ideal, delta)
    if len(w) != len(points):
        raise InconsistentDimensionError(
            f"Weight of length {len(w)} for a configuration of {len(points)} points"
        )
    return regular_subdivision(points, w).maximal_cells


def ideals_of_max_cells(ideal: Ideal, w: Sequence, delta=None) -> List[Ideal]:
    """One stratum ideal per maximal cell of Δ_w."""
    return [stratum(ideal, cell) for cell in max_cells(ideal, w, delta)]


def ideal_w(ideal: Ideal, w: Sequence, delta=None) -> Ideal:
    """Lower-bound ideal: sum of the stratum ideals of the maximal cells."""
    return ideal_sum(*ideals_of_max_cells(ideal, w, delta))


def cylinder_ideal(ideal: Ideal, cell: Sequence[int]) -> Ideal:
    """
    Cylinder ideal over a cell: the contraction of I to the cell's variables,
    lifted back to the full ring, plus the variables outside the cell.
    """
    ring = ideal.ring
    hom = RingHom.embedding(ring, cell)
    lifted = hom.image_ideal(preimage(hom, ideal))
    return lifted + Ideal.coordinate(ring, complement(ring.ngens, hom.images))


def ideal_up_w(ideal: Ideal, w: Sequence, delta=None) -> Ideal:
    """Upper-bound ideal: intersection of the cylinder ideals of the maximal cells."""
    cells = max_cells(ideal, w, delta)
    logger.debug("ideal_up_w: intersecting %d cylinder ideals", len(cells))
    return reduce(intersect,
                  (cylinder_ideal(ideal, cell) for cell in cells),
                  Ideal.unit(ideal.ring))
