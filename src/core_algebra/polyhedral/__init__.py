"""Polyhedral operators - exact regular subdivisions, fans, cone incidence, completeness."""

from .subdivision import (
    RegularSubdivision,
    as_point_configuration,
    regular_subdivision,
    maximal_cells,
)

from .fans import (
    Fan,
    ExpandedFan,
    SymmetryReducedPairs,
    polyhedral_fan,
    incidence_matrix,
    primitive_vector,
    as_rational_vector,
    rank,
)
