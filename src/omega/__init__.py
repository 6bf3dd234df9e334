"""
Omega Layer
===========

Ω(I) and Ω*(I): the cones of a secondary fan on which the initial ideal of I
agrees with the lower-bound (resp. upper-bound) ideal of the regular
subdivision, plus the pieces they are built from.

Modules:
    lineality  - lineality space (H/V-rep) and point configuration Δ(I)
    strata     - stratum ideals of coordinate subspaces
    bounds     - lower-bound ideal_w and upper-bound ideal_up_w
    fan_filter - per-cone tests and the Ω / Ω* subfans
    gfan_io    - gfan / polymake text in and out
"""

from .lineality import (
    lineality_space_H_rep,
    lineality_space_V_rep,
    point_configuration,
    positive_grading,
    matrix_rows,
)
from .strata import stratum
from .bounds import (
    max_cells,
    ideals_of_max_cells,
    ideal_w,
    cylinder_ideal,
    ideal_up_w,
)
from .fan_filter import (
    FilterConfig,
    ConeTest,
    FilterResult,
    normalize_secondary_fan,
    representative_weights,
    omega_test,
    omega_star_test,
    filter_cones,
    omega_fan,
    omega_star_fan,
)
from .gfan_io import (
    parse_tropical_text,
    parse_tropical_file,
    point_to_string,
    point_configuration_to_string,
    pad_variable_numbers,
    ring_to_gfan,
    ideal_to_gfan,
    cones_to_gfan,
)
