"""
Example builders - worked ideals and point configurations, no operators dependency.

EXPORTS:
- Index combinatorics: subsets_lex, subsets_revlex
- Plücker coordinates: plucker_ring, plucker_ideal_2, plucker_label
- Point configurations: hypersimplex
- Toy ideals: binomial_ideal, square_ideal
- Secondary fans: square_secondary_fan, octahedron_secondary_fan
"""

from .plucker import (
    subsets_lex,
    subsets_revlex,
    plucker_label,
    plucker_ring,
    plucker_ideal_2,
    hypersimplex,
    binomial_ideal,
)

from .secondary import (
    square_ring,
    square_ideal,
    square_secondary_fan,
    octahedron_secondary_fan,
)
