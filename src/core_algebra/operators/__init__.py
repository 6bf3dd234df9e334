"""Symbolic operators - Gröbner bases, elimination, intersection, contraction, initial ideals."""

from .groebner import (
    groebner_basis,
    reduced_groebner_basis,
    canonical_key,
    ideals_equal,
    is_zero_ideal,
    is_unit_ideal,
    contains,
    is_subideal,
    ideal_sum,
)

from .elimination import (
    EliminationOrder,
    eliminate,
    intersect,
    preimage,
    contract_to_indices,
)

from .initial import (
    WeightOrder,
    check_weight,
    homogenize,
    initial_form,
    initial,
    standard_grading,
)
