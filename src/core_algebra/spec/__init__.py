"""Constants, error types and the algebra contract (Ring, Ideal, RingHom, Valuation)."""

from .constants import (
    CONVENTION_MIN,
    CONVENTION_MAX,
    CANONICAL_ORDER,
    ORDER_GREVLEX,
    ORDER_LEX,
)
from .errors import (
    OmegaError,
    DegenerateIdealError,
    InconsistentDimensionError,
    SymbolicEngineFailure,
    PolyhedralEngineFailure,
    ConeTimeoutError,
)
from .structures import (
    Ring,
    Ideal,
    RingHom,
    Valuation,
    MIN_VALUATION,
    MAX_VALUATION,
)
