"""
CORE_ALGEBRA - Exact commutative algebra and polyhedral primitives
==================================================================

NO fan filtering. NO file formats. NO floating point.

Structure:
    spec/        - Constants, error types, algebra contract (Ring, Ideal, ...)
    operators/   - Symbolic engine (Gröbner bases, elimination, initial ideals)
    polyhedral/  - Polyhedral engine (regular subdivisions, fans)
    builders/    - Worked examples (Plücker ideals, hypersimplices)

Every operator takes and returns spec.structures objects. Variable order of
a Ring is the index order of every point configuration and weight vector.
"""

from . import spec
from . import operators
from . import polyhedral
from . import builders
