"""
Omega Source Code
=================

Modules:
    core_algebra - exact algebra and polyhedral primitives
    omega        - Ω / Ω* fan filtering, strata, bound ideals, gfan bridge
    tests        - Test suite

Requirements:
    Python >= 3.9
    sympy >= 1.13
    numpy >= 1.20
"""

import sys

# Python version check
if sys.version_info < (3, 9):
    raise ImportError(f"omega requires Python >= 3.9, got {sys.version}")

# sympy version check (custom MonomialOrder keys in groebner, solvers.simplex)
import sympy
_sympy_version = tuple(int(p) for p in sympy.__version__.split('.')[:2] if p.isdigit())
if _sympy_version < (1, 13):
    raise ImportError(f"omega requires sympy >= 1.13, got {sympy.__version__}")

# numpy version check
import numpy as np
_numpy_version = tuple(int(p) for p in np.__version__.split('.')[:2] if p.isdigit())
if _numpy_version < (1, 20):
    raise ImportError(f"omega requires numpy >= 1.20, got {np.__version__}")
