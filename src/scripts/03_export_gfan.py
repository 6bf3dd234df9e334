#!/usr/bin/env python3
"""
EXPORT A PLÜCKER IDEAL IN gfan INPUT FORMAT
===========================================

Writes the Plücker ideal of Gr(2, n) over Q[y1, ..., yN] (zero-padded
variable numbers) together with its point configuration, ready for
gfan / polymake secondary-fan computations.

OUTPUTS
-------

  - <out>:        gfan ring + ideal
  - stdout:       the hypersimplex Δ(2, n) as {(1, ...), ...}

Usage:
    python3 scripts/03_export_gfan.py 5 --out gr25.dat
"""

from pathlib import Path
import sys

# Path setup: src/scripts/03_export_gfan.py -> parents[1] = src
_src_dir = Path(__file__).resolve().parents[1]
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from core_algebra.builders import hypersimplex, plucker_ideal_2
from omega import ideal_to_gfan, point_configuration_to_string
from omega.constants import DEFAULT_GFAN_FILE


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Plücker ideal of Gr(2, n) as gfan input")
    parser.add_argument("n", type=int, help="Number of points (n >= 4)")
    parser.add_argument("--out", default=DEFAULT_GFAN_FILE, help="Output file")
    args = parser.parse_args()

    ideal = plucker_ideal_2(args.n)
    text = ideal_to_gfan(ideal, make_file=True, file_name=args.out)
    print(text)
    print()
    print(f"# variables {' '.join(ideal.ring.names)}")
    print(point_configuration_to_string(hypersimplex(2, args.n)))
