#!/usr/bin/env python3
"""
Ω AND Ω* FOR THE PLÜCKER QUADRIC OF Gr(2,4)
===========================================

Filters the secondary fan of the octahedron Δ(2,4) by the Ω and Ω* tests
and prints one line per cone.

INPUTS
------

Internal (from builders):
  - I = < p12 p34 - p13 p24 + p14 p23 >  in QQ[p12, p13, p14, p23, p24, p34]
  - Δ = hypersimplex(2, 4)
  - secondary fan: 3 rays, 7 cones, 4-dim lineality space

External:
  - None

OUTPUTS
-------

  - Ω:  7/7 cones inside, the filtered fan is complete
  - Ω*: 4/7 cones inside; the three triangulations fail because the
        upper bound ideal there is the monomial ideal <p12 p34, p13 p24>
        (up to symmetry) while in_{-w}(I) keeps the binomial

With --square the same report is made for <x1 x4 - x2 x3> on the unit
square, where both Ω and Ω* are complete.

Usage:
    python3 scripts/01_plucker_omega.py
    python3 scripts/01_plucker_omega.py --square --workers 2 -v
"""

import logging
from pathlib import Path
import sys

# Path setup: src/scripts/01_plucker_omega.py -> parents[1] = src
_src_dir = Path(__file__).resolve().parents[1]
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from core_algebra.builders import (
    hypersimplex,
    octahedron_secondary_fan,
    plucker_ideal_2,
    square_ideal,
    square_secondary_fan,
)
from omega import FilterConfig, filter_cones, omega_fan, omega_star_fan
from omega.constants import TESTS


def report(name, ideal, delta, sec, config):
    print("=" * 72)
    print(f"{name}:  {len(ideal.gens)} generator(s) in {ideal.ngens} variables")
    print(f"  secondary fan: {sec.n_rays} rays, {sec.n_cones} cones, "
          f"lineality dim {sec.lineality_dim}")
    print("=" * 72)

    for test in TESTS:
        result = filter_cones(ideal, delta, sec, test, config)
        print()
        print(f"{test.upper()}")
        print("-" * 72)
        print(f"{'#':>3s}  {'rays':10s}  {'weight':24s}  {'result':>10s}  {'time':>8s}")
        for t in result.tests:
            rays = "{" + " ".join(str(j) for j in sec.rays_of(t.index)) + "}"
            status = {True: "inside", False: "outside", None: "undecided"}[t.passed]
            print(f"{t.index:3d}  {rays:10s}  {str(t.weight):24s}  {status:>10s}  {t.elapsed:7.2f}s")
        print(f"  inside {len(result.inside)}/{len(result.tests)}, "
              f"outside {len(result.outside)}, undecided {len(result.undecided)}")

    inside = omega_fan(ideal, delta, sec, config=config)
    inside_star = omega_star_fan(ideal, delta, sec, config=config)
    print()
    print(f"  Ω  complete: {inside.is_complete()}")
    print(f"  Ω* complete: {inside_star.is_complete()}")
    print()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Ω / Ω* of Gr(2,4) on its secondary fan")
    parser.add_argument("--square", action="store_true", help="Also run the square binomial")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes")
    parser.add_argument("--timeout", type=float, default=None, help="Seconds per cone")
    parser.add_argument("--partial", action="store_true", help="Keep going past failed cones")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    config = FilterConfig(max_workers=args.workers, cone_timeout=args.timeout,
                          partial=args.partial)

    report("Gr(2,4) Plücker quadric", plucker_ideal_2(4), hypersimplex(2, 4),
           octahedron_secondary_fan(), config)
    if args.square:
        report("Square binomial", square_ideal(), None, square_secondary_fan(), config)
