#!/usr/bin/env python3
"""
FILTER AN EXTERNAL SECONDARY FAN
================================

Reads a secondary fan from gfan / polymake text and an ideal from a file
with one generator per line, then reports the cones inside and outside
Ω(I) or Ω*(I).

INPUTS
------

External:
  - fan file: RAYS / CONES (or CONES_ORBITS with --orbits) blocks,
    zero-based ray indices
  - ideal file: '# vars p12 p13 ...' line naming the variables in order,
    then one generator per line ('^' or '**' for powers)
  - optional point configuration: one point per line, same order as the
    variables (default: Δ(I) from the lineality space)

OUTPUTS
-------

  - inside / outside / undecided cone indices
  - with --write-outside FILE: the failing cones as RAYS / CONES text

Usage:
    python3 scripts/02_filter_gfan_fan.py fan.txt ideal.txt --test omega_star
    python3 scripts/02_filter_gfan_fan.py fan.txt ideal.txt --orbits --negate \\
        --workers 8 --timeout 600 --partial
"""

import logging
from pathlib import Path
import sys

import numpy as np

# Path setup: src/scripts/02_filter_gfan_fan.py -> parents[1] = src
_src_dir = Path(__file__).resolve().parents[1]
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from core_algebra.spec import Ideal, Ring
from omega import FilterConfig, cones_to_gfan, filter_cones, parse_tropical_file
from omega.constants import COMMENT_CHAR, TEST_OMEGA, TESTS

logger = logging.getLogger("filter_gfan_fan")

VARS_DIRECTIVE = "vars"


def read_ideal(path) -> Ideal:
    """Ideal file: a '# vars ...' line, then one generator per line."""
    names = None
    gens = []
    for line in Path(path).read_text().splitlines():
        line = line.strip()
        if not line:
            continue
        if line.startswith(COMMENT_CHAR):
            words = line[1:].split()
            if words and words[0] == VARS_DIRECTIVE:
                names = words[1:]
            continue
        gens.append(line.rstrip(",").replace("^", "**"))
    if not names:
        raise ValueError(f"{path}: missing '# {VARS_DIRECTIVE} ...' line")
    return Ideal(Ring.from_names(names), gens)


def read_points(path):
    return [tuple(line.split()) for line in Path(path).read_text().splitlines() if line.strip()]


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Ω / Ω* filter of a gfan secondary fan")
    parser.add_argument("fan", help="RAYS / CONES text file")
    parser.add_argument("ideal", help="Ideal file")
    parser.add_argument("--points", default=None, help="Point configuration file")
    parser.add_argument("--test", choices=TESTS, default=TEST_OMEGA, help="Which test")
    parser.add_argument("--orbits", action="store_true", help="Read CONES_ORBITS")
    parser.add_argument("--negate", action="store_true", help="Negate the rays")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes")
    parser.add_argument("--timeout", type=float, default=None, help="Seconds per cone")
    parser.add_argument("--partial", action="store_true", help="Keep going past failed cones")
    parser.add_argument("--write-outside", default=None, help="Write failing cones here")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    sec = parse_tropical_file(args.fan, cone_orbits_given=args.orbits, negate_rays=args.negate)
    ideal = read_ideal(args.ideal)
    delta = read_points(args.points) if args.points else None
    logger.info("ideal with %d generators in %d variables", len(ideal.gens), ideal.ngens)

    config = FilterConfig(max_workers=args.workers, cone_timeout=args.timeout,
                          partial=args.partial)
    result = filter_cones(ideal, delta, sec, args.test, config)

    print()
    print(f"{args.test.upper()}: {len(result.tests)} cones")
    print(f"  inside    ({len(result.inside):4d}): {list(result.inside)}")
    print(f"  outside   ({len(result.outside):4d}): {list(result.outside)}")
    print(f"  undecided ({len(result.undecided):4d}): {list(result.undecided)}")

    if args.write_outside:
        text = cones_to_gfan(sec.rays, sec.cone_incidence[np.asarray(result.outside, dtype=int), :])
        Path(args.write_outside).write_text(text)
        logger.info("wrote %d outside cones to %s", len(result.outside), args.write_outside)
