"""
gfan / polymake Text Bridge
===========================

Secondary fans are produced by external tools. This module reads their
text output and writes ideals in gfan's input format.

FAN TEXT (gfan / polymake style):

    RAYS
    0 0 1 1 0 0     # 0
    0 1 0 0 1 0     # 1

    CONES
    {}
    {0}
    {0 1}

    - section headers are matched by PREFIX, CONES_ORBITS before CONES
    - a blank line ends the current section
    - '#' starts a comment, braces are ignored
    - ray indices are ZERO-BASED, here and in every returned incidence

IDEAL TEXT (gfan input):

    Q[y1,y2,y3,y4]

    {
    y1*y4 - y2*y3
    }

    Variable numbers are zero-padded to a common width (y01 ... y12) so that
    gfan's lexicographic variable order agrees with the ring order.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import numpy as np
from sympy import Rational, Symbol

from core_algebra.operators import is_zero_ideal
from core_algebra.polyhedral import SymmetryReducedPairs, incidence_matrix
from core_algebra.spec import Ideal

from .constants import (
    COMMENT_CHAR,
    DEFAULT_GFAN_FILE,
    GFAN_RING_PREFIX,
    SECTION_CONES,
    SECTION_CONES_ORBITS,
    SECTION_RAYS,
)

logger = logging.getLogger(__name__)

_VARIABLE_RE = re.compile(r"([A-Za-z]+)(\d+)")


# =============================================================================
# Reading fans
# =============================================================================

def _strip_line(line: str) -> str:
    line = line.split(COMMENT_CHAR, 1)[0]
    return line.replace("{", "").replace("}", "")


def parse_tropical_text(text: str, cone_orbits_given: bool = False,
                        negate_rays: bool = False) -> SymmetryReducedPairs:
    """
    Parse RAYS / CONES (or CONES_ORBITS) blocks.

    Args:
        text: file contents
        cone_orbits_given: take the cones from CONES_ORBITS instead of CONES
        negate_rays: flip every ray (max- vs min-convention output)

    Returns:
        SymmetryReducedPairs(rays, cone incidence)
    """
    rays: List[tuple] = []
    cones: List[List[int]] = []
    orbits: List[List[int]] = []
    section = ""

    for line in text.splitlines():
        if not line.strip():
            section = ""
            continue
        if line.startswith(SECTION_RAYS):
            section = SECTION_RAYS
            continue
        if line.startswith(SECTION_CONES_ORBITS):
            section = SECTION_CONES_ORBITS
            continue
        if line.startswith(SECTION_CONES):
            section = SECTION_CONES
            continue

        if section == SECTION_RAYS:
            tokens = line.split(COMMENT_CHAR, 1)[0].split()
            if tokens:
                rays.append(tuple(Rational(t) for t in tokens))
        elif section == SECTION_CONES_ORBITS and cone_orbits_given:
            orbits.append([int(t) for t in _strip_line(line).split()])
        elif section == SECTION_CONES and not cone_orbits_given:
            cones.append([int(t) for t in _strip_line(line).split()])

    if negate_rays:
        rays = [tuple(-x for x in r) for r in rays]
    index_lists = orbits if cone_orbits_given else cones
    logger.debug("parsed %d rays, %d cones", len(rays), len(index_lists))
    return SymmetryReducedPairs(tuple(rays), incidence_matrix(index_lists, len(rays)))


def parse_tropical_file(path, cone_orbits_given: bool = False,
                        negate_rays: bool = False) -> SymmetryReducedPairs:
    """parse_tropical_text on the contents of a file."""
    text = Path(path).read_text()
    logger.info("reading fan from %s", path)
    return parse_tropical_text(text, cone_orbits_given, negate_rays)


# =============================================================================
# Writing
# =============================================================================

def point_to_string(pt: Sequence) -> str:
    """Homogenised point: (1, a, b, ...)."""
    return "(" + ", ".join(["1"] + [str(a) for a in pt]) + ")"


def point_configuration_to_string(rows: Iterable[Sequence]) -> str:
    return "{" + ", ".join(point_to_string(r) for r in rows) + "}"


def pad_variable_numbers(s: str, width: Optional[int] = None) -> str:
    """
    Zero-pad every <letters><digits> name to a common width.

    width defaults to the number of digits of the largest number in s.
    """
    matches = _VARIABLE_RE.findall(s)
    if not matches:
        return s
    if width is None:
        width = len(str(max(int(num) for _, num in matches)))
    return _VARIABLE_RE.sub(lambda m: m.group(1) + m.group(2).zfill(width), s)


def _gfan_name(i: int, n: int) -> str:
    """Name of variable i (zero-based) of an n-variable gfan ring."""
    return f"{GFAN_RING_PREFIX}{str(i + 1).zfill(len(str(n)))}"


def ring_to_gfan(n: int) -> str:
    return "Q[" + ",".join(_gfan_name(i, n) for i in range(n)) + "]"


def _polynomial_to_gfan(expr, renaming) -> str:
    return str(expr.xreplace(renaming)).replace("**", "^")


def ideal_to_gfan(ideal: Ideal, make_file: bool = False,
                  file_name=DEFAULT_GFAN_FILE) -> str:
    """
    gfan input text for I over Q[y1, ..., yn].

    Variable i of the ring is written as y<i+1>, zero-padded to the width of
    n as in the declared ring. The zero ideal gives "".
    With make_file=True the text is also written to file_name.
    """
    if is_zero_ideal(ideal):
        return ""
    ring = ideal.ring
    renaming = {s: Symbol(_gfan_name(i, ring.ngens)) for i, s in enumerate(ring.symbols)}
    gens = [_polynomial_to_gfan(e, renaming) for e in ideal.exprs()]
    body = "{\n" + ",\n".join(gens) + "\n}"
    output = ring_to_gfan(ring.ngens) + "\n\n" + body
    if make_file:
        Path(file_name).write_text(output)
        logger.info("wrote gfan input for %d generators to %s", len(gens), file_name)
    return output


def cones_to_gfan(rays: Sequence[Sequence], incidence) -> str:
    """RAYS / CONES text that parse_tropical_text reads back unchanged."""
    incidence = np.asarray(incidence, dtype=bool)
    lines = [SECTION_RAYS]
    lines.extend(" ".join(str(x) for x in r) for r in rays)
    lines.append("")
    lines.append(SECTION_CONES)
    for row in incidence:
        lines.append("{" + " ".join(str(int(j)) for j in np.flatnonzero(row)) + "}")
    return "\n".join(lines) + "\n"
