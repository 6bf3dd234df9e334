"""
gfan Text Bridge Tests
======================

Run: python -m pytest tests/omega/test_gfan_io.py -v
"""

import re

import numpy as np

from core_algebra.builders import hypersimplex, octahedron_secondary_fan, square_ideal
from core_algebra.spec import Ideal, Ring
from omega import (
    cones_to_gfan,
    ideal_to_gfan,
    omega_fan,
    pad_variable_numbers,
    parse_tropical_file,
    parse_tropical_text,
    point_configuration_to_string,
    point_to_string,
    ring_to_gfan,
)

FAN_TEXT = """\
_application fan
_version 2.2

RAYS
0 0 1 1 0 0  # 0
0 1 0 0 1 0  # 1
1 0 0 0 0 1  # 2

N_RAYS
3

CONES_ORBITS
{}  # dim 4
{0}
{0 1}

CONES
{}  # dim 4
{0}
{1}
{2}
{0 1}
{0 2}
{1 2}
"""


# =============================================================================
# TEST A: Parsing
# =============================================================================

def test_parse_rays_and_cones():
    pairs = parse_tropical_text(FAN_TEXT)
    assert pairs.rays == ((0, 0, 1, 1, 0, 0), (0, 1, 0, 0, 1, 0), (1, 0, 0, 0, 0, 1))
    assert pairs.n_cones == 7
    assert pairs.index_lists() == [(), (0,), (1,), (2,), (0, 1), (0, 2), (1, 2)]


def test_parse_cone_orbits():
    pairs = parse_tropical_text(FAN_TEXT, cone_orbits_given=True)
    assert pairs.index_lists() == [(), (0,), (0, 1)]


def test_parse_negated_rays():
    pairs = parse_tropical_text(FAN_TEXT, negate_rays=True)
    assert pairs.rays[2] == (-1, 0, 0, 0, 0, -1)


def test_blank_line_ends_section():
    text = "RAYS\n1 0\n\n0 1\nCONES\n{0}\n"
    pairs = parse_tropical_text(text)
    assert pairs.rays == ((1, 0),)
    assert pairs.index_lists() == [(0,)]


def test_parse_file(tmp_path):
    path = tmp_path / "secondary.fan"
    path.write_text(FAN_TEXT)
    assert parse_tropical_file(path).n_cones == 7


def test_round_trip_of_emitted_fan():
    fan = octahedron_secondary_fan()
    pairs = parse_tropical_text(cones_to_gfan(fan.rays, fan.cones))
    assert pairs.rays == fan.rays
    assert np.array_equal(pairs.cone_incidence, fan.cones)


def test_parsed_fan_feeds_the_filter():
    """Ω of the Plücker quadric is the whole parsed secondary fan."""
    from core_algebra.builders import plucker_ideal_2
    I = plucker_ideal_2(4)
    fan = omega_fan(I, hypersimplex(2, 4), parse_tropical_text(FAN_TEXT))
    assert fan.n_cones == 7
    assert fan.is_complete()


# =============================================================================
# TEST B: Writing
# =============================================================================

def test_point_strings():
    assert point_to_string((2, 3)) == "(1, 2, 3)"
    assert point_configuration_to_string([(0,), (1,)]) == "{(1, 0), (1, 1)}"


def test_pad_variable_numbers():
    assert pad_variable_numbers("y1*y10 + y2") == "y01*y10 + y02"
    assert pad_variable_numbers("x + 1") == "x + 1"
    assert pad_variable_numbers("p1*p7") == "p1*p7"


def test_ring_to_gfan():
    assert ring_to_gfan(3) == "Q[y1,y2,y3]"
    assert ring_to_gfan(12).startswith("Q[y01,y02,")
    assert ring_to_gfan(12).endswith("y12]")


def test_ideal_to_gfan_square():
    text = ideal_to_gfan(square_ideal())
    assert text.startswith("Q[y1,y2,y3,y4]\n\n{\n")
    assert text.endswith("\n}")
    assert "y1*y4" in text and "y2*y3" in text


def test_ideal_to_gfan_exponents_and_padding():
    R = Ring.indexed(10)
    text = ideal_to_gfan(Ideal(R, ["x1**2 - x10*x2"]))
    assert "y01^2" in text
    assert "**" not in text
    assert "y10" in text


def test_ideal_to_gfan_zero_ideal():
    assert ideal_to_gfan(Ideal.zero(Ring.indexed(3))) == ""


def test_ideal_to_gfan_writes_file(tmp_path):
    path = tmp_path / "square.dat"
    text = ideal_to_gfan(square_ideal(), make_file=True, file_name=path)
    assert path.read_text() == text


def test_ideal_to_gfan_pads_to_ring_width():
    """Low indices of a 10-variable ring are written as declared: y01, not y1."""
    R = Ring.indexed(10)
    text = ideal_to_gfan(Ideal(R, ["x1*x4 - x2*x3"]))
    ring_line, body = text.split("\n\n")
    assert ring_line == ring_to_gfan(10)
    assert "y01*y04" in body and "y02*y03" in body
    declared = set(ring_line[2:-1].split(","))
    assert set(re.findall(r"y\d+", body)) <= declared


def test_pad_variable_numbers_fixed_width():
    assert pad_variable_numbers("y1*y4", width=2) == "y01*y04"
