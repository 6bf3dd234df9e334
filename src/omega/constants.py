"""
Omega Layer Constants
=====================

Defaults for the fan filter and the gfan text bridge.
Centralizing these prevents magic strings spreading across modules.
"""

# ---------------------------------------------------------------------
# FAN FILTER
# ---------------------------------------------------------------------

# Which agreement is tested per cone
TEST_OMEGA = "omega"            # in_w(I)  == ideal_w(I, w)
TEST_OMEGA_STAR = "omega_star"  # in_-w(I) == ideal_up_w(I, w)
TESTS = (TEST_OMEGA, TEST_OMEGA_STAR)

# Worker processes for the per-cone loop (1 = sequential, in-process)
DEFAULT_MAX_WORKERS = 1

# Seconds a single cone test may take before it is abandoned.
# None = no limit. A limit forces the process pool even for one worker,
# since only a separate process can be stopped.
DEFAULT_CONE_TIMEOUT = None

# Seconds between checks on running cones while waiting for a result
POOL_POLL_INTERVAL = 0.1

# ---------------------------------------------------------------------
# GFAN TEXT FORMAT
# ---------------------------------------------------------------------

SECTION_RAYS = "RAYS"
SECTION_CONES = "CONES"
SECTION_CONES_ORBITS = "CONES_ORBITS"

COMMENT_CHAR = "#"
DEFAULT_GFAN_FILE = "test.dat"

# Ring declared in gfan input: Q[y1,...,yn]
GFAN_RING_PREFIX = "y"
