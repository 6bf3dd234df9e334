"""
Fan Filter: Ω(I) and Ω*(I) inside a Secondary Fan
=================================================

For every cone σ of a secondary fan of Δ(I):

    w_σ = primitive( sum of the rays of σ )      (0 if σ has no rays)

    Ω  test:  in_{w}(I)  == ideal_w(I, w, Δ)
    Ω* test:  in_{-w}(I) == ideal_up_w(I, w, Δ)     <- weight NOT negated here

The sign asymmetry of the Ω* test is a fixed contract: the upper bound is
taken at w while the initial ideal is probed at -w.

OUTPUT:
    outside=True   (rays, incidence rows of the FAILED cones)   raw pair
    outside=False  Fan(incidence rows of the PASSING cones, rays, lineality)
                   lineality from the input fan, or lineality_space_V_rep(I)
                   when the input was a bare (rays, incidence) pair

INPUT SHAPES (normalised once, before the loop):
    Fan / ExpandedFan           rays, cones, lineality
    SymmetryReducedPairs        rays, cone_incidence       (no lineality)
    (rays, incidence) tuple     treated as SymmetryReducedPairs

CONCURRENCY:
    Cones are independent. With max_workers > 1 or a cone_timeout the tests
    run in a multiprocessing pool; otherwise sequentially. Results are kept
    in cone order, since incidence rows are addressed by index.
    A cone's timeout counts from its own start; a cone that runs out of
    time does not hold up the cones queued behind it.

PARTIAL MODE:
    partial=True turns a timed-out cone, or a cone whose engine call failed,
    into an UNDECIDED cone (passed=None) instead of aborting the run.
    Undecided cones are neither inside nor outside.
"""

import collections
import logging
import math
import multiprocessing
import time
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from sympy import Rational

from core_algebra.operators import ideals_equal, initial
from core_algebra.polyhedral import Fan, SymmetryReducedPairs, primitive_vector
from core_algebra.spec import (
    ConeTimeoutError,
    Ideal,
    InconsistentDimensionError,
    MIN_VALUATION,
    PolyhedralEngineFailure,
    SymbolicEngineFailure,
    Valuation,
)

from .bounds import ideal_up_w, ideal_w, resolve_configuration
from .constants import (
    DEFAULT_CONE_TIMEOUT,
    DEFAULT_MAX_WORKERS,
    POOL_POLL_INTERVAL,
    TEST_OMEGA,
    TEST_OMEGA_STAR,
    TESTS,
)
from .lineality import lineality_space_V_rep, matrix_rows, positive_grading

logger = logging.getLogger(__name__)

EngineFailure = (SymbolicEngineFailure, PolyhedralEngineFailure)


# =============================================================================
# Configuration and results
# =============================================================================

@dataclass(frozen=True)
class FilterConfig:
    """
    Run-time settings of the fan filter.

    Fields:
        max_workers: worker processes (1 = sequential)
        cone_timeout: seconds per cone, None = unlimited
        partial: record failures/timeouts as undecided instead of raising
        valuation: convention of the initial ideals (explicit, never global)
    """

    max_workers: int = DEFAULT_MAX_WORKERS
    cone_timeout: Optional[float] = DEFAULT_CONE_TIMEOUT
    partial: bool = False
    valuation: Valuation = MIN_VALUATION

    def __post_init__(self):
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.cone_timeout is not None and self.cone_timeout <= 0:
            raise ValueError(f"cone_timeout must be positive, got {self.cone_timeout}")

    @property
    def uses_pool(self) -> bool:
        return self.max_workers > 1 or self.cone_timeout is not None


@dataclass(frozen=True)
class ConeTest:
    """Outcome of one cone: passed is True, False, or None (undecided)."""

    index: int
    weight: Tuple[int, ...]
    passed: Optional[bool]
    elapsed: float = 0.0
    error: Optional[str] = None


@dataclass(frozen=True)
class FilterResult:
    """All cone outcomes of one filtering run, in input cone order."""

    test: str
    tests: Tuple[ConeTest, ...]

    @property
    def inside(self) -> Tuple[int, ...]:
        return tuple(t.index for t in self.tests if t.passed is True)

    @property
    def outside(self) -> Tuple[int, ...]:
        return tuple(t.index for t in self.tests if t.passed is False)

    @property
    def undecided(self) -> Tuple[int, ...]:
        return tuple(t.index for t in self.tests if t.passed is None)

    @property
    def is_complete_run(self) -> bool:
        return not self.undecided


@dataclass(frozen=True, eq=False)
class NormalizedFan:
    """Canonical internal form of any secondary-fan input."""

    rays: Tuple[Tuple[Rational, ...], ...]
    incidence: np.ndarray
    lineality: Optional[Tuple[Tuple[Rational, ...], ...]]

    @property
    def n_cones(self) -> int:
        return self.incidence.shape[0]


SecondaryFan = Union[Fan, SymmetryReducedPairs, Tuple[Sequence, Sequence]]


def normalize_secondary_fan(sec: SecondaryFan) -> NormalizedFan:
    """Turn a Fan, a SymmetryReducedPairs or a (rays, incidence) pair into NormalizedFan."""
    if isinstance(sec, Fan):
        return NormalizedFan(sec.rays, sec.cones, sec.lineality)
    if isinstance(sec, SymmetryReducedPairs):
        return NormalizedFan(sec.rays, sec.cone_incidence, None)
    if isinstance(sec, (tuple, list)) and len(sec) == 2:
        return normalize_secondary_fan(SymmetryReducedPairs(*sec))
    raise TypeError(
        f"Secondary fan must be a Fan, SymmetryReducedPairs or (rays, incidence) pair, "
        f"got {type(sec).__name__}"
    )


# =============================================================================
# Per-weight tests
# =============================================================================

def representative_weights(rays, incidence: np.ndarray, n: int):
    """Primitive integer ray sum of every cone (zero vector for ray-less cones)."""
    weights = []
    for row in incidence:
        total = [Rational(0)] * n
        for j in np.flatnonzero(row):
            total = [a + b for a, b in zip(total, rays[j])]
        weights.append(primitive_vector(total))
    return weights


def omega_test(ideal: Ideal, w: Sequence[int], delta=None,
               valuation: Valuation = MIN_VALUATION, grading=None) -> bool:
    """Ω(I) membership of w:  in_w(I) == ideal_w(I, w, Δ)."""
    init = initial(ideal, w, valuation, grading)
    return ideals_equal(init, ideal_w(ideal, w, delta))


def omega_star_test(ideal: Ideal, w: Sequence[int], delta=None,
                    valuation: Valuation = MIN_VALUATION, grading=None) -> bool:
    """Ω*(I) membership of w:  in_{-w}(I) == ideal_up_w(I, w, Δ)."""
    init = initial(ideal, [-x for x in w], valuation, grading)
    return ideals_equal(init, ideal_up_w(ideal, w, delta))


_TEST_FUNCTIONS = {
    TEST_OMEGA: omega_test,
    TEST_OMEGA_STAR: omega_star_test,
}


def _run_cone(check, ideal: Ideal, delta, index: int, w, valuation, grading) -> ConeTest:
    """Worker entry point (module level so it pickles)."""
    start = time.perf_counter()
    passed = check(ideal, w, delta, valuation, grading)
    elapsed = time.perf_counter() - start
    logger.debug("cone %d  w=%s  %s=%s  (%.3fs)", index, w, check.__name__, passed, elapsed)
    return ConeTest(index=index, weight=tuple(w), passed=bool(passed), elapsed=elapsed)


def _undecided(index: int, w, reason: str) -> ConeTest:
    logger.warning("cone %d  w=%s  left undecided: %s", index, w, reason)
    return ConeTest(index=index, weight=tuple(w), passed=None, error=reason)


# =============================================================================
# Filtering loop
# =============================================================================

def _filter_sequential(check, ideal, delta, weights, config, grading):
    results = []
    for index, w in enumerate(weights):
        try:
            results.append(_run_cone(check, ideal, delta, index, w, config.valuation, grading))
        except EngineFailure as exc:
            if not config.partial:
                raise
            results.append(_undecided(index, w, str(exc)))
    return results


def _stop(pool):
    pool.terminate()
    pool.join()


def _filter_pool(check, ideal, delta, weights, config, grading):
    """
    At most max_workers cones in flight, so a cone starts when it is
    submitted and its deadline counts from there. A timed-out cone is
    recorded and the pool is replaced; cones that were running beside
    it go back to the queue.
    """
    results = {}
    queue = collections.deque(enumerate(weights))
    running = {}        # index -> (w, job, deadline)
    pool = None
    try:
        while queue or running:
            if pool is None:
                pool = multiprocessing.Pool(processes=config.max_workers)
            while queue and len(running) < config.max_workers:
                index, w = queue.popleft()
                job = pool.apply_async(_run_cone,
                                       (check, ideal, delta, index, w, config.valuation, grading))
                deadline = (time.monotonic() + config.cone_timeout
                            if config.cone_timeout is not None else math.inf)
                running[index] = (w, job, deadline)

            finished = [i for i, (_, job, _) in running.items() if job.ready()]
            for index in finished:
                w, job, _ = running.pop(index)
                try:
                    results[index] = job.get()
                except EngineFailure as exc:
                    if not config.partial:
                        raise
                    results[index] = _undecided(index, w, str(exc))
            if finished:
                continue

            now = time.monotonic()
            expired = [i for i, (_, _, deadline) in running.items() if deadline <= now]
            if not expired:
                first = min(running.values(), key=lambda item: item[2])
                first[1].wait(min(first[2] - now, POOL_POLL_INTERVAL))
                continue

            for index in expired:
                w, _, _ = running.pop(index)
                if not config.partial:
                    raise ConeTimeoutError(index, config.cone_timeout)
                results[index] = _undecided(index, w, f"timeout after {config.cone_timeout}s")
            # the expired workers cannot be reclaimed; requeue the rest
            queue.extendleft(sorted(((i, item[0]) for i, item in running.items()), reverse=True))
            running.clear()
            _stop(pool)
            pool = None
    finally:
        if pool is not None:
            _stop(pool)
    return [results[index] for index in range(len(weights))]


def filter_cones(ideal: Ideal, delta, sec: SecondaryFan, test: str = TEST_OMEGA,
                 config: Optional[FilterConfig] = None) -> FilterResult:
    """
    Run the Ω or Ω* test on every cone of a secondary fan.

    Args:
        ideal: I
        delta: point configuration Δ (None = point_configuration(I))
        sec: secondary fan (Fan, SymmetryReducedPairs or (rays, incidence))
        test: TEST_OMEGA or TEST_OMEGA_STAR
        config: FilterConfig (defaults: sequential, no timeout, strict)

    Returns:
        FilterResult with one ConeTest per cone, in cone order
    """
    if test not in TESTS:
        raise ValueError(f"Unknown test {test!r}, expected one of {TESTS}")
    config = config or FilterConfig()
    points = resolve_configuration(ideal, delta)
    fan = normalize_secondary_fan(sec)

    n = ideal.ngens
    bad = [len(r) for r in fan.rays if len(r) != n]
    if bad:
        raise InconsistentDimensionError(
            f"Rays of length {sorted(set(bad))} for a ring with {n} variables"
        )

    weights = representative_weights(fan.rays, fan.incidence, n)
    check = _TEST_FUNCTIONS[test]
    grading = positive_grading(ideal)

    logger.info("%s filter: %d cones, %d rays, %d variables, %s",
                test, fan.n_cones, len(fan.rays), n,
                f"{config.max_workers} workers" if config.uses_pool else "sequential")
    start = time.perf_counter()
    if config.uses_pool:
        results = _filter_pool(check, ideal, points, weights, config, grading)
    else:
        results = _filter_sequential(check, ideal, points, weights, config, grading)
    result = FilterResult(test=test, tests=tuple(results))

    logger.info("%s filter done in %.2fs: %d inside, %d outside, %d undecided",
                test, time.perf_counter() - start,
                len(result.inside), len(result.outside), len(result.undecided))
    return result


def _rows(incidence: np.ndarray, indices) -> np.ndarray:
    return incidence[np.asarray(indices, dtype=int), :]


def _assemble(ideal: Ideal, fan: NormalizedFan, result: FilterResult, outside: bool):
    if outside:
        return fan.rays, _rows(fan.incidence, result.outside)
    if fan.lineality is not None:
        lineality = fan.lineality
    else:
        lineality = matrix_rows(lineality_space_V_rep(ideal))
    return Fan(fan.rays, _rows(fan.incidence, result.inside), lineality,
               ambient_dim=ideal.ngens)


def omega_fan(ideal: Ideal, delta, sec: SecondaryFan, outside: bool = False,
              config: Optional[FilterConfig] = None):
    """
    Ω(I) as a subfan of the secondary fan.

    Returns:
        Fan of the passing cones, or (rays, failed incidence rows) if outside
    """
    result = filter_cones(ideal, delta, sec, TEST_OMEGA, config)
    return _assemble(ideal, normalize_secondary_fan(sec), result, outside)


def omega_star_fan(ideal: Ideal, delta, sec: SecondaryFan, outside: bool = False,
                   config: Optional[FilterConfig] = None):
    """
    Ω*(I) as a subfan of the secondary fan.

    Returns:
        Fan of the passing cones, or (rays, failed incidence rows) if outside
    """
    result = filter_cones(ideal, delta, sec, TEST_OMEGA_STAR, config)
    return _assemble(ideal, normalize_secondary_fan(sec), result, outside)
