"""
Polyhedral Fans and Cone Incidence
==================================

Pure combinatorics + exact linear algebra - NO floating point.

DEFINITIONS:
    rays      r_0, ..., r_{m-1} in QQ^n (modulo the lineality space)
    cones     C[c, j] = True  iff ray j belongs to cone c      shape: (cones, rays)
    lineality L = row span shared by every cone

    cone c  =  cone(r_j : C[c, j]) + L
    dim c   =  rank(rays of c ∪ L)

A cone row with no rays is the lineality space itself.

COMPLETENESS (pure fans):
    A fan is complete iff
        1. every inclusion-maximal cone has dimension n, and
        2. every facet of a maximal cone is a facet of EXACTLY two maximal cones.
    A fan whose only cone is L is complete iff dim L = n.

Incidence matrices are numpy boolean arrays and are never mutated: every
operation that selects cones returns a NEW Fan.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from itertools import combinations
from typing import FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

import numpy as np
from sympy import Matrix, Rational, eye

from ..spec.errors import InconsistentDimensionError, PolyhedralEngineFailure

Vector = Tuple[Rational, ...]


def as_rational_vector(v: Sequence) -> Vector:
    return tuple(Rational(x) for x in v)


def primitive_vector(v: Sequence) -> Tuple[int, ...]:
    """
    Primitive integer vector on the ray through v.

    Clears denominators (lcm) and divides by the gcd of the entries.
    The zero vector is returned unchanged.
    """
    vec = as_rational_vector(v)
    scale = math.lcm(*[int(x.q) for x in vec]) if vec else 1
    ints = [int(x * scale) for x in vec]
    g = math.gcd(*ints) if ints else 0
    if g == 0:
        return tuple(ints)
    return tuple(x // g for x in ints)


def _matrix(rows: Sequence[Sequence], ncols: int) -> Matrix:
    if not rows:
        return Matrix.zeros(0, ncols)
    return Matrix([list(r) for r in rows])


def rank(rows: Sequence[Sequence], ncols: int) -> int:
    if not rows:
        return 0
    return _matrix(rows, ncols).rank()


def _dot(a, b):
    return sum(x * y for x, y in zip(a, b))


def incidence_matrix(index_lists: Iterable[Iterable[int]],
                     n_rays: Optional[int] = None) -> np.ndarray:
    """
    Boolean (cones × rays) incidence matrix from per-cone ray index lists.

    The width is max(n_rays, largest index + 1).
    """
    lists = [sorted(set(int(j) for j in idx)) for idx in index_lists]
    if any(j < 0 for idx in lists for j in idx):
        raise InconsistentDimensionError("Ray indices must be nonnegative")
    width = max([j + 1 for idx in lists for j in idx] + [n_rays or 0])
    M = np.zeros((len(lists), width), dtype=bool)
    for c, idx in enumerate(lists):
        M[c, idx] = True
    return M


@dataclass(frozen=True, eq=False)
class Fan:
    """
    Polyhedral fan as (rays, cone incidence, lineality).

    Args:
        rays: m ray vectors of length n
        cones: (cones × m) boolean incidence matrix
        lineality: rows spanning the lineality space (may be empty)
        ambient_dim: n; inferred from rays or lineality when omitted
    """

    rays: Tuple[Vector, ...]
    cones: np.ndarray
    lineality: Tuple[Vector, ...] = ()
    ambient_dim: Optional[int] = None
    _facet_cache: dict = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self):
        rays = tuple(as_rational_vector(r) for r in self.rays)
        lineality = tuple(as_rational_vector(r) for r in self.lineality)
        lengths = {len(v) for v in rays + lineality}
        if self.ambient_dim is not None:
            lengths.add(int(self.ambient_dim))
        if len(lengths) > 1:
            raise InconsistentDimensionError(
                f"Rays, lineality and ambient dimension disagree: lengths {sorted(lengths)}"
            )
        if not lengths:
            raise PolyhedralEngineFailure("Cannot infer the ambient dimension of an empty fan")

        cones = np.array(self.cones, dtype=bool)
        if cones.size == 0:
            cones = cones.reshape(len(cones), len(rays))
        if cones.ndim != 2 or cones.shape[1] != len(rays):
            raise InconsistentDimensionError(
                f"Incidence matrix of shape {cones.shape} does not match {len(rays)} rays"
            )
        cones.setflags(write=False)

        object.__setattr__(self, "rays", rays)
        object.__setattr__(self, "lineality", lineality)
        object.__setattr__(self, "cones", cones)
        object.__setattr__(self, "ambient_dim", lengths.pop())

    # -----------------------------------------------------------------
    # Basic queries
    # -----------------------------------------------------------------

    @property
    def n_cones(self) -> int:
        return self.cones.shape[0]

    @property
    def n_rays(self) -> int:
        return len(self.rays)

    @property
    def lineality_dim(self) -> int:
        return rank(self.lineality, self.ambient_dim)

    def rays_of(self, c: int) -> Tuple[int, ...]:
        return tuple(int(j) for j in np.flatnonzero(self.cones[c]))

    def cone_dim(self, c: int) -> int:
        rows = list(self.lineality) + [self.rays[j] for j in self.rays_of(c)]
        return rank(rows, self.ambient_dim)

    @property
    def dim(self) -> int:
        if self.n_cones == 0:
            return -1
        return max(self.cone_dim(c) for c in range(self.n_cones))

    def index_lists(self) -> List[Tuple[int, ...]]:
        return [self.rays_of(c) for c in range(self.n_cones)]

    def maximal_cones(self) -> List[int]:
        """Indices of cones not strictly contained in another cone."""
        sets = [frozenset(self.rays_of(c)) for c in range(self.n_cones)]
        return [c for c, s in enumerate(sets)
                if not any(s < other for other in sets)]

    def restrict(self, indices: Iterable[int]) -> "Fan":
        """New fan made of the selected cones (in the given order)."""
        idx = np.asarray([int(i) for i in indices], dtype=int)
        return Fan(self.rays, self.cones[idx, :], self.lineality, self.ambient_dim)

    # -----------------------------------------------------------------
    # Facets and completeness
    # -----------------------------------------------------------------

    def facets(self, c: int) -> Set[FrozenSet[int]]:
        """
        Ray sets of the facets of cone c.

        A facet is spanned (with L) by dim(c) - 1 - dim(L) independent rays
        of c; its normal vanishes on L and on those rays and has constant
        sign on the remaining rays of c.
        """
        if c in self._facet_cache:
            return self._facet_cache[c]
        n = self.ambient_dim
        rays = self.rays_of(c)
        k = self.cone_dim(c)
        need = k - 1 - self.lineality_dim
        found = set()
        if need >= 0:
            for F in combinations(rays, need):
                rows = list(self.lineality) + [self.rays[j] for j in F]
                M = _matrix(rows, n)
                if rank(rows, n) != k - 1:
                    continue
                normals = M.nullspace() if M.rows else [eye(n)[:, i] for i in range(n)]
                normal = next((a for a in normals
                               if any(_dot(a, self.rays[j]) != 0 for j in rays)), None)
                if normal is None:
                    continue
                values = [_dot(normal, self.rays[j]) for j in rays]
                if all(v >= 0 for v in values) or all(v <= 0 for v in values):
                    found.add(frozenset(j for j, v in zip(rays, values) if v == 0))
        self._facet_cache[c] = found
        return found

    def is_complete(self) -> bool:
        """True iff the cones cover the whole ambient space."""
        n = self.ambient_dim
        if self.n_cones == 0:
            return False
        maximal = self.maximal_cones()
        if any(self.cone_dim(c) != n for c in maximal):
            return False
        if self.lineality_dim == n:
            return True
        shared = Counter()
        for c in maximal:
            for F in self.facets(c):
                shared[F] += 1
        return bool(shared) and all(count == 2 for count in shared.values())

    def __repr__(self):
        return (f"Fan(ambient_dim={self.ambient_dim}, rays={self.n_rays}, "
                f"cones={self.n_cones}, lineality_dim={self.lineality_dim})")


# The expanded form of a secondary fan is just a Fan
ExpandedFan = Fan


@dataclass(frozen=True, eq=False)
class SymmetryReducedPairs:
    """
    Secondary fan given only as (rays, cone incidence), typically one cone per
    symmetry orbit. Carries no lineality space.
    """

    rays: Tuple[Vector, ...]
    cone_incidence: np.ndarray

    def __post_init__(self):
        rays = tuple(as_rational_vector(r) for r in self.rays)
        if len({len(r) for r in rays}) > 1:
            raise InconsistentDimensionError("Rays must share one ambient dimension")
        cones = np.array(self.cone_incidence, dtype=bool)
        if cones.size == 0:
            cones = cones.reshape(len(cones), len(rays))
        if cones.ndim != 2 or cones.shape[1] != len(rays):
            raise InconsistentDimensionError(
                f"Incidence matrix of shape {cones.shape} does not match {len(rays)} rays"
            )
        cones.setflags(write=False)
        object.__setattr__(self, "rays", rays)
        object.__setattr__(self, "cone_incidence", cones)

    @property
    def n_cones(self) -> int:
        return self.cone_incidence.shape[0]

    def index_lists(self) -> List[Tuple[int, ...]]:
        return [tuple(int(j) for j in np.flatnonzero(row)) for row in self.cone_incidence]


def polyhedral_fan(cones, rays: Sequence[Sequence], lineality: Sequence[Sequence] = (),
                   ambient_dim: Optional[int] = None) -> Fan:
    """
    Fan from cones (incidence matrix or per-cone ray index lists), rays and
    a lineality space.
    """
    rays = [as_rational_vector(r) for r in rays]
    if isinstance(cones, np.ndarray):
        incidence = cones
    else:
        incidence = incidence_matrix(cones, len(rays))
    return Fan(tuple(rays), incidence, tuple(lineality), ambient_dim)
