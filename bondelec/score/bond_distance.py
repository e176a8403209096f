"""Bond-graph distance classification.

For every particle, the particles reachable within ``max_link`` bonds and the
shortest bond count to each. Per-particle maps are packed into a single
read-only :class:`BondDistanceTable`, built once before any energy
evaluation and shared by all scoring workers.
"""

import logging
import numbers
from typing import Dict

import attr
import numba
import numpy
import toolz

from bondelec.errors import ConfigurationError, InputDataError
from bondelec.system.particles import ParticleSet, IndexedBonds
from bondelec.types.functional import validate_args
from bondelec.utility.log import log_elapsed

logger = logging.getLogger(__name__)

jit = toolz.curry(numba.jit)(nopython=True, nogil=True)


@jit
def bfs_bond_distances(bond_spans, bonded, source, max_depth, depth, order):
    """Level-synchronous BFS from source, limited to max_depth bonds.

    ``depth`` is a per-particle scratch buffer holding -1 on entry and is
    restored to -1 before returning; ``order`` is scratch of the same length.
    Returns (targets, distances) with targets ascending and source excluded.
    """
    depth[source] = 0
    order[0] = source

    # order[lo:hi] holds the current frontier, all at bond distance `level`
    lo = 0
    hi = 1
    level = 0
    while lo < hi and level < max_depth:
        level += 1
        end = hi
        for k in range(lo, hi):
            a = order[k]
            for b in bonded[bond_spans[a, 0] : bond_spans[a, 1]]:
                if depth[b] < 0:
                    depth[b] = level
                    order[end] = b
                    end += 1
        lo = hi
        hi = end

    targets = numpy.sort(order[1:hi])
    distances = numpy.empty(targets.shape[0], dtype=numpy.int64)
    for k in range(targets.shape[0]):
        distances[k] = depth[targets[k]]

    for k in range(hi):
        depth[order[k]] = -1

    return targets, distances


def _check_max_link(max_link):
    if int(max_link) != max_link or max_link < 1:
        raise ConfigurationError(f"max_link must be a positive integer: {max_link!r}")
    return int(max_link)


def _check_adjacency(indexed_bonds: IndexedBonds, n_particles: int):
    bonded = indexed_bonds.bonded
    if bonded.shape[0] and (bonded.min() < 0 or bonded.max() >= n_particles):
        raise InputDataError(
            f"bond adjacency references particles outside [0, {n_particles})"
        )
    spans = indexed_bonds.bond_spans
    if spans.shape != (n_particles, 2) or (
        n_particles and (spans.min() < 0 or spans.max() > bonded.shape[0])
    ):
        raise InputDataError("bond spans do not index the bond adjacency")


def _scratch(n_particles):
    return (
        numpy.full(n_particles, -1, dtype=numpy.int64),
        numpy.empty(n_particles, dtype=numpy.int64),
    )


@validate_args
def bond_distances(
    particles: ParticleSet, source: numbers.Integral, max_link: numbers.Integral
) -> dict:
    """Map every particle within max_link bonds of source to its bond distance.

    The source itself is never included; an isolated particle yields ``{}``.
    """
    max_link = _check_max_link(max_link)
    n = particles.n_particles
    if not 0 <= source < n:
        raise IndexError(f"particle {source} outside [0, {n})")
    source = int(source)
    _check_adjacency(particles.indexed_bonds, n)

    targets, distances = bfs_bond_distances(
        particles.indexed_bonds.bond_spans,
        particles.indexed_bonds.bonded,
        source,
        max_link,
        *_scratch(n),
    )
    return dict(zip(targets.tolist(), distances.tolist()))


@attr.s(auto_attribs=True, frozen=True, slots=True, eq=False)
class BondDistanceTable:
    """Bond-distance maps for all particles, in CSR layout.

    spans = [ nparticles x 2 ]
        with 2 = (first entry, last entry + 1) of the particle's map
    targets = [ nentries ]
        other particle id, ascending within each span
    distances = [ nentries ]
        shortest bond count to target, in [1, max_link]
    """

    spans: numpy.ndarray
    targets: numpy.ndarray
    distances: numpy.ndarray
    max_link: int

    @classmethod
    def from_particles(cls, particles: ParticleSet, max_link: int):
        max_link = _check_max_link(max_link)
        n = particles.n_particles
        indexed_bonds = particles.indexed_bonds
        _check_adjacency(indexed_bonds, n)

        depth, order = _scratch(n)
        spans = numpy.zeros((n, 2), dtype=numpy.int64)
        all_targets = []
        all_distances = []
        offset = 0

        with log_elapsed(logger, "bond distance classification"):
            for source in range(n):
                targets, distances = bfs_bond_distances(
                    indexed_bonds.bond_spans,
                    indexed_bonds.bonded,
                    source,
                    max_link,
                    depth,
                    order,
                )
                spans[source, 0] = offset
                offset += targets.shape[0]
                spans[source, 1] = offset
                all_targets.append(targets)
                all_distances.append(distances)

        def packed(parts):
            if parts:
                array = numpy.concatenate(parts)
            else:
                array = numpy.empty(0, dtype=numpy.int64)
            array.flags.writeable = False
            return array

        spans.flags.writeable = False
        table = cls(
            spans=spans,
            targets=packed(all_targets),
            distances=packed(all_distances),
            max_link=max_link,
        )
        logger.debug(
            "classified %d particles, %d entries within %d bonds",
            n,
            offset,
            max_link,
        )
        return table

    @property
    def n_particles(self) -> int:
        return self.spans.shape[0]

    def for_particle(self, i: int) -> Dict[int, int]:
        """The bond-distance map of particle i as {other id: bond count}."""
        if not 0 <= i < self.n_particles:
            raise IndexError(f"particle {i} outside [0, {self.n_particles})")
        start, end = self.spans[i]
        return dict(
            zip(self.targets[start:end].tolist(), self.distances[start:end].tolist())
        )

    def distance(self, a: int, b: int) -> int:
        """Bond distance from a to b, or 0 when b is not within max_link of a."""
        return self.for_particle(a).get(b, 0)
