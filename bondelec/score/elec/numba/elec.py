"""Screened Coulomb pair energy and the strided all-pairs reduction."""

import numba
import numpy
import toolz

from .common import dist, lookup_bond_distance, screening_weight

jit = toolz.curry(numba.jit)(nopython=True, nogil=True)
parallel_jit = toolz.curry(numba.jit)(nopython=True, nogil=True, parallel=True)


@jit
def screened_coulomb(dist, charge_a, charge_b, bond_distance, max_link):
    weight = screening_weight(bond_distance, max_link)
    if weight == 0.0:
        return 0.0
    return weight * (charge_a * charge_b / dist)


@jit
def elec_pair(coords, charges, spans, targets, distances, max_link, a, b):
    """Raw screened energy of pair (a, b), using a's bond-distance map."""
    return screened_coulomb(
        dist(coords[a], coords[b]),
        charges[a],
        charges[b],
        lookup_bond_distance(spans, targets, distances, a, b),
        max_link,
    )


@parallel_jit
def elec_partial_sums(coords, charges, spans, targets, distances, max_link, n_workers):
    """Per-worker raw energy sums over all pairs j < i.

    Worker t covers outer indices i = t + 1, t + 1 + n_workers, ... and sums
    pair (j, i) for every j < i with j as the source particle, so each
    unordered pair is visited by exactly one worker.

    Returns (partials, faults): partials[t] is worker t's sum; faults[t] is
    the first coincident pair (j, i) worker t met, or (-1, -1). Pairs at zero
    distance are skipped rather than raised on inside the parallel region.
    """
    n = coords.shape[0]
    partials = numpy.zeros(n_workers, dtype=numpy.float64)
    faults = numpy.full((n_workers, 2), -1, dtype=numpy.int64)

    for t in numba.prange(n_workers):
        energy = 0.0
        for i in range(t + 1, n, n_workers):
            for j in range(i):
                d = dist(coords[j], coords[i])
                if d == 0.0:
                    if faults[t, 0] < 0:
                        faults[t, 0] = j
                        faults[t, 1] = i
                    continue
                energy += screened_coulomb(
                    d,
                    charges[j],
                    charges[i],
                    lookup_bond_distance(spans, targets, distances, j, i),
                    max_link,
                )
        partials[t] = energy

    return partials, faults
