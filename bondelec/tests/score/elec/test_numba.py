import math

import numpy
import pytest

from bondelec.score.bond_distance import BondDistanceTable
from bondelec.score.elec.numba.common import (
    dist,
    lookup_bond_distance,
    screening_weight,
)
from bondelec.score.elec.numba.elec import elec_partial_sums, screened_coulomb


@pytest.mark.parametrize(
    "bond_distance,expected", [(0, 1.0), (1, 0.0), (2, 0.0), (3, 0.5)]
)
def test_screening_weight(bond_distance, expected):
    assert screening_weight(bond_distance, 3) == expected


def test_screening_weight_other_radius():
    assert [screening_weight(d, 4) for d in range(5)] == [1.0, 0.0, 0.0, 0.0, 0.5]
    assert [screening_weight(d, 1) for d in range(2)] == [1.0, 0.5]


def test_dist():
    x = numpy.array([1.0, 2.0, 3.0])
    y = numpy.array([4.0, 6.0, 3.0])

    assert dist(x, y) == 5.0
    assert dist(y, x) == 5.0
    assert dist(x, x) == 0.0


def test_dist_extreme_magnitudes():
    # squared terms would overflow to inf or underflow to 0
    big = numpy.array([3e200, 4e200, 0.0])
    small = numpy.array([3e-200, 4e-200, 0.0])
    origin = numpy.zeros(3)

    assert dist(big, origin) == pytest.approx(5e200)
    assert dist(small, origin) == pytest.approx(5e-200)


def test_screened_coulomb():
    assert screened_coulomb(2.0, 2.0, 3.0, 0, 3) == 3.0
    assert screened_coulomb(2.0, 2.0, 3.0, 3, 3) == 1.5
    assert screened_coulomb(2.0, 2.0, 3.0, 1, 3) == 0.0
    assert screened_coulomb(2.0, 2.0, 3.0, 2, 3) == 0.0
    assert screened_coulomb(0.5, -1.0, 1.0, 0, 3) == -2.0


def test_lookup_bond_distance(ring_system):
    table = BondDistanceTable.from_particles(ring_system, 3)

    def lookup(a, b):
        return lookup_bond_distance(
            table.spans, table.targets, table.distances, a, b
        )

    for a in range(ring_system.n_particles):
        expected = table.for_particle(a)
        for b in range(ring_system.n_particles):
            assert lookup(a, b) == expected.get(b, 0)


def brute_force_partials(coords, charges, table, n_workers):
    partials = numpy.zeros(n_workers)
    n = coords.shape[0]
    for t in range(n_workers):
        for i in range(t + 1, n, n_workers):
            for j in range(i):
                d = math.dist(coords[j], coords[i])
                bd = table.for_particle(j).get(i, 0)
                w = 1.0 if bd == 0 else (0.0 if bd < table.max_link else 0.5)
                partials[t] += w * charges[j] * charges[i] / d
    return partials


@pytest.mark.parametrize("n_workers", [1, 2, 5, 16])
def test_partial_sums_match_strided_assignment(ring_system, n_workers):
    table = BondDistanceTable.from_particles(ring_system, 3)

    partials, faults = elec_partial_sums(
        ring_system.coords,
        ring_system.charges,
        table.spans,
        table.targets,
        table.distances,
        table.max_link,
        n_workers,
    )

    assert partials.shape == (n_workers,)
    assert (faults == -1).all()
    numpy.testing.assert_allclose(
        partials,
        brute_force_partials(ring_system.coords, ring_system.charges, table, n_workers),
        rtol=1e-12,
        atol=1e-15,
    )
    # workers past the last outer index have nothing to sum
    assert (partials[ring_system.n_particles - 1 :] == 0).all()


def test_partial_sums_record_coincident_pairs():
    coords = numpy.array(
        [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 0.0], [3.0, 0.0, 0.0]]
    )
    charges = numpy.ones(4)
    spans = numpy.zeros((4, 2), dtype=numpy.int64)
    empty = numpy.zeros(0, dtype=numpy.int64)

    partials, faults = elec_partial_sums(coords, charges, spans, empty, empty, 3, 2)

    # pair (0, 2) has outer index 2, handled by worker 1
    assert faults[0].tolist() == [-1, -1]
    assert faults[1].tolist() == [0, 2]
    assert numpy.isfinite(partials).all()
