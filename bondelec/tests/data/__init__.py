"""Small particle systems with hand-checked energies."""

import math

import numpy
import pytest

from bondelec.system.particles import ParticleSet

# Vertices of a unit-edge regular tetrahedron, every pair 1.0 apart.
unit_tetrahedron = numpy.array(
    [
        [0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0],
        [0.5, math.sqrt(3) / 2, 0.0],
        [0.5, math.sqrt(3) / 6, math.sqrt(6) / 3],
    ]
)


def random_system(n_particles, n_chains, n_extra_bonds, seed):
    """Chains of bonded particles plus random cross-links and free particles.

    Coordinates are drawn uniformly from a 20 Angstrom box, charges from
    [-1, 1]. Roughly a tenth of the particles are left without bonds.
    """
    rng = numpy.random.default_rng(seed)

    coords = rng.uniform(0.0, 20.0, size=(n_particles, 3))
    charges = rng.uniform(-1.0, 1.0, size=n_particles)

    bonded_ids = rng.permutation(n_particles)[: n_particles - n_particles // 10]
    chains = numpy.array_split(bonded_ids, n_chains)
    bonds = [(c[k], c[k + 1]) for c in chains for k in range(len(c) - 1)]

    for _ in range(n_extra_bonds):
        i, j = rng.choice(bonded_ids, size=2, replace=False)
        bonds.append((i, j))

    return ParticleSet(coords=coords, charges=charges, bonds=bonds)


@pytest.fixture
def three_path():
    """0-1-2 path, charges [1, -1, 1], all pairs 1.0 apart."""
    return ParticleSet(
        coords=unit_tetrahedron[:3],
        charges=[1.0, -1.0, 1.0],
        bonds=[(0, 1), (1, 2)],
    )


@pytest.fixture
def four_chain():
    """0-1-2-3 chain, unit charges, all pairs 1.0 apart."""
    return ParticleSet(
        coords=unit_tetrahedron,
        charges=[1.0, 1.0, 1.0, 1.0],
        bonds=[(0, 1), (1, 2), (2, 3)],
    )


@pytest.fixture
def disconnected_pair():
    """Two unbonded particles, charges 2 and 3, 2.0 apart."""
    return ParticleSet(
        coords=[[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]], charges=[2.0, 3.0]
    )


@pytest.fixture
def ring_system():
    """Six-membered ring 0..5 with a 6-7-8 tail on particle 0 and free particle 9."""
    angles = numpy.arange(6) * (2 * math.pi / 6)
    ring = numpy.stack(
        [1.4 * numpy.cos(angles), 1.4 * numpy.sin(angles), numpy.zeros(6)], axis=1
    )
    tail = numpy.array([[2.9, 0.0, 0.0], [4.4, 0.0, 0.0], [5.9, 0.0, 0.0]])
    free = numpy.array([[0.0, 0.0, 8.0]])

    return ParticleSet(
        coords=numpy.concatenate([ring, tail, free]),
        charges=[0.1, -0.2, 0.3, -0.4, 0.5, -0.6, 0.7, -0.8, 0.9, -1.0],
        bonds=[(k, (k + 1) % 6) for k in range(6)] + [(0, 6), (6, 7), (7, 8)],
    )


@pytest.fixture(scope="session")
def medium_system():
    return random_system(n_particles=150, n_chains=6, n_extra_bonds=12, seed=1389)


@pytest.fixture(scope="session")
def large_system():
    return random_system(n_particles=2000, n_chains=40, n_extra_bonds=100, seed=42)


def write_particle_files(directory, coords, bonds, charges):
    """Write atoms.txt, bonds.txt and charges.txt single-line files."""

    def line(values):
        return " ".join(str(v) for v in values) + "\n"

    (directory / "atoms.txt").write_text(line(numpy.ravel(coords)))
    (directory / "bonds.txt").write_text(line(numpy.ravel(bonds)))
    (directory / "charges.txt").write_text(line(charges))
    return directory
