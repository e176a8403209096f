"""Bond-graph summaries: connected components and adjacency listings."""

from typing import List, Tuple

import numpy
import scipy.sparse
import scipy.sparse.csgraph as csgraph

from .particles import ParticleSet


def bond_graph(particles: ParticleSet) -> scipy.sparse.csr_matrix:
    """Symmetric boolean adjacency matrix of the bond graph."""
    indexed_bonds = particles.indexed_bonds
    n = particles.n_particles
    indptr = numpy.zeros(n + 1, dtype=numpy.int64)
    indptr[1:] = indexed_bonds.bond_spans[:, 1]
    return scipy.sparse.csr_matrix(
        (
            numpy.ones(indexed_bonds.bonded.shape[0], dtype=bool),
            indexed_bonds.bonded,
            indptr,
        ),
        shape=(n, n),
    )


def connected_components(particles: ParticleSet) -> List[Tuple[int, int]]:
    """(lowest particle id, particle count) of each component, by lowest id."""
    if particles.n_particles == 0:
        return []

    _, labels = csgraph.connected_components(bond_graph(particles), directed=False)

    _, heads, sizes = numpy.unique(labels, return_index=True, return_counts=True)
    order = numpy.argsort(heads)
    return [(int(heads[k]), int(sizes[k])) for k in order]


def bond_listing(particles: ParticleSet) -> List[str]:
    """One ``"i: j k ..."`` line per particle listing its bonded partners."""
    return [
        " ".join([f"{i}:"] + [str(j) for j in particles.bonded_to(i)])
        for i in range(particles.n_particles)
    ]
