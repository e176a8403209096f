"""Immutable particle store: coordinates, charges and the bond graph."""

from typing import Sequence, Tuple

import attr
import numpy

from bondelec.errors import InputDataError
from bondelec.types.array import NDArray
from bondelec.types.attrs import ConvertAttrs

Coords = NDArray(numpy.float64, (None, 3))
Charges = NDArray(numpy.float64, (None,))
BondPairs = NDArray(numpy.int64, (None, 2))


def _published(array: numpy.ndarray) -> numpy.ndarray:
    """Private read-only copy, safe to share between worker threads."""
    array = numpy.array(array, copy=True)
    array.flags.writeable = False
    return array


@attr.s(auto_attribs=True, frozen=True, slots=True, eq=False)
class IndexedBonds:
    # bonded = [ 2 * nbonds ]
    #   target particle of every directed bond, grouped by source particle and
    #   sorted by target within each group
    # bond_spans = [ nparticles x 2 ]
    #   with 2 = (first directed bond index, last directed bond index + 1)
    bonded: numpy.ndarray
    bond_spans: numpy.ndarray

    @classmethod
    def from_bonds(cls, src_bonds, n_particles: int) -> "IndexedBonds":
        # Convert undirected (i, j) bond tuples into sorted, indexed adjacency.
        directed = cls.to_directed(src_bonds)
        if directed.shape[0]:
            directed = numpy.unique(directed, axis=0)

        # bond spans: the starting and stopping index for every particle's
        # bonds, from the cumulative sum of per-particle bond counts.
        counts = numpy.bincount(directed[:, 0], minlength=n_particles)
        ends = numpy.cumsum(counts)

        bond_spans = numpy.empty((n_particles, 2), dtype=numpy.int64)
        bond_spans[:, 0] = ends - counts
        bond_spans[:, 1] = ends

        return cls(
            bonded=_published(directed[:, 1].astype(numpy.int64)),
            bond_spans=_published(bond_spans),
        )

    @classmethod
    def to_directed(cls, src_bonds):
        """Convert an undirected bond table into directed bonds.

        Eg. Converts
        [[0, 1], [0, 2]]
        into
        [[0, 1], [0, 2], [1, 0], [2, 0]]
        """
        src_bonds = numpy.asarray(src_bonds, dtype=numpy.int64).reshape((-1, 2))
        return numpy.concatenate((src_bonds, src_bonds[:, ::-1]), axis=0)

    def bonded_to(self, i: int) -> numpy.ndarray:
        start, end = self.bond_spans[i]
        return self.bonded[start:end]


@attr.s(auto_attribs=True, frozen=True, slots=True)
class Particle:
    """Read-only view of one particle."""

    id: int
    position: Tuple[float, float, float]
    charge: float
    bonded: Tuple[int, ...]


@attr.s(auto_attribs=True, frozen=True, slots=True, eq=False)
class ParticleSet(ConvertAttrs):
    """Positions, charges and undirected bonds of particles ``0..N-1``.

    Inputs are converted to float64/int64 arrays and stored as private
    read-only copies. Construction fails with :class:`InputDataError` when
    the arrays disagree in length, hold non-finite values, or contain bonds
    that leave ``[0, N)`` or join a particle to itself.
    """

    coords: Coords
    charges: Charges
    bonds: BondPairs = attr.Factory(lambda: BondPairs.convert([]))

    indexed_bonds: IndexedBonds = attr.ib(init=False, repr=False)

    def __attrs_post_init__(self):
        try:
            super().__attrs_post_init__()
        except TypeError as err:
            raise InputDataError(str(err)) from err

        n = self.coords.shape[0]
        if self.charges.shape[0] != n:
            raise InputDataError(
                f"charge count {self.charges.shape[0]} does not match "
                f"particle count {n}"
            )
        if not numpy.isfinite(self.coords).all():
            raise InputDataError("non-finite particle coordinates")
        if not numpy.isfinite(self.charges).all():
            raise InputDataError("non-finite particle charges")

        if self.bonds.shape[0]:
            out_of_range = (self.bonds < 0) | (self.bonds >= n)
            if out_of_range.any():
                bad = self.bonds[numpy.nonzero(out_of_range.any(axis=1))[0][0]]
                raise InputDataError(
                    f"bond {tuple(bad)} references a particle outside [0, {n})"
                )
            loops = self.bonds[:, 0] == self.bonds[:, 1]
            if loops.any():
                bad = self.bonds[numpy.nonzero(loops)[0][0]]
                raise InputDataError(f"particle {bad[0]} is bonded to itself")

        for name in ("coords", "charges", "bonds"):
            object.__setattr__(self, name, _published(getattr(self, name)))
        object.__setattr__(
            self, "indexed_bonds", IndexedBonds.from_bonds(self.bonds, n)
        )

    @classmethod
    def from_bond_lists(
        cls, coords, charges, bond_lists: Sequence[Sequence[int]]
    ) -> "ParticleSet":
        """Build from adjacency lists, bond_lists[i] holding particle i's partners."""
        if len(bond_lists) != len(coords):
            raise InputDataError(
                f"{len(bond_lists)} bond lists for {len(coords)} particles"
            )
        bonds = [(i, j) for i, partners in enumerate(bond_lists) for j in partners]
        return cls(coords=coords, charges=charges, bonds=bonds)

    @property
    def n_particles(self) -> int:
        return self.coords.shape[0]

    def __len__(self):
        return self.n_particles

    def bonded_to(self, i: int) -> numpy.ndarray:
        """Ids directly bonded to particle i, ascending."""
        return self.indexed_bonds.bonded_to(self._checked_index(i))

    def particle(self, i: int) -> Particle:
        i = self._checked_index(i)
        return Particle(
            id=i,
            position=tuple(float(x) for x in self.coords[i]),
            charge=float(self.charges[i]),
            bonded=tuple(int(j) for j in self.bonded_to(i)),
        )

    def _checked_index(self, i) -> int:
        i = int(i)
        if not 0 <= i < self.n_particles:
            raise IndexError(f"particle {i} outside [0, {self.n_particles})")
        return i
