"""Total screened electrostatic energy of a particle set.

Evaluation runs in two phases. Construction of :class:`ElecScore` classifies
every particle's bonded neighborhood into a read-only
:class:`~bondelec.score.bond_distance.BondDistanceTable`; only then does
:meth:`ElecScore.total_energy` sum all unique pairs across a fixed set of
worker units and scale the combined raw sum by ``energy_coeff``.

Worker partial sums are combined in worker-index order, so repeated runs with
the same worker count give bit-identical results. Different worker counts
group the additions differently and may differ in the last few digits.
"""

import contextlib
import logging
import math
import numbers
from typing import Optional

import attr
import numba
import numpy

from bondelec.errors import BondElecError, ComputationError, InputDataError
from bondelec.system.particles import ParticleSet
from bondelec.types.functional import validate_args
from bondelec.utility.log import ClassLogger, log_elapsed

from ..bond_distance import BondDistanceTable
from .numba.common import dist
from .numba.elec import elec_pair, elec_partial_sums
from .params import ElecParams


def _check_pair(particles: ParticleSet, a: int, b: int):
    n = particles.n_particles
    for i in (a, b):
        if not 0 <= i < n:
            raise IndexError(f"particle {i} outside [0, {n})")
    if a == b:
        raise ValueError(f"pair energy requires two distinct particles, got {a}")
    if dist(particles.coords[a], particles.coords[b]) == 0.0:
        raise InputDataError(f"particles {a} and {b} have coincident coordinates")


@validate_args
def pair_energy(
    particles: ParticleSet,
    table: BondDistanceTable,
    a: numbers.Integral,
    b: numbers.Integral,
) -> float:
    """Raw screened Coulomb term of pair (a, b), using a's bond-distance map.

    Zero for pairs 1 to max_link - 1 bonds apart, half the Coulomb term at
    exactly max_link bonds, the full term otherwise. ``energy_coeff`` is not
    applied.
    """
    a, b = int(a), int(b)
    _check_pair(particles, a, b)
    return float(
        elec_pair(
            particles.coords,
            particles.charges,
            table.spans,
            table.targets,
            table.distances,
            table.max_link,
            a,
            b,
        )
    )


@attr.s(auto_attribs=True, frozen=True, slots=True)
class ElecScore:
    particles: ParticleSet = attr.ib(
        validator=attr.validators.instance_of(ParticleSet)
    )
    params: ElecParams = attr.Factory(ElecParams.from_database)

    bond_distance_table: BondDistanceTable = attr.ib(init=False, repr=False)
    logger: logging.Logger = ClassLogger

    def __attrs_post_init__(self):
        try:
            table = BondDistanceTable.from_particles(
                self.particles, self.params.max_link
            )
        except BondElecError:
            raise
        except Exception as err:
            raise ComputationError("bond distance classification failed") from err

        object.__setattr__(self, "bond_distance_table", table)

    def pair_energy(self, a: numbers.Integral, b: numbers.Integral) -> float:
        return pair_energy(self.particles, self.bond_distance_table, a, b)

    def partial_sums(self) -> numpy.ndarray:
        """Raw energy per worker unit, indexed by worker."""
        table = self.bond_distance_table
        n_workers = self.params.workers

        try:
            with _numba_threads(n_workers), log_elapsed(self.logger, "pair sum"):
                partials, faults = elec_partial_sums(
                    self.particles.coords,
                    self.particles.charges,
                    table.spans,
                    table.targets,
                    table.distances,
                    table.max_link,
                    n_workers,
                )
        except Exception as err:
            raise ComputationError("parallel pair summation failed") from err

        faulted = numpy.nonzero(faults[:, 0] >= 0)[0]
        if faulted.shape[0]:
            j, i = faults[faulted[0]]
            raise InputDataError(f"particles {j} and {i} have coincident coordinates")

        if not numpy.isfinite(partials).all():
            raise InputDataError(
                f"partial energy sums overflow, check charge magnitudes: {partials}"
            )

        self.logger.debug("partial sums over %d workers: %s", n_workers, partials)
        return partials

    def raw_energy(self) -> float:
        """Sum of screened pair terms before unit conversion."""
        total = 0.0
        for partial in self.partial_sums().tolist():
            total += partial
        return total

    def total_energy(self) -> float:
        energy = self.raw_energy() * self.params.energy_coeff
        if not math.isfinite(energy):
            raise InputDataError(
                f"total energy overflows, check charge magnitudes: {energy}"
            )
        return energy


@contextlib.contextmanager
def _numba_threads(n_workers):
    """Limit the numba thread pool to n_workers for the enclosed parallel region."""
    previous = numba.get_num_threads()
    numba.set_num_threads(max(1, min(n_workers, numba.config.NUMBA_NUM_THREADS)))
    try:
        yield
    finally:
        numba.set_num_threads(previous)


def compute_total_energy(
    particles: ParticleSet,
    max_link: Optional[int] = None,
    energy_coeff: Optional[float] = None,
    workers: Optional[int] = None,
    elec_database=None,
) -> float:
    """Screened Coulomb energy of all particle pairs, in energy_coeff units.

    Unset parameters come from ``elec_database``, by default the packaged
    parameter database.
    """
    params = ElecParams.from_database(
        elec_database, max_link=max_link, energy_coeff=energy_coeff, workers=workers
    )
    return ElecScore(particles, params).total_energy()
