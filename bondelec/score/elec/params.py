import math
import numbers
from typing import Optional

import attr
import cattr
import numba
import toolz

from bondelec.database import ParameterDatabase
from bondelec.database.scoring.elec import ElecDatabase
from bondelec.errors import ConfigurationError


def default_workers() -> int:
    """Hardware concurrency as seen by the numba threading layer."""
    return numba.config.NUMBA_NUM_THREADS


def _is_integer(value):
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@attr.s(auto_attribs=True, frozen=True, slots=True)
class ElecParams:
    """Resolved run parameters for the screened Coulomb sum."""

    max_link: int
    energy_coeff: float
    workers: int

    def __attrs_post_init__(self):
        if not _is_integer(self.max_link) or self.max_link < 1:
            raise ConfigurationError(
                f"max_link must be a positive integer: {self.max_link!r}"
            )
        if not isinstance(self.energy_coeff, numbers.Real) or not math.isfinite(
            self.energy_coeff
        ):
            raise ConfigurationError(
                f"energy_coeff must be a finite number: {self.energy_coeff!r}"
            )
        if not _is_integer(self.workers) or self.workers < 1:
            raise ConfigurationError(
                f"workers must be a positive integer: {self.workers!r}"
            )

    @classmethod
    def from_database(
        cls,
        elec_database: Optional[ElecDatabase] = None,
        max_link: Optional[int] = None,
        energy_coeff: Optional[float] = None,
        workers: Optional[int] = None,
    ) -> "ElecParams":
        """Database global parameters, overridden by any non-None argument."""
        if elec_database is None:
            elec_database = ParameterDatabase.get_default().scoring.elec

        values = cattr.unstructure(elec_database.global_parameters)
        values.update(
            toolz.valfilter(
                lambda v: v is not None,
                dict(max_link=max_link, energy_coeff=energy_coeff, workers=workers),
            )
        )
        if values["workers"] is None:
            values["workers"] = default_workers()

        return cls(**values)
