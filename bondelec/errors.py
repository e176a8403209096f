"""Error taxonomy for energy evaluation.

Callers distinguish bad input (fix the data) from internal failures (report
a bug) by exception class; both derive from :class:`BondElecError`.

Inputs are validated to be finite, so a non-finite energy can only come from
magnitudes overflowing double precision. That is reported as
:class:`InputDataError`, not :class:`ComputationError`.
"""


class BondElecError(Exception):
    """Base class for all bondelec failures."""


class InputDataError(BondElecError, ValueError):
    """Particle, bond or charge data is malformed or physically invalid.

    Includes coincident particles and charges or coordinates whose energy
    overflows.
    """


class ConfigurationError(BondElecError, ValueError):
    """A tunable parameter (max_link, energy_coeff, workers) is invalid."""


class ComputationError(BondElecError, RuntimeError):
    """Energy evaluation failed for a reason not attributable to input data."""
