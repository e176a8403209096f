from bondelec.errors import (  # noqa: F401
    BondElecError,
    InputDataError,
    ConfigurationError,
    ComputationError,
)
from bondelec.system.particles import ParticleSet  # noqa: F401
from bondelec.system.io import read_particles, read_particle_files  # noqa: F401
from bondelec.score.bond_distance import (  # noqa: F401
    BondDistanceTable,
    bond_distances,
)
from bondelec.score.elec.score import (  # noqa: F401
    ElecScore,
    compute_total_energy,
    pair_energy,
)
