"""Command line entry point: load particle files and report the energy."""

import argparse
import logging
import os
import sys

from bondelec.errors import ComputationError, ConfigurationError, InputDataError
from bondelec.score.elec.params import ElecParams
from bondelec.score.elec.score import ElecScore
from bondelec.system.io import (
    ATOMS_FILE,
    BONDS_FILE,
    CHARGES_FILE,
    read_particle_files,
)
from bondelec.system.report import bond_listing, connected_components

logger = logging.getLogger(__name__)

EXIT_BAD_INPUT = 2
EXIT_INTERNAL_ERROR = 3


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="bondelec",
        description="Total bond-screened Coulomb energy of a particle set.",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=os.curdir,
        help=f"directory holding {ATOMS_FILE}, {BONDS_FILE} and {CHARGES_FILE}",
    )
    parser.add_argument("--atoms", help=f"coordinate file, default {ATOMS_FILE}")
    parser.add_argument("--bonds", help=f"bond file, default {BONDS_FILE}")
    parser.add_argument("--charges", help=f"charge file, default {CHARGES_FILE}")
    parser.add_argument(
        "--max-link", type=int, help="bond-distance screening radius in bonds"
    )
    parser.add_argument("--energy-coeff", type=float, help="energy unit constant")
    parser.add_argument(
        "--workers", type=int, help="parallel worker units, default all threads"
    )
    parser.add_argument(
        "--components",
        action="store_true",
        help="print the size of each connected bond-graph component",
    )
    parser.add_argument(
        "--links", action="store_true", help="print each particle's bonded partners"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="increase log verbosity"
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(
        level=(logging.WARNING, logging.INFO, logging.DEBUG)[min(args.verbose, 2)],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    def path_for(option, default):
        return option if option else os.path.join(args.directory, default)

    try:
        particles = read_particle_files(
            path_for(args.atoms, ATOMS_FILE),
            path_for(args.bonds, BONDS_FILE),
            path_for(args.charges, CHARGES_FILE),
        )
        logger.info("loaded %d particles", particles.n_particles)

        if args.links:
            for line in bond_listing(particles):
                print(line)
        if args.components:
            for head, size in connected_components(particles):
                print(f"{head}: {size}")

        params = ElecParams.from_database(
            max_link=args.max_link,
            energy_coeff=args.energy_coeff,
            workers=args.workers,
        )
        energy = ElecScore(particles, params).total_energy()
    except (InputDataError, ConfigurationError) as err:
        logger.error("invalid input: %s", err)
        return EXIT_BAD_INPUT
    except ComputationError as err:
        logger.exception("energy evaluation failed: %s", err)
        return EXIT_INTERNAL_ERROR

    logger.info("energy with %d workers: %r", params.workers, energy)
    print(f"Result: {energy}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
