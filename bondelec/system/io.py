"""Text-file particle loader.

A particle set is stored as three whitespace-separated number files:

``atoms.txt``
    ``x y z`` for each particle, in id order
``bonds.txt``
    pairs of bonded particle ids
``charges.txt``
    one charge per particle, in id order
"""

import logging
import os

import numpy

from bondelec.errors import InputDataError

from .particles import ParticleSet

logger = logging.getLogger(__name__)

ATOMS_FILE = "atoms.txt"
BONDS_FILE = "bonds.txt"
CHARGES_FILE = "charges.txt"


def _read_numbers(path, parse, dtype, what):
    try:
        with open(path, "r") as infile:
            tokens = infile.read().split()
    except OSError as err:
        raise InputDataError(f"unable to read {what} file {path!r}: {err}") from err

    values = numpy.empty(len(tokens), dtype=dtype)
    for i, token in enumerate(tokens):
        try:
            values[i] = parse(token)
        except ValueError as err:
            raise InputDataError(
                f"{path}: {what} entry {i} is not a valid number: {token!r}"
            ) from err

    return values


def read_particle_files(atoms_path, bonds_path, charges_path) -> ParticleSet:
    coords = _read_numbers(atoms_path, float, numpy.float64, "coordinate")
    if coords.shape[0] % 3:
        raise InputDataError(
            f"{atoms_path}: {coords.shape[0]} coordinates is not a multiple of 3"
        )
    coords = coords.reshape((-1, 3))

    bonds = _read_numbers(bonds_path, int, numpy.int64, "bond")
    if bonds.shape[0] % 2:
        raise InputDataError(
            f"{bonds_path}: {bonds.shape[0]} bond ids do not form id pairs"
        )
    bonds = bonds.reshape((-1, 2))

    charges = _read_numbers(charges_path, float, numpy.float64, "charge")
    if charges.shape[0] != coords.shape[0]:
        raise InputDataError(
            f"{charges_path}: {charges.shape[0]} charges for "
            f"{coords.shape[0]} particles"
        )

    logger.debug(
        "read %d particles and %d bonds", coords.shape[0], bonds.shape[0]
    )
    return ParticleSet(coords=coords, charges=charges, bonds=bonds)


def read_particles(directory) -> ParticleSet:
    """Load atoms.txt, bonds.txt and charges.txt from directory."""
    return read_particle_files(
        os.path.join(directory, ATOMS_FILE),
        os.path.join(directory, BONDS_FILE),
        os.path.join(directory, CHARGES_FILE),
    )
