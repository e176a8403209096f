import attr
import cattr
import yaml

from typing import Optional


@attr.s(auto_attribs=True, frozen=True, slots=True)
class GlobalParams:
    # bond-distance screening radius; pairs closer than this are excluded and
    # pairs exactly this far apart are halved
    max_link: int
    # converts charge * charge / distance into reported energy units
    energy_coeff: float
    # worker units for the all-pairs reduction, None for hardware concurrency
    workers: Optional[int] = None


@attr.s(auto_attribs=True, frozen=True, slots=True)
class ElecDatabase:
    global_parameters: GlobalParams

    @classmethod
    def from_file(cls, path):
        with open(path, "r") as infile:
            raw = yaml.safe_load(infile)
        return cattr.structure(raw, cls)
