import os
import attr

from .elec import ElecDatabase


@attr.s(auto_attribs=True, slots=True, frozen=True)
class ScoringDatabase:
    elec: ElecDatabase

    @classmethod
    def from_file(cls, path=os.path.dirname(__file__)):  # noqa
        return cls(elec=ElecDatabase.from_file(os.path.join(path, "elec.yaml")))
