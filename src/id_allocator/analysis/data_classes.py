from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from ..ids.classes import IDClass


@dataclass(frozen=True)
class NamePool:
    """
    Name fragments seen in a dataset, surname-first convention:
    "<surname> <given names>".
    """
    given_names: tuple[str, ...] = ()
    surnames: tuple[str, ...] = ()


@dataclass(frozen=True)
class LocationPool:
    districts: tuple[str, ...] = ()
    mandals: tuple[str, ...] = ()


@dataclass(frozen=True)
class Context:
    """
    Read-only statistical snapshot of one dataset.

    Pools keep first-seen order so seeded sampling is reproducible.
    ``local_max_by_class`` is informational only and must never be used
    to pick new identifiers.
    """
    district_mode: Optional[str] = None
    mandal_mode: Optional[str] = None
    name_pool: NamePool = field(default_factory=NamePool)
    location_pool: LocationPool = field(default_factory=LocationPool)
    column_options: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    local_max_by_class: Mapping[IDClass, int] = field(default_factory=lambda: MappingProxyType({}))
    existing_ids: Mapping[IDClass, frozenset[str]] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        for name in ("column_options", "local_max_by_class", "existing_ids"):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    def existing_for(self, id_class: IDClass) -> frozenset[str]:
        return self.existing_ids.get(id_class, frozenset())


@dataclass
class MissingStats:
    """Blank-cell counts among valid rows, per tracked field."""
    ticket: int = 0
    ftr: int = 0
    registration: int = 0
    name: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "ticket": self.ticket,
            "ftr": self.ftr,
            "registration": self.registration,
            "name": self.name,
        }
