from dataclasses import dataclass
from typing import Union

from ..ids.classes import IDClass


@dataclass(frozen=True)
class Reserved:
    id_class: IDClass
    ids: tuple[str, ...]
    attempts: int


@dataclass(frozen=True)
class Conflicted:
    """One attempt lost a race; the whole batch is discarded."""
    id_class: IDClass
    ids: tuple[str, ...]
    collisions: frozenset[str]


@dataclass(frozen=True)
class Exhausted:
    id_class: IDClass
    count: int
    attempts: int


AttemptResult = Union[Reserved, Conflicted]
ReservationResult = Union[Reserved, Exhausted]
