from dataclasses import dataclass
from datetime import datetime

from ..ids.classes import IDClass


@dataclass(frozen=True)
class IssuedID:
    """A committed identifier. Owned by the store; never mutated in-process."""
    id_class: IDClass
    value: str
    issued_at: datetime
