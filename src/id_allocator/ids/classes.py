from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .checksum import CHECKSUM_ID_LENGTH, validate


class IDClass(Enum):
    TICKET = "ticket"
    FTR = "ftr"
    REGISTRATION = "registration"
    CHECKSUM_ID = "checksum_id"


@dataclass(frozen=True)
class IdClassSpec:
    """
    Validity rule for one ID class.

    Range classes are bounded by ``[min_value, max_value]``; the checksum
    class is a fixed-length digit string that must pass Verhoeff validation.
    These values are persisted alongside issued IDs, so changing them
    orphans anything issued under the old rule.
    """
    id_class: IDClass
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    digits: Optional[int] = None

    @property
    def is_checksum(self) -> bool:
        return self.digits is not None

    def contains(self, value: str) -> bool:
        value = str(value).strip()
        if not value.isdigit():
            return False
        if self.is_checksum:
            return len(value) == self.digits and value[0] != "0" and validate(value)
        assert self.min_value is not None and self.max_value is not None
        return self.min_value <= int(value) <= self.max_value


ID_CLASS_SPECS: dict[IDClass, IdClassSpec] = {
    IDClass.TICKET: IdClassSpec(IDClass.TICKET, 2_000_000_000, 2_999_999_999),
    IDClass.FTR: IdClassSpec(IDClass.FTR, 3_000_000_000, 3_999_999_999),
    IDClass.REGISTRATION: IdClassSpec(IDClass.REGISTRATION, 1_000_000_000, 1_999_999_999),
    IDClass.CHECKSUM_ID: IdClassSpec(IDClass.CHECKSUM_ID, digits=CHECKSUM_ID_LENGTH),
}


def spec_for(id_class: IDClass) -> IdClassSpec:
    return ID_CLASS_SPECS[id_class]
