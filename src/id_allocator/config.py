from dataclasses import dataclass, field
from typing import Optional, Sequence

from .ids.classes import IDClass

"""
Configuration
=============

Frozen settings objects passed explicitly to the analyzer, synthesizer
and coordinator. Defaults reproduce the beneficiary-ledger layout that
the column names below come from (including its historical spellings).
"""

MAX_RETRIES = 5

REQUIRED_COLUMNS: tuple[str, ...] = (
    "District", "Mandal", "Grampanchayat", "Benificiary Name",
    "IMIS Id", "Beneficiary Category", "Beneficiary Type",
    "Beneficiary Mobile Number", "Ration Card Number", "Ticket Number",
    "Stage Level", "FTR Status", "FTR Number",
)


@dataclass(frozen=True)
class ReservationSettings:
    max_retries: int = MAX_RETRIES
    # draws allowed per requested value when collecting a candidate batch
    draws_per_value: int = 100
    min_draw_budget: int = 1_000

    def draw_budget(self, count: int) -> int:
        return max(self.min_draw_budget, count * self.draws_per_value)


@dataclass(frozen=True)
class SynthesisSettings:
    surname_probability: float = 0.7
    placeholder_name: str = "Beneficiary GivenName"
    phone_length: int = 10
    phone_leading_digits: str = "6789"
    secondary_id_prefix: str = "WAP"
    secondary_id_digits: int = 12


@dataclass(frozen=True)
class ColumnMapping:
    """
    Header aliases for each column role. The first alias present in a
    dataset's headers wins.
    """
    id_columns: dict[IDClass, tuple[str, ...]] = field(default_factory=lambda: {
        IDClass.TICKET: ("Ticket Number",),
        IDClass.FTR: ("FTR Number",),
        IDClass.REGISTRATION: ("IMIS Id", "Benificiary Registration Id"),
        IDClass.CHECKSUM_ID: ("Aadhar Number", "Aadhaar Number"),
    })
    name: tuple[str, ...] = ("Benificiary Name", "Beneficiary Name")
    district: tuple[str, ...] = ("District",)
    mandal: tuple[str, ...] = ("Mandal",)
    phone: tuple[str, ...] = ("Beneficiary Mobile Number", "Benificiary Mobile Number")
    secondary_id: tuple[str, ...] = ("Ration Card Number",)
    serial: tuple[str, ...] = ("sno", "slno", "serialno", "serialnumber")
    cleared: tuple[str, ...] = ("Bank Account Number", "Nank Account Number", "Bank Branch", "IFSC Code")
    stage: tuple[str, ...] = ("Stage Level",)
    amount: tuple[str, ...] = ("Amount",)

    @staticmethod
    def find(headers: Sequence[str], aliases: Sequence[str]) -> Optional[int]:
        stripped = [str(h).strip() if h is not None else "" for h in headers]
        for alias in aliases:
            if alias in stripped:
                return stripped.index(alias)
        return None

    def id_indices(self, headers: Sequence[str]) -> dict[IDClass, int]:
        found = {}
        for id_class, aliases in self.id_columns.items():
            idx = self.find(headers, aliases)
            if idx is not None:
                found[id_class] = idx
        return found

    def serial_index(self, headers: Sequence[str]) -> Optional[int]:
        for i, h in enumerate(headers):
            key = str(h or "").lower().replace(".", "").replace(" ", "")
            if key in self.serial:
                return i
        return None


DEFAULT_COLUMNS = ColumnMapping()
DEFAULT_RESERVATION = ReservationSettings()
DEFAULT_SYNTHESIS = SynthesisSettings()
