import random
import pytest
import sqlalchemy as sa

from id_allocator.config import REQUIRED_COLUMNS
from id_allocator.helpers.dataset import Dataset
from id_allocator.reservation import ReservationCoordinator
from id_allocator.ids import RangeAllocator
from id_allocator.store import InMemoryUniquenessStore, SqlUniquenessStore


@pytest.fixture
def engine(tmp_path):
    # file-backed so every pooled connection sees the same database
    engine = sa.create_engine(f"sqlite:///{tmp_path / 'issued.db'}", future=True)
    yield engine
    engine.dispose()

@pytest.fixture
def sql_store(engine):
    return SqlUniquenessStore(engine)

@pytest.fixture
def memory_store():
    return InMemoryUniquenessStore()

@pytest.fixture
def rng():
    return random.Random(1234)

@pytest.fixture
def coordinator(memory_store, rng):
    return ReservationCoordinator(memory_store, allocator=RangeAllocator(rng))


SMALL_HEADERS = ["District", "Mandal", "Benificiary Name", "Ticket Number", "FTR Number", "Stage Level"]

@pytest.fixture
def small_dataset():
    return Dataset.from_rows(
        SMALL_HEADERS,
        [
            ["Guntur", "Tenali", "Kommu Ravi Kumar", "2000000001", "3000000001", "Basement Level"],
            ["Guntur", "Ponnur", "Lakshmi", "2000000002", "3000000002", "Roof Level"],
        ],
    )

@pytest.fixture
def ledger_dataset():
    headers = ["S.No", *REQUIRED_COLUMNS, "Amount", "Bank Account Number", "IFSC Code"]

    def row(sno, district, mandal, name, imis, ticket, ftr, stage):
        values = {
            "S.No": sno,
            "District": district,
            "Mandal": mandal,
            "Grampanchayat": "Kolluru",
            "Benificiary Name": name,
            "IMIS Id": imis,
            "Beneficiary Category": "SC",
            "Beneficiary Type": "Individual",
            "Beneficiary Mobile Number": "9876543210",
            "Ration Card Number": "WAP000000000001",
            "Ticket Number": ticket,
            "Stage Level": stage,
            "FTR Status": "Pending",
            "FTR Number": ftr,
            "Amount": "",
            "Bank Account Number": "123456789",
            "IFSC Code": "SBIN0000001",
        }
        return [values[h] for h in headers]

    return Dataset.from_rows(
        headers,
        [
            row(7, "Guntur", "Tenali", "Kommu Ravi", "1000000001", "2000000001", "3000000001", "After Basement"),
            row(8, "", "", "", "", "", "", "Final Completion"),
            row(9, "Guntur", "Tenali", "Sita", "1000000002", "2000000002", "", "Roof Level"),
            row(10, "Krishna", "Ponnur", "Pilli Rama Devi", "", "2000000003", "3000000002", ""),
            [None] * len(headers),
        ],
    )
