import pytest
import sqlalchemy as sa

from id_allocator.errors import ReservationConflict, StoreUnavailable
from id_allocator.ids import IDClass
from id_allocator.store import SqlUniquenessStore, UniquenessStoreProtocol, store_from_url
from id_allocator.store.orm_store import IssuedIdRecord


class RacyStore(SqlUniquenessStore):
    """Skips the pre-insert check, as if another writer committed right after it ran."""

    @staticmethod
    def _existing(session, id_class, candidates):
        return set()


def test_sql_store_conforms_to_protocol(sql_store):
    assert isinstance(sql_store, UniquenessStoreProtocol)

def test_commit_and_exists(sql_store):
    sql_store.commit_all(IDClass.TICKET, ["2000000001", "2000000002"])
    assert sql_store.exists_all(IDClass.TICKET, ["2000000002", "2000000009"]) == {"2000000002"}
    assert sql_store.exists_all(IDClass.FTR, ["2000000002"]) == set()
    assert sql_store.count(IDClass.TICKET) == 2
    assert sql_store.issued(IDClass.TICKET) == {"2000000001", "2000000002"}

def test_empty_inputs_are_noops(sql_store):
    sql_store.commit_all(IDClass.TICKET, [])
    assert sql_store.exists_all(IDClass.TICKET, []) == set()
    assert sql_store.count(IDClass.TICKET) == 0

def test_conflict_commits_nothing(sql_store):
    sql_store.commit_all(IDClass.TICKET, ["2000000001"])
    with pytest.raises(ReservationConflict) as err:
        sql_store.commit_all(IDClass.TICKET, ["2000000007", "2000000001", "2000000008"])
    assert err.value.collisions == {"2000000001"}
    assert sql_store.issued(IDClass.TICKET) == {"2000000001"}

def test_batches_across_classes_share_one_transaction(sql_store):
    sql_store.commit_all(IDClass.REGISTRATION, ["1000000001"])
    with pytest.raises(ReservationConflict):
        sql_store.commit_batches({
            IDClass.TICKET: ["2000000001", "2000000002"],
            IDClass.REGISTRATION: ["1000000001"],
        })
    assert sql_store.count(IDClass.TICKET) == 0

    sql_store.commit_batches({
        IDClass.TICKET: ["2000000001"],
        IDClass.REGISTRATION: ["1000000002"],
        IDClass.FTR: [],
    })
    assert sql_store.issued(IDClass.TICKET) == {"2000000001"}
    assert sql_store.count(IDClass.REGISTRATION) == 2

def test_late_collision_in_batches_rolls_back_every_class(engine):
    SqlUniquenessStore(engine).commit_all(IDClass.FTR, ["3000000001"])
    racy = RacyStore(engine)
    with pytest.raises(ReservationConflict):
        racy.commit_batches({IDClass.TICKET: ["2000000001"], IDClass.FTR: ["3000000001"]})
    assert racy.count(IDClass.TICKET) == 0

def test_primary_key_catches_late_collision(engine):
    SqlUniquenessStore(engine).commit_all(IDClass.TICKET, ["2000000001"])
    racy = RacyStore(engine)
    with pytest.raises(ReservationConflict):
        racy.commit_all(IDClass.TICKET, ["2000000004", "2000000001"])
    assert racy.issued(IDClass.TICKET) == {"2000000001"}

def test_large_batches_are_chunked(sql_store):
    values = [str(2_000_000_000 + i) for i in range(2_000)]
    sql_store.commit_all(IDClass.TICKET, values)
    assert len(sql_store.exists_all(IDClass.TICKET, values)) == 2_000

def test_records_keep_issue_time(sql_store, engine):
    sql_store.commit_all(IDClass.CHECKSUM_ID, ["234567890124"])
    record = sql_store.lookup(IDClass.CHECKSUM_ID, "234567890124")
    assert record is not None
    assert record.issued_at is not None
    with engine.connect() as conn:
        rows = conn.execute(sa.select(IssuedIdRecord.__table__)).all()
    assert len(rows) == 1

def test_unreachable_database_is_reported(tmp_path):
    missing_dir = tmp_path / "does" / "not" / "exist"
    with pytest.raises(StoreUnavailable) as err:
        store_from_url(f"sqlite:///{missing_dir / 'ids.db'}")
    assert "No identifiers were issued" in err.value.user_message
