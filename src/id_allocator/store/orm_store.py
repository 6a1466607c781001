from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional
import logging

import sqlalchemy as sa
import sqlalchemy.orm as so

from ..errors import ReservationConflict, StoreUnavailable
from ..ids.classes import IDClass
from .records import IssuedID

logger = logging.getLogger(__name__)

# stays under the 999 bound-parameter limit of older SQLite builds
EXISTS_CHUNK_SIZE = 900


class Base(so.DeclarativeBase):
    pass


class IssuedIdRecord(Base):
    __tablename__ = "issued_ids"

    id_class: so.Mapped[str] = so.mapped_column(sa.String(32), primary_key=True)
    value: so.Mapped[str] = so.mapped_column(sa.String(32), primary_key=True)
    issued_at: so.Mapped[datetime] = so.mapped_column(sa.DateTime(timezone=True), nullable=False)

    def to_issued(self) -> IssuedID:
        return IssuedID(
            id_class=IDClass(self.id_class),
            value=self.value,
            issued_at=self.issued_at,
        )


def create_schema(engine: sa.Engine) -> None:
    Base.metadata.create_all(engine)


class SqlUniquenessStore:
    """
    Uniqueness store over any SQLAlchemy-supported database.

    Each ``commit_all`` or ``commit_batches`` call runs in its own
    transaction: an existence check followed by a multi-row insert. The composite primary key on
    ``(id_class, value)`` closes the window between the two, so a racing
    writer that slipped in after the check surfaces as an IntegrityError
    and the whole transaction rolls back.
    """

    def __init__(self, engine: sa.Engine, *, create: bool = True):
        self.engine = engine
        self._sessionmaker = so.sessionmaker(bind=engine, future=True)
        if create:
            self._guard(lambda: create_schema(engine), "creating schema")

    def _guard(self, fn, action: str):
        try:
            return fn()
        except (sa.exc.OperationalError, sa.exc.InterfaceError) as e:
            logger.error(f"Uniqueness store unavailable while {action}: {e}")
            raise StoreUnavailable(f"Uniqueness store unavailable while {action}") from e

    @staticmethod
    def _existing(session: so.Session, id_class: IDClass, candidates: list[str]) -> set[str]:
        found: set[str] = set()
        for i in range(0, len(candidates), EXISTS_CHUNK_SIZE):
            chunk = candidates[i : i + EXISTS_CHUNK_SIZE]
            rows = session.execute(
                sa.select(IssuedIdRecord.value)
                .where(IssuedIdRecord.id_class == id_class.value)
                .where(IssuedIdRecord.value.in_(chunk))
            ).scalars()
            found.update(rows)
        return found

    def exists_all(self, id_class: IDClass, candidates: Iterable[str]) -> set[str]:
        candidates = list(dict.fromkeys(candidates))
        if not candidates:
            return set()

        def _run():
            with self._sessionmaker() as session:
                return self._existing(session, id_class, candidates)

        return self._guard(_run, "checking existing ids")

    def commit_all(self, id_class: IDClass, ids: Iterable[str]) -> None:
        self.commit_batches({id_class: ids})

    def commit_batches(self, batches: Mapping[IDClass, Iterable[str]]) -> None:
        batches = {c: list(dict.fromkeys(ids)) for c, ids in batches.items()}
        batches = {c: ids for c, ids in batches.items() if ids}
        if not batches:
            return

        def _run():
            with self._sessionmaker.begin() as session:
                for id_class, ids in batches.items():
                    collisions = self._existing(session, id_class, ids)
                    if collisions:
                        raise ReservationConflict(id_class, collisions)
                now = datetime.now(timezone.utc)
                session.execute(
                    IssuedIdRecord.__table__.insert(),
                    [
                        {"id_class": id_class.value, "value": v, "issued_at": now}
                        for id_class, ids in batches.items()
                        for v in ids
                    ],
                )

        labels = ", ".join(c.value for c in batches)
        try:
            self._guard(_run, "committing ids")
        except sa.exc.IntegrityError as e:
            logger.warning(f"Concurrent commit collided on {labels} ids; rolled back")
            raise ReservationConflict(next(iter(batches))) from e
        logger.debug(f"Committed {sum(len(ids) for ids in batches.values())} id(s) across {labels}")

    def count(self, id_class: IDClass) -> int:
        def _run():
            with self._sessionmaker() as session:
                return session.execute(
                    sa.select(sa.func.count())
                    .select_from(IssuedIdRecord)
                    .where(IssuedIdRecord.id_class == id_class.value)
                ).scalar_one()

        return self._guard(_run, "counting ids")

    def issued(self, id_class: IDClass) -> set[str]:
        def _run():
            with self._sessionmaker() as session:
                return set(
                    session.execute(
                        sa.select(IssuedIdRecord.value)
                        .where(IssuedIdRecord.id_class == id_class.value)
                    ).scalars()
                )

        return self._guard(_run, "reading issued ids")

    def lookup(self, id_class: IDClass, value: str) -> Optional[IssuedID]:
        def _run():
            with self._sessionmaker() as session:
                record = session.get(IssuedIdRecord, (id_class.value, value))
                return record.to_issued() if record is not None else None

        return self._guard(_run, "looking up id")


def store_from_url(url: str, **engine_kwargs) -> SqlUniquenessStore:
    return SqlUniquenessStore(sa.create_engine(url, future=True, **engine_kwargs))
