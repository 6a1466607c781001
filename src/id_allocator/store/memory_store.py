import threading
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional

from ..errors import ReservationConflict
from ..ids.classes import IDClass
from .records import IssuedID


class InMemoryUniquenessStore:
    """
    Process-local uniqueness store.

    A single lock makes check-and-commit indivisible across threads. Values
    vanish with the process, so this is for tests and throwaway runs only.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._issued: dict[IDClass, dict[str, datetime]] = {}

    def exists_all(self, id_class: IDClass, candidates: Iterable[str]) -> set[str]:
        with self._lock:
            known = self._issued.get(id_class, {})
            return {c for c in candidates if c in known}

    def commit_all(self, id_class: IDClass, ids: Iterable[str]) -> None:
        self.commit_batches({id_class: ids})

    def commit_batches(self, batches: Mapping[IDClass, Iterable[str]]) -> None:
        batches = {c: list(dict.fromkeys(ids)) for c, ids in batches.items()}
        with self._lock:
            for id_class, ids in batches.items():
                known = self._issued.get(id_class, {})
                collisions = {v for v in ids if v in known}
                if collisions:
                    raise ReservationConflict(id_class, collisions)
            now = datetime.now(timezone.utc)
            for id_class, ids in batches.items():
                known = self._issued.setdefault(id_class, {})
                for value in ids:
                    known[value] = now

    def count(self, id_class: IDClass) -> int:
        with self._lock:
            return len(self._issued.get(id_class, {}))

    def issued(self, id_class: IDClass) -> set[str]:
        with self._lock:
            return set(self._issued.get(id_class, {}))

    def lookup(self, id_class: IDClass, value: str) -> Optional[IssuedID]:
        with self._lock:
            issued_at = self._issued.get(id_class, {}).get(value)
        if issued_at is None:
            return None
        return IssuedID(id_class=id_class, value=value, issued_at=issued_at)
