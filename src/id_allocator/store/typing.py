from typing import Protocol, Iterable, Mapping, runtime_checkable

from ..ids.classes import IDClass


@runtime_checkable
class UniquenessStoreProtocol(Protocol):
    """
    Structural protocol for the shared issued-ID key space.

    Keys are ``(id_class, value)``. ``commit_all`` must check and write in
    one transaction: either every value is recorded as issued, or none is
    and ``ReservationConflict`` is raised. ``commit_batches`` extends the
    same guarantee across several classes at once.
    """

    def exists_all(self, id_class: IDClass, candidates: Iterable[str]) -> set[str]: ...

    def commit_all(self, id_class: IDClass, ids: Iterable[str]) -> None: ...

    def commit_batches(self, batches: Mapping[IDClass, Iterable[str]]) -> None: ...

    def count(self, id_class: IDClass) -> int: ...

    def issued(self, id_class: IDClass) -> set[str]: ...
