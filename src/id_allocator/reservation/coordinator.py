from typing import Iterable, Mapping, Optional
import logging

from ..config import ReservationSettings, DEFAULT_RESERVATION
from ..errors import (
    RangeExhausted,
    ReservationCancelled,
    ReservationConflict,
    ReservationExhausted,
)
from ..helpers.null_handlers import id_text
from ..ids.allocators import CandidateGenerator, RangeAllocator
from ..ids.classes import IDClass, spec_for
from ..store.typing import UniquenessStoreProtocol
from .cancellation import CancellationToken
from .results import AttemptResult, Conflicted, Exhausted, Reserved, ReservationResult

logger = logging.getLogger(__name__)


class ReservationCoordinator:
    """
    Issues identifiers through optimistic, all-or-nothing reservations.

    Each attempt builds a fresh candidate batch and hands it to the store's
    transactional ``commit_all``. A conflict throws the whole batch away and
    starts over; after ``max_retries`` attempts the reservation is exhausted.

    The coordinator keeps no state between calls and takes no locks.
    Uniqueness across concurrent callers comes entirely from the store.
    """

    def __init__(
        self,
        store: UniquenessStoreProtocol,
        *,
        allocator: Optional[RangeAllocator] = None,
        settings: ReservationSettings = DEFAULT_RESERVATION,
    ):
        self.store = store
        self.allocator = allocator or RangeAllocator()
        self.settings = settings

    def _collect(
        self,
        id_class: IDClass,
        count: int,
        generator: CandidateGenerator,
        exclude: frozenset[str],
    ) -> list[str]:
        spec = spec_for(id_class)
        batch: dict[str, None] = {}
        budget = self.settings.draw_budget(count)
        draws = 0
        while len(batch) < count:
            if draws >= budget:
                raise RangeExhausted(
                    f"Only {len(batch)} of {count} distinct {id_class.value} candidates after {draws} draws",
                    attempts=draws,
                )
            draws += 1
            candidate = str(generator())
            if not spec.contains(candidate):
                raise ValueError(f"Generator produced invalid {id_class.value} value {candidate!r}")
            if candidate in exclude:
                continue
            batch[candidate] = None
        return list(batch)

    def attempt(
        self,
        id_class: IDClass,
        count: int,
        generator: CandidateGenerator,
        *,
        exclude: frozenset[str] = frozenset(),
        attempt_no: int = 1,
    ) -> AttemptResult:
        batch = self._collect(id_class, count, generator, exclude)
        try:
            self.store.commit_all(id_class, batch)
        except ReservationConflict as e:
            logger.warning(
                f"Attempt {attempt_no}: {id_class.value} batch of {count} conflicted "
                f"({len(e.collisions) or 'unknown'} collision(s)); discarding batch"
            )
            return Conflicted(id_class, tuple(batch), frozenset(e.collisions))
        return Reserved(id_class, tuple(batch), attempt_no)

    def reserve_outcome(
        self,
        id_class: IDClass,
        count: int,
        candidate_generator: Optional[CandidateGenerator] = None,
        *,
        exclude: Iterable[str] = (),
        cancel: Optional[CancellationToken] = None,
    ) -> ReservationResult:
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        if count == 0:
            return Reserved(id_class, (), 0)

        generator = candidate_generator or self.allocator.generator_for(id_class)
        excluded = frozenset(id_text(v) for v in exclude)

        for attempt_no in range(1, self.settings.max_retries + 1):
            if cancel is not None and cancel.is_cancelled:
                raise ReservationCancelled(id_class, attempt_no - 1)
            logger.debug(f"Reserving {count} {id_class.value} id(s), attempt {attempt_no}")
            result = self.attempt(
                id_class, count, generator, exclude=excluded, attempt_no=attempt_no
            )
            if isinstance(result, Reserved):
                logger.info(f"Reserved {count} {id_class.value} id(s) in {attempt_no} attempt(s)")
                return result

        logger.error(
            f"Reservation of {count} {id_class.value} id(s) exhausted after {self.settings.max_retries} attempts"
        )
        return Exhausted(id_class, count, self.settings.max_retries)

    def reserve(
        self,
        id_class: IDClass,
        count: int,
        candidate_generator: Optional[CandidateGenerator] = None,
        *,
        exclude: Iterable[str] = (),
        cancel: Optional[CancellationToken] = None,
    ) -> list[str]:
        result = self.reserve_outcome(
            id_class, count, candidate_generator, exclude=exclude, cancel=cancel
        )
        if isinstance(result, Exhausted):
            raise ReservationExhausted(result.id_class, result.count, result.attempts)
        return list(result.ids)

    def reserve_many(
        self,
        requests: Mapping[IDClass, int],
        *,
        generators: Optional[Mapping[IDClass, CandidateGenerator]] = None,
        exclude: Optional[Mapping[IDClass, Iterable[str]]] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> dict[IDClass, list[str]]:
        """
        Reserve batches for several classes in one all-or-nothing commit.

        Every class batch is collected first and then written through the
        store's ``commit_batches``, so a failure on any class leaves none
        of the others issued. A conflict on one class discards all batches.
        """
        for id_class, count in requests.items():
            if count < 0:
                raise ValueError(f"count for {id_class.value} must be non-negative, got {count}")
        requests = {c: n for c, n in requests.items() if n > 0}
        if not requests:
            return {}

        generators = generators or {}
        exclude = exclude or {}
        gens = {c: generators.get(c) or self.allocator.generator_for(c) for c in requests}
        excluded = {c: frozenset(id_text(v) for v in exclude.get(c, ())) for c in requests}
        classes = tuple(requests)
        total = sum(requests.values())

        for attempt_no in range(1, self.settings.max_retries + 1):
            if cancel is not None and cancel.is_cancelled:
                raise ReservationCancelled(classes, attempt_no - 1)
            batches = {
                c: self._collect(c, n, gens[c], excluded[c]) for c, n in requests.items()
            }
            try:
                self.store.commit_batches(batches)
            except ReservationConflict as e:
                logger.warning(
                    f"Attempt {attempt_no}: {e.id_class.value} batch conflicted "
                    f"({len(e.collisions) or 'unknown'} collision(s)); discarding all batches"
                )
                continue
            logger.info(f"Reserved {total} id(s) across {len(classes)} class(es) in {attempt_no} attempt(s)")
            return batches

        logger.error(f"Joint reservation of {total} id(s) exhausted after {self.settings.max_retries} attempts")
        raise ReservationExhausted(classes, total, self.settings.max_retries)
