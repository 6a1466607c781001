from typing import Optional

NOTHING_ISSUED = "No identifiers were issued."


def _label(id_class) -> str:
    if isinstance(id_class, tuple):
        return "/".join(c.value for c in id_class)
    return id_class.value


class IdAllocatorError(Exception):
    """Base class for all id_allocator errors."""

    @property
    def user_message(self) -> str:
        return str(self)


class TerminalReservationError(IdAllocatorError):
    """
    A reservation failed as a whole. Nothing from the failed batch was
    committed, so callers must treat every value of it as unissued.
    """

    @property
    def user_message(self) -> str:
        return f"{self} {NOTHING_ISSUED}"


class RangeExhausted(TerminalReservationError):
    """A candidate source could not supply enough acceptable values within its attempt budget."""

    def __init__(self, message: str, *, attempts: int):
        self.attempts = attempts
        super().__init__(message)


class ChecksumInvalidInput(IdAllocatorError, ValueError):
    def __init__(self, value: str, expected_length: int):
        self.value = value
        self.expected_length = expected_length
        super().__init__(
            f"Expected a {expected_length}-digit string, got {value!r}"
        )


class ReservationConflict(IdAllocatorError):
    """
    Raised by a uniqueness store when a commit collides with values that
    are already issued. The coordinator retries on this; callers only see
    it when talking to a store directly.
    """

    def __init__(self, id_class, collisions: Optional[set[str]] = None):
        self.id_class = id_class
        self.collisions = set(collisions or ())
        shown = sorted(self.collisions)[:5]
        super().__init__(
            f"{len(self.collisions) or 'Some'} {id_class.value} value(s) already issued: {shown}"
        )


class StoreUnavailable(TerminalReservationError):
    def __init__(self, message: str = "Uniqueness store is unreachable"):
        super().__init__(message)


class ReservationExhausted(TerminalReservationError):
    def __init__(self, id_class, count: int, attempts: int):
        self.id_class = id_class
        self.count = count
        self.attempts = attempts
        super().__init__(
            f"Could not reserve {count} {_label(id_class)} value(s) after {attempts} attempt(s)."
        )


class ReservationCancelled(TerminalReservationError):
    def __init__(self, id_class, attempts: int):
        self.id_class = id_class
        self.attempts = attempts
        super().__init__(
            f"Reservation of {_label(id_class)} values cancelled after {attempts} attempt(s)."
        )


class MissingColumnsError(IdAllocatorError):
    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required columns: {', '.join(self.missing)}")

    @property
    def user_message(self) -> str:
        return f"CRITICAL ERROR: {self} {NOTHING_ISSUED}"
