from .cancellation import CancellationToken
from .coordinator import ReservationCoordinator
from .results import Reserved, Conflicted, Exhausted, AttemptResult, ReservationResult

__all__ = [
    "CancellationToken",
    "ReservationCoordinator",
    "Reserved",
    "Conflicted",
    "Exhausted",
    "AttemptResult",
    "ReservationResult",
]
