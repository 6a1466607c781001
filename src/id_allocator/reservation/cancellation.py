import threading
import logging

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    Thread-safe flag a caller sets to abandon a reservation.

    The coordinator checks it between attempts only; a transaction already
    in flight always runs to completion.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        if not self._event.is_set():
            logger.info("Cancellation requested")
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()
