import random
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence
import logging

from ..analysis.report import VerificationReport
from ..analysis.verification import verify_dataset
from ..config import (
    ColumnMapping,
    SynthesisSettings,
    DEFAULT_COLUMNS,
    DEFAULT_SYNTHESIS,
    REQUIRED_COLUMNS,
)
from ..helpers.dataset import Dataset
from ..ids.classes import IDClass
from ..reservation.cancellation import CancellationToken
from ..reservation.coordinator import ReservationCoordinator
from .gap_filler import fill_gaps, id_gaps
from .synthesizer import RowSynthesizer

logger = logging.getLogger(__name__)

STAGE_AMOUNTS: tuple[tuple[tuple[str, ...], int], ...] = (
    (("after basement", "afterbasement"), 6000),
    (("final completion", "finalcompletion"), 9000),
)


@dataclass
class GenerationResult:
    rows: list[list[Any]]
    report: VerificationReport
    issued: dict[IDClass, list[str]] = field(default_factory=dict)
    new_rows: int = 0

    @property
    def message(self) -> str:
        if self.new_rows:
            return f"SUCCESS! Generated {self.new_rows} NEW row(s). IDs saved to the uniqueness store."
        return f"SUCCESS! Processed {len(self.rows)} row(s). IDs saved to the uniqueness store."


def finalise_rows(
    rows: Sequence[Sequence[Any]],
    headers: Sequence[str],
    columns: ColumnMapping = DEFAULT_COLUMNS,
) -> list[list[Any]]:
    """Pad, renumber the serial column, blank bank details and set stage amounts."""
    width = len(headers)
    serial_idx = columns.serial_index(headers)
    cleared = [i for i in (columns.find(headers, (c,)) for c in columns.cleared) if i is not None]
    stage_idx = columns.find(headers, columns.stage)
    amount_idx = columns.find(headers, columns.amount)

    out = []
    for n, row in enumerate(rows, start=1):
        row = list(row) + [""] * (width - len(row))
        if serial_idx is not None:
            row[serial_idx] = n
        for i in cleared:
            row[i] = ""
        if stage_idx is not None and amount_idx is not None:
            stage = str(row[stage_idx] or "").lower()
            for needles, amount in STAGE_AMOUNTS:
                if any(s in stage for s in needles):
                    row[amount_idx] = amount
                    break
        out.append(row)
    return out


def generate_ids(
    dataset: Dataset,
    coordinator: ReservationCoordinator,
    *,
    synthesis_count: int = 0,
    columns: ColumnMapping = DEFAULT_COLUMNS,
    settings: SynthesisSettings = DEFAULT_SYNTHESIS,
    required: Sequence[str] = REQUIRED_COLUMNS,
    rng: Optional[random.Random] = None,
    cancel: Optional[CancellationToken] = None,
) -> GenerationResult:
    """
    Verify the dataset, fill its gaps, append synthesized rows and finalise.

    Gap IDs and synthesized-row IDs for every class are reserved in a single
    all-or-nothing commit before any row is built. Terminal reservation
    errors propagate unchanged; their ``user_message`` is accurate because
    nothing was issued by this run when they are raised.
    """
    rng = rng or random.Random()
    report = verify_dataset(dataset, columns=columns, required=required)
    context = report.context
    assert context is not None

    if synthesis_count < 0:
        raise ValueError(f"synthesis_count must be non-negative, got {synthesis_count}")

    gap_counts = {c: len(n) for c, n in id_gaps(dataset, columns).items()}
    reserved = coordinator.reserve_many(
        {c: n + synthesis_count for c, n in gap_counts.items()},
        exclude={c: context.existing_for(c) for c in gap_counts},
        cancel=cancel,
    )
    gap_ids = {c: ids[: gap_counts[c]] for c, ids in reserved.items()}
    new_ids = {c: ids[gap_counts[c] :] for c, ids in reserved.items()}

    filled = fill_gaps(
        dataset, context, coordinator,
        columns=columns, settings=settings, rng=rng, reserved=gap_ids,
    )
    new_rows = RowSynthesizer(
        coordinator, columns=columns, settings=settings, rng=rng,
    ).synthesize(synthesis_count, context, dataset.headers, reserved=new_ids)

    issued = {c: list(ids) for c, ids in reserved.items()}

    result = GenerationResult(
        rows=finalise_rows(filled.rows + new_rows, dataset.headers, columns),
        report=report,
        issued=issued,
        new_rows=len(new_rows),
    )
    logger.info(result.message)
    return result
