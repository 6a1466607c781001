import random
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence
import logging

from ..analysis.data_classes import Context
from ..analysis.verification import validate_row
from ..config import ColumnMapping, SynthesisSettings, DEFAULT_COLUMNS, DEFAULT_SYNTHESIS
from ..helpers.dataset import Dataset
from ..helpers.null_handlers import is_blank
from ..ids.classes import IDClass
from ..reservation.cancellation import CancellationToken
from ..reservation.coordinator import ReservationCoordinator
from .samplers import generate_name

logger = logging.getLogger(__name__)


@dataclass
class FillResult:
    rows: list[list[Any]]
    issued: dict[IDClass, list[str]] = field(default_factory=dict)

    @property
    def filled_ids(self) -> int:
        return sum(len(v) for v in self.issued.values())


def id_gaps(dataset: Dataset, columns: ColumnMapping = DEFAULT_COLUMNS) -> dict[IDClass, list[int]]:
    """Row numbers of valid rows with a blank cell, per ID class."""
    id_idx = columns.id_indices(dataset.headers)
    gaps: dict[IDClass, list[int]] = {c: [] for c in id_idx}
    for n, row in enumerate(dataset.rows):
        if not validate_row(row)[0]:
            continue
        for id_class, idx in id_idx.items():
            if idx >= len(row) or is_blank(row[idx]):
                gaps[id_class].append(n)
    return gaps


def fill_gaps(
    dataset: Dataset,
    context: Context,
    coordinator: ReservationCoordinator,
    *,
    columns: ColumnMapping = DEFAULT_COLUMNS,
    settings: SynthesisSettings = DEFAULT_SYNTHESIS,
    rng: Optional[random.Random] = None,
    cancel: Optional[CancellationToken] = None,
    reserved: Optional[Mapping[IDClass, Sequence[str]]] = None,
) -> FillResult:
    """
    Return copies of the dataset's rows with blank cells completed.

    Blank locations take the context mode, blank names get a generated
    name and blank ID cells get freshly reserved IDs. Unless ``reserved``
    already supplies them, every ID class is reserved in one joint
    all-or-nothing commit sized to its gaps. Invalid rows are passed
    through as-is. The dataset itself is never modified.
    """
    rng = rng or random.Random()
    headers = dataset.headers
    width = len(headers)
    id_idx = columns.id_indices(headers)
    name_idx = columns.find(headers, columns.name)
    dist_idx = columns.find(headers, columns.district)
    mandal_idx = columns.find(headers, columns.mandal)

    rows = [list(r) + [None] * (width - len(r)) for r in dataset.rows]
    valid = [validate_row(r)[0] for r in dataset.rows]

    gaps = {c: n for c, n in id_gaps(dataset, columns).items() if n}
    if reserved is None:
        reserved = coordinator.reserve_many(
            {c: len(n) for c, n in gaps.items()},
            exclude={c: context.existing_for(c) for c in gaps},
            cancel=cancel,
        )

    result = FillResult(rows=rows)
    for id_class, row_numbers in gaps.items():
        ids = list(reserved.get(id_class, ()))
        if len(ids) < len(row_numbers):
            raise ValueError(
                f"Need {len(row_numbers)} {id_class.value} id(s) to fill gaps, got {len(ids)}"
            )
        ids = ids[: len(row_numbers)]
        for n, value in zip(row_numbers, ids):
            rows[n][id_idx[id_class]] = value
        result.issued[id_class] = ids

    for n, row in enumerate(rows):
        if not valid[n]:
            continue
        if dist_idx is not None and is_blank(row[dist_idx]) and context.district_mode:
            row[dist_idx] = context.district_mode
        if mandal_idx is not None and is_blank(row[mandal_idx]) and context.mandal_mode:
            row[mandal_idx] = context.mandal_mode
        if name_idx is not None and is_blank(row[name_idx]):
            row[name_idx] = generate_name(context.name_pool, rng, settings)

    logger.info(f"Filled {result.filled_ids} missing id(s) across {len(rows)} row(s)")
    return result
