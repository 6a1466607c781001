import random
from typing import Any, Mapping, Optional, Sequence
import logging

from ..analysis.data_classes import Context
from ..config import ColumnMapping, SynthesisSettings, DEFAULT_COLUMNS, DEFAULT_SYNTHESIS
from ..helpers.null_handlers import cell_text
from ..ids.classes import IDClass
from ..reservation.cancellation import CancellationToken
from ..reservation.coordinator import ReservationCoordinator
from .samplers import generate_name, generate_phone, generate_secondary_id, pick

logger = logging.getLogger(__name__)


class RowSynthesizer:
    """
    Builds placeholder rows shaped like the dataset a Context came from.

    ID cells come from the reservation coordinator: one joint reservation
    covers every ID column of every new row, with the dataset's own IDs
    excluded, unless the caller passes values it already reserved.
    Every other cell is sampled from the Context's pools.
    """

    def __init__(
        self,
        coordinator: ReservationCoordinator,
        *,
        columns: ColumnMapping = DEFAULT_COLUMNS,
        settings: SynthesisSettings = DEFAULT_SYNTHESIS,
        rng: Optional[random.Random] = None,
    ):
        self.coordinator = coordinator
        self.columns = columns
        self.settings = settings
        self.rng = rng or random.Random()

    def synthesize(
        self,
        count: int,
        context: Context,
        headers: Sequence[Any],
        *,
        cancel: Optional[CancellationToken] = None,
        reserved: Optional[Mapping[IDClass, Sequence[str]]] = None,
    ) -> list[list[Any]]:
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        if count == 0:
            return []

        headers = [cell_text(h) for h in headers]
        cols = self.columns
        id_idx = cols.id_indices(headers)
        name_idx = cols.find(headers, cols.name)
        phone_idx = cols.find(headers, cols.phone)
        secondary_idx = cols.find(headers, cols.secondary_id)
        dist_idx = cols.find(headers, cols.district)
        mandal_idx = cols.find(headers, cols.mandal)

        if reserved is None:
            reserved = self.coordinator.reserve_many(
                {c: count for c in id_idx},
                exclude={c: context.existing_for(c) for c in id_idx},
                cancel=cancel,
            )
        ids_by_column = {}
        for id_class, idx in id_idx.items():
            ids = list(reserved.get(id_class, ()))
            if len(ids) < count:
                raise ValueError(f"Need {count} {id_class.value} id(s) to synthesize rows, got {len(ids)}")
            ids_by_column[idx] = ids[:count]

        rows = []
        for n in range(count):
            row: list[Any] = []
            for i, header in enumerate(headers):
                if i in ids_by_column:
                    row.append(ids_by_column[i][n])
                elif i == name_idx:
                    row.append(generate_name(context.name_pool, self.rng, self.settings))
                elif i == phone_idx:
                    row.append(generate_phone(self.rng, self.settings))
                elif i == secondary_idx:
                    row.append(generate_secondary_id(self.rng, self.settings))
                elif i == dist_idx:
                    row.append(pick(self.rng, context.location_pool.districts))
                elif i == mandal_idx:
                    row.append(pick(self.rng, context.location_pool.mandals))
                else:
                    row.append(pick(self.rng, context.column_options.get(header, ())))
            rows.append(row)

        logger.info(f"Synthesized {count} row(s) with {len(id_idx)} id column(s)")
        return rows


def synthesize_rows(
    count: int,
    context: Context,
    headers: Sequence[Any],
    coordinator: ReservationCoordinator,
    *,
    rng: Optional[random.Random] = None,
    columns: ColumnMapping = DEFAULT_COLUMNS,
) -> list[list[Any]]:
    return RowSynthesizer(coordinator, columns=columns, rng=rng).synthesize(count, context, headers)
