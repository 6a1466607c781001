from typing import Any, Iterable, Optional, Sequence
import logging

from ..config import ColumnMapping, DEFAULT_COLUMNS
from ..helpers.dataset import Dataset
from ..helpers.null_handlers import cell_text, id_text
from ..ids.classes import IDClass
from .data_classes import Context, LocationPool, NamePool

logger = logging.getLogger(__name__)


def mode_of(values: Iterable[Any]) -> Optional[str]:
    """Most frequent non-blank trimmed value; ties go to the value seen first."""
    counts: dict[str, int] = {}
    for v in values:
        text = cell_text(v)
        if text:
            counts[text] = counts.get(text, 0) + 1
    return _mode_from_counts(counts)


def split_name(full_name: str) -> tuple[Optional[str], Optional[str]]:
    """
    Split on whitespace into ``(surname, given)``. Two or more tokens:
    the first is the surname and the rest is the given name. A single
    token is a given name only.
    """
    parts = full_name.split()
    if not parts:
        return None, None
    if len(parts) == 1:
        return None, parts[0]
    return parts[0], " ".join(parts[1:])


class ContextAnalyzer:
    def __init__(self, columns: ColumnMapping = DEFAULT_COLUMNS):
        self.columns = columns

    def analyze(self, headers: Sequence[Any], rows: Iterable[Sequence[Any]]) -> Context:
        headers = [cell_text(h) for h in headers]
        cols = self.columns

        id_idx = cols.id_indices(headers)
        name_idx = cols.find(headers, cols.name)
        dist_idx = cols.find(headers, cols.district)
        mandal_idx = cols.find(headers, cols.mandal)

        reserved = set(id_idx.values()) | {i for i in (name_idx, dist_idx, mandal_idx) if i is not None}
        option_cols = {i: h for i, h in enumerate(headers) if h and i not in reserved}

        options: dict[str, dict[str, None]] = {h: {} for h in option_cols.values()}
        districts: dict[str, int] = {}
        mandals: dict[str, int] = {}
        given: dict[str, None] = {}
        surnames: dict[str, None] = {}
        local_max: dict[IDClass, int] = {}
        existing: dict[IDClass, set[str]] = {c: set() for c in id_idx}

        n_rows = 0
        for row in rows:
            n_rows += 1
            cells = [cell_text(row[i]) if i < len(row) else "" for i in range(len(headers))]

            for i, header in option_cols.items():
                if cells[i]:
                    options[header][cells[i]] = None

            if dist_idx is not None and cells[dist_idx]:
                districts[cells[dist_idx]] = districts.get(cells[dist_idx], 0) + 1
            if mandal_idx is not None and cells[mandal_idx]:
                mandals[cells[mandal_idx]] = mandals.get(cells[mandal_idx], 0) + 1

            if name_idx is not None and cells[name_idx]:
                surname, given_name = split_name(cells[name_idx])
                if surname:
                    surnames[surname] = None
                if given_name:
                    given[given_name] = None

            for id_class, idx in id_idx.items():
                value = id_text(row[idx]) if idx < len(row) else ""
                if not value:
                    continue
                existing[id_class].add(value)
                if value.isdigit():
                    local_max[id_class] = max(local_max.get(id_class, 0), int(value))

        logger.debug(f"Analyzed {n_rows} row(s) across {len(headers)} column(s)")

        return Context(
            district_mode=_mode_from_counts(districts),
            mandal_mode=_mode_from_counts(mandals),
            name_pool=NamePool(given_names=tuple(given), surnames=tuple(surnames)),
            location_pool=LocationPool(districts=tuple(districts), mandals=tuple(mandals)),
            column_options={h: tuple(vals) for h, vals in options.items()},
            local_max_by_class=local_max,
            existing_ids={c: frozenset(v) for c, v in existing.items()},
        )

    def analyze_dataset(self, dataset: Dataset) -> Context:
        return self.analyze(dataset.headers, dataset.rows)


def _mode_from_counts(counts: dict[str, int]) -> Optional[str]:
    # dicts keep first-seen order, so max() settles ties on the earliest value
    if not counts:
        return None
    return max(counts, key=counts.__getitem__)


def analyze_context(
    headers: Sequence[Any],
    rows: Iterable[Sequence[Any]],
    columns: ColumnMapping = DEFAULT_COLUMNS,
) -> Context:
    return ContextAnalyzer(columns).analyze(headers, rows)
