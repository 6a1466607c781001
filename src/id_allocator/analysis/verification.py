from typing import Any, Sequence
import logging

from ..config import ColumnMapping, DEFAULT_COLUMNS, REQUIRED_COLUMNS
from ..errors import MissingColumnsError
from ..helpers.dataset import Dataset
from ..helpers.null_handlers import is_blank
from ..ids.classes import IDClass
from .analyzer import ContextAnalyzer
from .report import SeverityLevel, VerificationIssue, VerificationReport

logger = logging.getLogger(__name__)


def validate_row(row: Sequence[Any] | None) -> tuple[bool, str | None]:
    if not row:
        return False, "Empty row"
    if all(is_blank(cell) for cell in row):
        return False, "Row contains no data"
    return True, None


def check_required_columns(headers: Sequence[str], required: Sequence[str] = REQUIRED_COLUMNS) -> None:
    present = {str(h).strip() for h in headers if h is not None}
    missing = [c for c in required if c not in present]
    if missing:
        raise MissingColumnsError(missing)


def verify_dataset(
    dataset: Dataset,
    *,
    columns: ColumnMapping = DEFAULT_COLUMNS,
    required: Sequence[str] = REQUIRED_COLUMNS,
) -> VerificationReport:
    """
    Check a dataset before generation and build its Context.

    Raises ``MissingColumnsError`` if any required column is absent. Row
    problems are recorded on the report rather than raised.
    """
    check_required_columns(dataset.headers, required)

    report = VerificationReport(
        total=len(dataset),
        context=ContextAnalyzer(columns).analyze_dataset(dataset),
    )

    id_idx = columns.id_indices(dataset.headers)
    name_idx = columns.find(dataset.headers, columns.name)
    tracked = [
        ("ticket", id_idx.get(IDClass.TICKET)),
        ("ftr", id_idx.get(IDClass.FTR)),
        ("registration", id_idx.get(IDClass.REGISTRATION)),
        ("name", name_idx),
    ]

    for n, row in enumerate(dataset.rows, start=1):
        valid, reason = validate_row(row)
        if not valid:
            report.invalid_count += 1
            report.add(VerificationIssue(SeverityLevel.WARN, reason or "Invalid row", row=n))
            continue
        report.valid_count += 1
        for attr, idx in tracked:
            if idx is not None and (idx >= len(row) or is_blank(row[idx])):
                setattr(report.missing, attr, getattr(report.missing, attr) + 1)

    for attr, idx in tracked:
        gaps = getattr(report.missing, attr)
        if gaps:
            report.add(VerificationIssue(
                SeverityLevel.INFO,
                f"{gaps} row(s) will be filled",
                column=dataset.headers[idx] if idx is not None else attr,
            ))

    logger.info(report.summary())
    return report
