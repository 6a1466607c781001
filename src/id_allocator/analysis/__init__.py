from .data_classes import Context, NamePool, LocationPool, MissingStats
from .analyzer import ContextAnalyzer, analyze_context, mode_of, split_name
from .report import SeverityLevel, VerificationIssue, VerificationReport
from .verification import verify_dataset, validate_row, check_required_columns

__all__ = [
    "Context",
    "NamePool",
    "LocationPool",
    "MissingStats",
    "ContextAnalyzer",
    "analyze_context",
    "mode_of",
    "split_name",
    "SeverityLevel",
    "VerificationIssue",
    "VerificationReport",
    "verify_dataset",
    "validate_row",
    "check_required_columns",
]
