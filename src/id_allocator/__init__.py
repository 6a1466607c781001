from .errors import (
    IdAllocatorError,
    RangeExhausted,
    ChecksumInvalidInput,
    StoreUnavailable,
    ReservationConflict,
    ReservationExhausted,
    ReservationCancelled,
    MissingColumnsError,
)
from .ids import IDClass, ID_CLASS_SPECS, RangeAllocator
from .store import InMemoryUniquenessStore, SqlUniquenessStore, store_from_url
from .reservation import ReservationCoordinator, CancellationToken
from .analysis import Context, ContextAnalyzer, analyze_context, verify_dataset
from .synthesis import RowSynthesizer, fill_gaps, generate_ids
from .helpers import Dataset, load_dataset

__all__ = [
    "IdAllocatorError",
    "RangeExhausted",
    "ChecksumInvalidInput",
    "StoreUnavailable",
    "ReservationConflict",
    "ReservationExhausted",
    "ReservationCancelled",
    "MissingColumnsError",
    "IDClass",
    "ID_CLASS_SPECS",
    "RangeAllocator",
    "InMemoryUniquenessStore",
    "SqlUniquenessStore",
    "store_from_url",
    "ReservationCoordinator",
    "CancellationToken",
    "Context",
    "ContextAnalyzer",
    "analyze_context",
    "verify_dataset",
    "RowSynthesizer",
    "fill_gaps",
    "generate_ids",
    "Dataset",
    "load_dataset",
]
