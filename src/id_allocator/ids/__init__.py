from .classes import IDClass, IdClassSpec, ID_CLASS_SPECS, spec_for
from .allocators import RangeAllocator, CandidateGenerator, draw, generator_for
from .checksum import (
    compute_check_digit,
    validate,
    generate_valid,
    generate_invalid,
    generate_valid_batch,
    generate_invalid_batch,
)

__all__ = [
    "IDClass",
    "IdClassSpec",
    "ID_CLASS_SPECS",
    "spec_for",
    "RangeAllocator",
    "CandidateGenerator",
    "draw",
    "generator_for",
    "compute_check_digit",
    "validate",
    "generate_valid",
    "generate_invalid",
    "generate_valid_batch",
    "generate_invalid_batch",
]
