from .samplers import generate_name, generate_phone, generate_secondary_id
from .synthesizer import RowSynthesizer, synthesize_rows
from .gap_filler import FillResult, fill_gaps, id_gaps
from .pipeline import GenerationResult, finalise_rows, generate_ids

__all__ = [
    "generate_name",
    "generate_phone",
    "generate_secondary_id",
    "RowSynthesizer",
    "synthesize_rows",
    "FillResult",
    "fill_gaps",
    "id_gaps",
    "GenerationResult",
    "finalise_rows",
    "generate_ids",
]
