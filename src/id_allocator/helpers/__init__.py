from .dataset import Dataset, load_dataset
from .null_handlers import normalise_null, is_blank, cell_text, id_text

__all__ = [
    "Dataset",
    "load_dataset",
    "normalise_null",
    "is_blank",
    "cell_text",
    "id_text",
]
