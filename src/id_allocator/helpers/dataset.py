from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence
import logging

import chardet
import pandas as pd
import pyarrow.parquet as pq

from .null_handlers import normalise_null

logger = logging.getLogger(__name__)

"""
Dataset Helpers
===============

A ``Dataset`` is the rectangular input the analyzer and synthesizer work on:
an ordered header list plus rows of cells aligned to it. Rows are stored as
tuples so nothing downstream can edit the source in place.

File loading is a thin convenience for delimited text and parquet.
"""

Row = tuple[Any, ...]


@dataclass(frozen=True)
class Dataset:
    headers: tuple[str, ...]
    rows: tuple[Row, ...]

    @classmethod
    def from_rows(cls, headers: Sequence[Any], rows: Iterable[Sequence[Any]]) -> "Dataset":
        return cls(
            headers=tuple("" if h is None else str(h).strip() for h in headers),
            rows=tuple(tuple(r) for r in rows),
        )

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "Dataset":
        rows = (
            tuple(normalise_null(v) for v in record)
            for record in df.itertuples(index=False, name=None)
        )
        return cls.from_rows(list(df.columns), rows)

    def to_dataframe(self) -> pd.DataFrame:
        width = len(self.headers)
        padded = [list(r[:width]) + [None] * (width - len(r)) for r in self.rows]
        return pd.DataFrame(padded, columns=list(self.headers))

    def column(self, index: int) -> list[Any]:
        return [r[index] if index < len(r) else None for r in self.rows]

    def __len__(self) -> int:
        return len(self.rows)


def infer_encoding(file):
    with open(file, 'rb') as infile:
        encoding = chardet.detect(infile.read(10000))
    if encoding['encoding'] == 'ascii':
        encoding['encoding'] = 'utf-8' # utf-8 is a superset of ascii; chardet flakes between the two on short samples
    return encoding

def infer_delim(file, encoding: str = 'utf-8'):
    with open(file, 'r', encoding=encoding) as infile:
        line = infile.readline()
        tabs = line.count('\t')
        commas = line.count(',')
        if tabs > commas:
            return '\t'
        return ','

def load_dataset(path: Path) -> Dataset:
    path = Path(path)
    if path.suffix.lower() == ".parquet":
        df = pq.read_table(path).to_pandas()
    else:
        encoding = infer_encoding(path)["encoding"] or "utf-8"
        delimiter = infer_delim(path, encoding)
        logger.debug(f"Reading {path.name} (encoding={encoding}, delimiter={delimiter!r})")
        # IDs are kept as text so leading digits and widths survive
        df = pd.read_csv(path, sep=delimiter, encoding=encoding, dtype=str)
    logger.info(f"Loaded {len(df)} row(s) x {len(df.columns)} column(s) from {path.name}")
    return Dataset.from_dataframe(df)
