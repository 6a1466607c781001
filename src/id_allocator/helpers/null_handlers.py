import re
from decimal import Decimal
import pandas as pd
from typing import Any

_NULL_STRINGS = {"", "nan", "null", "none", "na", "n/a"}

def normalise_null(value: Any) -> Any | None:
    if value is None:
        return None

    # pandas / numpy NaN
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass

    if isinstance(value, str):
        s = value.strip()
        if s.lower() in _NULL_STRINGS:
            return None
        return s

    return value

def is_blank(value: Any) -> bool:
    return normalise_null(value) is None

def cell_text(value: Any) -> str:
    """Trimmed string form of a cell; blank cells become ''."""
    value = normalise_null(value)
    if value is None:
        return ""
    # spreadsheets hand back whole numbers as floats
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


_WHOLE_NUMBER = re.compile(r"(\d+)\.0*")
_EXPONENT = re.compile(r"\d+(\.\d+)?[eE]\+?\d+")

def id_text(value: Any) -> str:
    """
    Canonical text of an identifier cell. Spreadsheet exports turn
    2000000002 into "2000000002.0" or "2.000000002E9"; both become
    "2000000002". Anything else is returned as trimmed text.
    """
    text = cell_text(value)
    whole = _WHOLE_NUMBER.fullmatch(text)
    if whole:
        return whole.group(1)
    if _EXPONENT.fullmatch(text):
        number = Decimal(text)
        if number == number.to_integral_value():
            return str(int(number))
    return text
