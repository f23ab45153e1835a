"""Scalar value cleaning shared by the transformer."""

from __future__ import annotations

import math
import re
from typing import Any

_WHITESPACE_RUN = re.compile(r"\s+")


def is_blank(value: Any) -> bool:
    """True for absent values: None, NaN, empty or whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def to_text(value: Any) -> str:
    """Stringify a cell value; integral floats (Excel numbers) lose their ``.0``."""
    if is_blank(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def clean_value(value: Any) -> str:
    """Trim and collapse internal whitespace runs to a single space."""
    text = to_text(value).strip()
    return _WHITESPACE_RUN.sub(" ", text)


def create_full_name(first_name: Any, last_name: Any) -> str:
    first = to_text(first_name).strip()
    last = to_text(last_name).strip()
    return f"{first} {last}".strip()
