from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

from ..models.config_models import TargetField

"""Column remapping: arbitrary source headers -> canonical field keys.

The alias table maps source header -> canonical key and is matched
case-insensitively. Row keys without an alias are passed through lower-cased.
A caller-supplied alias table replaces the default completely.
"""

__all__ = [
    "DEFAULT_COLUMN_MAPPING",
    "TARGET_FIELDS",
    "MappingError",
    "build_alias_table",
    "init_selections",
    "missing_required",
    "remap_columns",
]

logger = logging.getLogger(__name__)

DEFAULT_COLUMN_MAPPING: Mapping[str, str] = MappingProxyType({
    "Anrede": "salutation",
    "Vorname": "first_name",
    "Name": "last_name",
    "Adresse1": "street",
    "Adresse2": "address_addition",
    "PLZ": "postal_code",
    "Ort": "city",
    "Land": "country",
})

TARGET_FIELDS: tuple[TargetField, ...] = (
    TargetField("salutation", "Anrede"),
    TargetField("first_name", "Vorname", required=True),
    TargetField("last_name", "Nachname", required=True),
    TargetField("street", "Straße", required=True),
    TargetField("address_addition", "Adresszusatz"),
    TargetField("postal_code", "PLZ", required=True),
    TargetField("city", "Ort", required=True),
    TargetField("country", "Land", required=True),
)


class MappingError(Exception):
    """Raised when required target fields have no source column assigned."""

    def __init__(self, missing: Sequence[TargetField]) -> None:
        self.missing = list(missing)
        labels = ", ".join(f.label for f in self.missing)
        super().__init__(f"Please map required fields: {labels}")


def remap_columns(row: Mapping[Any, Any], alias_table: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Rename the keys of ``row`` to canonical keys using ``alias_table``."""
    table = DEFAULT_COLUMN_MAPPING if alias_table is None else alias_table
    normalized = {str(source).lower(): target for source, target in table.items()}

    mapped: dict[str, Any] = {}
    for key, value in row.items():
        lower_key = str(key).lower()
        target = normalized.get(lower_key)
        if target:
            mapped[target] = value
        else:
            mapped[lower_key] = value
    return mapped


def init_selections(headers: Sequence[str]) -> dict[str, str]:
    """Propose a source header per target field.

    Tries the default alias for the target first, then a header named like the
    target key itself. Matching is case-insensitive; the header keeps its
    original spelling.
    """
    lower_headers = [h.lower() for h in headers]
    selections: dict[str, str] = {}

    for field in TARGET_FIELDS:
        source = next((s for s, t in DEFAULT_COLUMN_MAPPING.items() if t == field.key), None)
        if source is not None and source.lower() in lower_headers:
            selections[field.key] = headers[lower_headers.index(source.lower())]
            continue
        if field.key.lower() in lower_headers:
            selections[field.key] = headers[lower_headers.index(field.key.lower())]

    logger.debug("initial selections: %s", selections)
    return selections


def build_alias_table(selections: Mapping[str, str | None]) -> dict[str, str]:
    """Invert ``{target: source}`` selections into an alias table."""
    return {source: target for target, source in selections.items() if source}


def missing_required(selections: Mapping[str, str | None]) -> list[TargetField]:
    return [f for f in TARGET_FIELDS if f.required and not selections.get(f.key)]
