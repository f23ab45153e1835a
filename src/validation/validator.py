from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping, Sequence

from ..models.mapped_address import MappedAddress

"""Record validation for the label export.

Per-record checks (all reported, in this order):
1. unresolved country (LAND_UNMAPPED_ORIGINAL present)
2. per-field max length
3. composite "full address" length

Cross-record check: every record sharing its REFERENZ with another record
gets "REFERENZ must be unique" appended. ``validate`` never mutates its input
and builds a fresh map on each call.
"""

__all__ = [
    "FIELD_MAX_LENGTHS",
    "FULL_ADDRESS_FIELDS",
    "FULL_ADDRESS_MAX_LENGTH",
    "DUPLICATE_REFERENZ_WARNING",
    "validate",
    "validate_record",
]

FIELD_MAX_LENGTHS: Mapping[str, int] = {
    "NAME": 50,
    "ZUSATZ": 50,
    "STRASSE": 40,
    "NUMMER": 7,
    "PLZ": 9,
    "STADT": 40,
    "LAND": 3,
    "ADRESS_TYP": 99,
    "REFERENZ": 20,
}

FULL_ADDRESS_FIELDS: tuple[str, ...] = ("NAME", "ZUSATZ", "STRASSE", "NUMMER", "PLZ", "STADT")
FULL_ADDRESS_MAX_LENGTH = 72

DUPLICATE_REFERENZ_WARNING = "REFERENZ must be unique"


def validate_record(record: MappedAddress) -> list[str]:
    """Return the warnings for a single record (no cross-record checks)."""
    warnings: list[str] = []

    if record.land_unmapped_original:
        warnings.append(
            f'LAND could not be mapped from "{record.land_unmapped_original}", defaulted to {record.land}'
        )

    for field, max_len in FIELD_MAX_LENGTHS.items():
        length = len(str(record.get(field)))
        if length > max_len:
            warnings.append(f"{field} exceeds max length ({length} > {max_len})")

    parts = (str(record.get(field)).strip() for field in FULL_ADDRESS_FIELDS)
    full_address = " ".join(p for p in parts if p)
    if len(full_address) > FULL_ADDRESS_MAX_LENGTH:
        warnings.append(
            f"Full address exceeds max length ({len(full_address)} > {FULL_ADDRESS_MAX_LENGTH})"
        )

    return warnings


def validate(records: Sequence[MappedAddress]) -> dict[int, list[str]]:
    """Build the warnings map (0-based index -> warnings) for a record set.

    Indices without warnings are absent from the map.
    """
    warnings_map: dict[int, list[str]] = {}
    by_referenz: dict[int, list[int]] = defaultdict(list)

    for index, record in enumerate(records):
        row_warnings = validate_record(record)
        if row_warnings:
            warnings_map[index] = row_warnings
        by_referenz[record.referenz].append(index)

    for indices in by_referenz.values():
        if len(indices) > 1:
            for index in indices:
                warnings_map.setdefault(index, []).append(DUPLICATE_REFERENZ_WARNING)

    return warnings_map
