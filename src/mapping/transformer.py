from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from ..countries.directory import CountryDirectory, default_directory
from ..models.mapped_address import AddressType, MappedAddress
from .columns import remap_columns
from .normalizer import clean_value, create_full_name, is_blank, to_text

"""Address transformer: one remapped row -> one MappedAddress.

Pure functions, no shared state between rows apart from the read-only country
directory. Malformed input never raises; fields fall back to "" or defaults.

Street splitting and address-type detection are ordered rule lists,
evaluated top-down, first match wins.
"""

__all__ = [
    "ADDRESS_TYPE_RULES",
    "STREET_SPLIT_RULES",
    "map_address_type",
    "map_data",
    "map_row",
    "split_street_number",
    "transform_row",
]

# "Musterstraße 12a", "Weg 7/", "Allee 3-"
_TRAILING_NUMBER = re.compile(r"^(.*\S)\s+([0-9]+[A-Za-z\-/]?)$")
_DIGIT = re.compile(r"[0-9]")
_WHITESPACE = re.compile(r"\s+")

StreetRule = Callable[[str], "tuple[str, str] | None"]


def _trailing_number(street: str) -> tuple[str, str] | None:
    match = _TRAILING_NUMBER.match(street)
    if match:
        return match.group(1), match.group(2)
    return None


def _last_token_with_digit(street: str) -> tuple[str, str] | None:
    parts = _WHITESPACE.split(street)
    if len(parts) >= 2 and _DIGIT.search(parts[-1]):
        return " ".join(parts[:-1]), parts[-1]
    return None


def _first_token_with_digit(street: str) -> tuple[str, str] | None:
    # US style: "12 Main Street"
    parts = _WHITESPACE.split(street)
    if len(parts) >= 2 and _DIGIT.search(parts[0]):
        return " ".join(parts[1:]), parts[0]
    return None


STREET_SPLIT_RULES: tuple[StreetRule, ...] = (
    _trailing_number,
    _last_token_with_digit,
    _first_token_with_digit,
)

# Priority order matters: Postfach wins over Großempfänger.
ADDRESS_TYPE_RULES: tuple[tuple[tuple[str, ...], AddressType], ...] = (
    (("Postfach",), AddressType.POBOX),
    (("Großempfänger", "Grossempfänger"), AddressType.MAJORRECIPIENT),
)


def split_street_number(street: Any) -> tuple[str, str]:
    """Split a street line into (street name, house number)."""
    text = to_text(street).strip()
    if not text:
        return "", ""
    for rule in STREET_SPLIT_RULES:
        result = rule(text)
        if result is not None:
            return result
    return text, ""


def map_address_type(address_addition: Any) -> AddressType:
    """Classify an address by case-sensitive substrings of the addition line."""
    if is_blank(address_addition):
        return AddressType.HOUSE
    text = to_text(address_addition)
    for needles, address_type in ADDRESS_TYPE_RULES:
        if any(needle in text for needle in needles):
            return address_type
    return AddressType.HOUSE


def transform_row(
    mapped: Mapping[str, Any],
    index: int,
    directory: CountryDirectory | None = None,
) -> MappedAddress:
    """Build the canonical record for a remapped row at 0-based ``index``."""
    directory = directory or default_directory()

    full_name = create_full_name(mapped.get("first_name"), mapped.get("last_name"))
    strasse, nummer = split_street_number(mapped.get("street"))
    addition = mapped.get("address_addition")
    country = directory.resolve(mapped.get("country"))

    return MappedAddress(
        name=clean_value(full_name),
        zusatz=clean_value(addition),
        strasse=clean_value(strasse),
        nummer=clean_value(nummer),
        plz=clean_value(mapped.get("postal_code")),
        stadt=clean_value(mapped.get("city")),
        land=country.code,
        adress_typ=map_address_type(addition).value,
        referenz=index + 1,
        land_unmapped_original=None if country.matched else country.original,
    )


def map_row(
    row: Mapping[Any, Any],
    index: int,
    alias_table: Mapping[str, str] | None = None,
    directory: CountryDirectory | None = None,
) -> MappedAddress:
    return transform_row(remap_columns(row, alias_table), index, directory)


def map_data(
    rows: Sequence[Mapping[Any, Any]] | Iterable[Mapping[Any, Any]],
    alias_table: Mapping[str, str] | None = None,
    directory: CountryDirectory | None = None,
    on_row: Callable[[int], None] | None = None,
) -> list[MappedAddress]:
    """Map every row with its position as sequence index.

    ``on_row`` is called after each row (progress reporting).
    """
    directory = directory or default_directory()
    records: list[MappedAddress] = []
    for index, row in enumerate(rows):
        records.append(map_row(row, index, alias_table, directory))
        if on_row is not None:
            on_row(index)
    return records
