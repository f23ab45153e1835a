from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

"""MappedAddress model for the postal label mapper.

A MappedAddress is the canonical output record: one per spreadsheet row,
field names follow the label printing tool's CSV header (NAME, ZUSATZ, ...).
Attributes are snake_case; ``to_dict`` / ``from_dict`` translate to and from
the upper-case export keys.
"""

__all__ = [
    "AddressType",
    "MappedAddress",
    "EXPORT_FIELDS",
    "DEFAULT_COUNTRY_CODE",
    "default_sender",
]

DEFAULT_COUNTRY_CODE = "DEU"

# CSV ヘッダ順 (固定)
EXPORT_FIELDS: tuple[str, ...] = (
    "NAME",
    "ZUSATZ",
    "STRASSE",
    "NUMMER",
    "PLZ",
    "STADT",
    "LAND",
    "ADRESS_TYP",
    "REFERENZ",
)

_ATTR_BY_FIELD = {
    "NAME": "name",
    "ZUSATZ": "zusatz",
    "STRASSE": "strasse",
    "NUMMER": "nummer",
    "PLZ": "plz",
    "STADT": "stadt",
    "LAND": "land",
    "ADRESS_TYP": "adress_typ",
    "REFERENZ": "referenz",
    "LAND_UNMAPPED_ORIGINAL": "land_unmapped_original",
}


class AddressType(Enum):
    """Delivery type of an address as understood by the label tool.

    - HOUSE: regular street address (default)
    - POBOX: Postfach
    - MAJORRECIPIENT: Großempfänger (own postal code)
    """
    HOUSE = "HOUSE"
    POBOX = "POBOX"
    MAJORRECIPIENT = "MAJORRECIPIENT"


@dataclass(frozen=True)
class MappedAddress:
    """Canonical address record produced by the transformer.

    ``referenz`` is the 1-based position in the active record set.
    ``land_unmapped_original`` is only set when the source country string
    could not be resolved and ``land`` fell back to DEU.
    """
    name: str = ""
    zusatz: str = ""
    strasse: str = ""
    nummer: str = ""
    plz: str = ""
    stadt: str = ""
    land: str = DEFAULT_COUNTRY_CODE
    adress_typ: str = AddressType.HOUSE.value
    referenz: int = 0
    land_unmapped_original: str | None = None

    def get(self, field: str) -> Any:
        """Return the value for an upper-case export field name."""
        return getattr(self, _ATTR_BY_FIELD[field])

    def with_changes(self, **changes: Any) -> MappedAddress:
        """Return a copy with ``changes`` applied.

        A manual LAND change invalidates the unmapped-country marker.
        """
        if "land" in changes and changes["land"] != self.land and "land_unmapped_original" not in changes:
            changes["land_unmapped_original"] = None
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {field: self.get(field) for field in EXPORT_FIELDS}
        if self.land_unmapped_original:
            data["LAND_UNMAPPED_ORIGINAL"] = self.land_unmapped_original
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MappedAddress:
        """Build a record from upper-case keys (persisted state / config sender)."""
        kwargs: dict[str, Any] = {}
        for field, attr in _ATTR_BY_FIELD.items():
            if field in data and data[field] is not None:
                kwargs[attr] = data[field]
        for attr in ("name", "zusatz", "strasse", "nummer", "plz", "stadt", "land", "adress_typ"):
            if attr in kwargs:
                kwargs[attr] = str(kwargs[attr])
        if "referenz" in kwargs:
            try:
                kwargs["referenz"] = int(kwargs["referenz"])
            except (TypeError, ValueError):
                kwargs["referenz"] = 0
        return cls(**kwargs)


def default_sender() -> MappedAddress:
    """Empty sender row (LAND=DEU, HOUSE, REFERENZ=0)."""
    return MappedAddress()
