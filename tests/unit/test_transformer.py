from __future__ import annotations

import pytest

from src.mapping.transformer import (
    map_address_type,
    map_data,
    map_row,
    split_street_number,
    transform_row,
)
from src.models.mapped_address import AddressType, MappedAddress
from src.validation.validator import validate


@pytest.mark.parametrize("street,expected", [
    ("Musterstraße 12a", ("Musterstraße", "12a")),
    ("Musterstraße   12a  ", ("Musterstraße", "12a")),
    ("Weg 7/", ("Weg", "7/")),
    ("Allee 3-", ("Allee", "3-")),
    ("Am Markt 3", ("Am Markt", "3")),
    # last token with digit (rule 2)
    ("Hauptstraße 5-7", ("Hauptstraße", "5-7")),
    ("Lindenweg 12ab", ("Lindenweg", "12ab")),
    # US style (rule 3)
    ("12 Main Street", ("Main Street", "12")),
    ("350 Fifth Avenue", ("Fifth Avenue", "350")),
    # no number
    ("Hauptweg", ("Hauptweg", "")),
    ("Am Markt Hinterhaus", ("Am Markt Hinterhaus", "")),
    ("12", ("12", "")),
    ("", ("", "")),
    (None, ("", "")),
])
def test_split_street_number(street, expected):
    assert split_street_number(street) == expected


def test_split_street_number_first_rule_wins():
    # trailing number beats the leading US-style number
    assert split_street_number("12 Main Street 5") == ("12 Main Street", "5")


@pytest.mark.parametrize("addition,expected", [
    ("Postfach 123", AddressType.POBOX),
    ("c/o Firma Großempfänger", AddressType.MAJORRECIPIENT),
    ("Grossempfänger", AddressType.MAJORRECIPIENT),
    ("Großempfänger Postfach 9", AddressType.POBOX),
    ("Hinterhaus", AddressType.HOUSE),
    ("postfach 123", AddressType.HOUSE),
    ("GROSSEMPFAENGER", AddressType.HOUSE),
    ("", AddressType.HOUSE),
    (None, AddressType.HOUSE),
])
def test_map_address_type(addition, expected):
    assert map_address_type(addition) is expected


def test_end_to_end_default_mapping():
    row = {
        "Vorname": "Max",
        "Name": "Mustermann",
        "Adresse1": "Blumenstraße 5",
        "PLZ": "10115",
        "Ort": "Berlin",
        "Land": "Deutschland",
    }
    record = map_row(row, 0)
    assert record == MappedAddress(
        name="Max Mustermann",
        zusatz="",
        strasse="Blumenstraße",
        nummer="5",
        plz="10115",
        stadt="Berlin",
        land="DEU",
        adress_typ="HOUSE",
        referenz=1,
    )
    assert record.land_unmapped_original is None
    assert validate([record]) == {}


def test_transform_row_normalizes_whitespace_everywhere():
    record = transform_row(
        {
            "first_name": "  Max ",
            "last_name": "Muster   Mann",
            "street": "Lange   Straße  9",
            "address_addition": " 2.  OG ",
            "postal_code": " 10115 ",
            "city": "Frankfurt  am Main",
            "country": " de ",
        },
        4,
    )
    assert record.name == "Max Muster Mann"
    assert record.strasse == "Lange Straße"
    assert record.nummer == "9"
    assert record.zusatz == "2. OG"
    assert record.plz == "10115"
    assert record.stadt == "Frankfurt am Main"
    assert record.land == "DEU"
    assert record.referenz == 5


def test_transform_row_unmapped_country():
    record = transform_row({"country": "Atlantis"}, 0)
    assert record.land == "DEU"
    assert record.land_unmapped_original == "Atlantis"


def test_transform_row_degrades_on_empty_input():
    record = transform_row({}, 2)
    assert record == MappedAddress(referenz=3)
    assert record.adress_typ == "HOUSE"


def test_transform_row_numeric_cells():
    record = transform_row({"postal_code": 10115.0, "street": "Weg 3", "last_name": 42}, 0)
    assert record.plz == "10115"
    assert record.name == "42"


def test_map_data_assigns_sequence_and_reports_progress(sample_rows):
    seen: list[int] = []
    records = map_data(sample_rows, on_row=seen.append)
    assert [r.referenz for r in records] == [1, 2]
    assert seen == [0, 1]
    assert records[1].land == "USA"
    assert (records[1].strasse, records[1].nummer) == ("Main Street", "12")


def test_map_data_with_custom_alias_table():
    rows = [{"Given": "Anna", "Family": "Schmidt", "Line1": "Weg 1", "Zip": "01067", "Town": "Dresden", "Cty": "AT"}]
    table = {
        "given": "first_name",
        "family": "last_name",
        "line1": "street",
        "zip": "postal_code",
        "town": "city",
        "cty": "country",
    }
    record = map_data(rows, table)[0]
    assert record.name == "Anna Schmidt"
    assert record.plz == "01067"
    assert record.land == "AUT"
