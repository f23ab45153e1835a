#!/usr/bin/env python3
"""Sample address dataset generator.

Writes a synthetic address list with the default column headers
(Anrede, Vorname, Name, Adresse1, Adresse2, PLZ, Ort, Land) as .xlsx, .ods or
.csv. The mix covers the interesting cases of the mapper: German and
international rows, US-style house numbers, PO boxes, major recipients,
unknown countries and names long enough to trigger length warnings.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

FIRST_NAMES = ["Max", "Erika", "Jürgen", "Anna", "Lukas", "Sophie", "Émile", "Zoë"]
LAST_NAMES = ["Mustermann", "Musterfrau", "Müller", "Schröder", "Weiß", "Dupont", "Smith"]
STREETS = ["Blumenstraße", "Hauptweg", "Am Markt", "Lindenallee", "Schloßplatz"]
CITIES = [("10115", "Berlin"), ("80331", "München"), ("01067", "Dresden"), ("20095", "Hamburg")]
FOREIGN = [
    ("1010", "Wien", "Österreich", "Stephansplatz 3"),
    ("75001", "Paris", "France", "12 Rue de Rivoli"),
    ("10001", "New York", "US", "350 Fifth Avenue"),
    ("8001", "Zürich", "CH", "Bahnhofstrasse 7b"),
]


def generate_addresses(rows: int, seed: int = 42) -> pd.DataFrame:
    """Generate ``rows`` synthetic address rows."""
    rng = np.random.default_rng(seed)
    records: list[dict[str, str]] = []
    for i in range(rows):
        first = str(rng.choice(FIRST_NAMES))
        last = str(rng.choice(LAST_NAMES))
        kind = rng.random()
        addition = ""
        if kind < 0.6:
            plz, city = CITIES[int(rng.integers(len(CITIES)))]
            street = f"{rng.choice(STREETS)} {int(rng.integers(1, 200))}{rng.choice(['', 'a', 'b'])}"
            country = str(rng.choice(["Deutschland", "DE", "DEU", ""]))
        elif kind < 0.85:
            plz, city, country, street = FOREIGN[int(rng.integers(len(FOREIGN)))]
        elif kind < 0.92:
            plz, city = CITIES[int(rng.integers(len(CITIES)))]
            street = ""
            addition = f"Postfach {int(rng.integers(100, 99999))}"
            country = "Deutschland"
        elif kind < 0.96:
            plz, city = CITIES[int(rng.integers(len(CITIES)))]
            street = f"{rng.choice(STREETS)} 1"
            addition = "Großempfänger"
            country = "Deutschland"
        else:
            plz, city = "99999", "Nirgendwo"
            street = "Unbekannter Weg 5"
            country = "Atlantis"
        if i % 50 == 49:
            last = f"{last}-{'Sehrlangername' * 4}"
        records.append(
            {
                "Anrede": str(rng.choice(["Herr", "Frau", ""])),
                "Vorname": first,
                "Name": last,
                "Adresse1": street,
                "Adresse2": addition,
                "PLZ": plz,
                "Ort": city,
                "Land": country,
            }
        )
    return pd.DataFrame(records)


def write_dataset(output_path: Path, df: pd.DataFrame) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    suffix = output_path.suffix.lower()
    if suffix == ".csv":
        df.to_csv(output_path, sep=";", index=False, encoding="utf-8-sig")
    elif suffix == ".ods":
        df.to_excel(output_path, index=False, engine="odf")
    elif suffix == ".xlsx":
        df.to_excel(output_path, index=False, engine="openpyxl")
    else:
        raise ValueError(f"unsupported output type: {suffix}")
    print(f"Created {output_path} ({len(df)} rows)")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic address list for the label mapper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/addresses.xlsx
  %(prog)s data/addresses.csv --rows 500 --seed 7
        """,
    )
    parser.add_argument("output", type=Path, help="Output file (.xlsx, .ods or .csv)")
    parser.add_argument("--rows", type=int, default=200, help="Number of address rows (default: 200)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    try:
        write_dataset(args.output, generate_addresses(args.rows, args.seed))
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
