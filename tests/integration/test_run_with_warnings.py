from __future__ import annotations

import json
from pathlib import Path

from src.cli import main as cli_main

"""Runs that export with warnings (exit code 2)."""


def test_unmapped_country_and_long_fields(temp_workdir: Path, write_config: Path, make_csv, capsys):
    rows = [
        {"Vorname": "Max", "Name": "Mustermann", "Adresse1": "Blumenstraße 5", "PLZ": "10115",
         "Ort": "Berlin", "Land": "Atlantis"},
        {"Vorname": "Erika", "Name": "Musterfrau", "Adresse1": "Hauptweg 1", "PLZ": "1234567890",
         "Ort": "Köln", "Land": "Deutschland"},
        {"Vorname": "Anna", "Name": "Schmidt", "Adresse1": "Weg 2", "PLZ": "01067",
         "Ort": "Dresden", "Land": "Österreich"},
    ]
    make_csv(temp_workdir / "data" / "addresses.csv", rows)

    assert cli_main([]) == 2
    out = capsys.readouterr().out
    assert 'WARN row 1: LAND could not be mapped from "Atlantis", defaulted to DEU' in out
    assert "WARN row 2: PLZ exceeds max length (10 > 9)" in out
    assert "warning_rows=2" in out

    logs = list((temp_workdir / "logs").glob("warnings-*.log"))
    assert len(logs) == 1
    entries = [json.loads(line) for line in logs[0].read_text(encoding="utf-8").splitlines()]
    assert [(e["row"], e["warning_type"]) for e in entries] == [(1, "UNMAPPED_COUNTRY"), (2, "FIELD_TOO_LONG")]
    assert all(e["file"] == "addresses.csv" for e in entries)

    lines = (temp_workdir / "out" / "mapped_addresses_all.csv").read_bytes().decode("cp1252").split("\n")
    assert lines[2].endswith(";DEU;HOUSE;1")
    assert lines[4] == "Anna Schmidt;;Weg;2;01067;Dresden;AUT;HOUSE;3"


def test_sender_warning_only(temp_workdir: Path, source_csv: Path, capsys):
    (temp_workdir / "config" / "labels.yml").write_text(
        "input_file: ./data/addresses.csv\n"
        "sender:\n"
        f"  NAME: {'X' * 51}\n",
        encoding="utf-8",
    )
    assert cli_main([]) == 2
    out = capsys.readouterr().out
    assert "WARN sender: NAME exceeds max length (51 > 50)" in out
    assert "warning_rows=0 sender_warnings=1" in out

    log = next((temp_workdir / "logs").glob("warnings-*.log"))
    entry = json.loads(log.read_text(encoding="utf-8").splitlines()[0])
    assert entry["row"] == 0


def test_null_sentinels(temp_workdir: Path, make_csv, capsys):
    rows = [{"Vorname": "Max", "Name": "Mustermann", "Adresse1": "Blumenstraße 5", "Adresse2": "n/a",
             "PLZ": "10115", "Ort": "Berlin", "Land": "NULL"}]
    make_csv(temp_workdir / "data" / "addresses.csv", rows)
    (temp_workdir / "config" / "labels.yml").write_text(
        "input_file: ./data/addresses.csv\n"
        'null_sentinels: ["NULL", "n/a"]\n',
        encoding="utf-8",
    )
    # NULL → empty country → DEU without a warning
    assert cli_main([]) == 0
    lines = (temp_workdir / "out" / "mapped_addresses_all.csv").read_bytes().decode("cp1252").split("\n")
    assert lines[2] == "Max Mustermann;;Blumenstraße;5;10115;Berlin;DEU;HOUSE;1"
