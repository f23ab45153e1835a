# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from src.config.loader import CONFIG_ENV_VAR
from src.logging.init import reset_logging

DEFAULT_HEADERS = ["Anrede", "Vorname", "Name", "Adresse1", "Adresse2", "PLZ", "Ort", "Land"]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    # 各テストで新しい stdout (capsys) にハンドラを張り直す
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_rows() -> list[dict[str, object]]:
    return [
        {
            "Anrede": "Herr",
            "Vorname": "Max",
            "Name": "Mustermann",
            "Adresse1": "Blumenstraße 5",
            "Adresse2": "",
            "PLZ": "10115",
            "Ort": "Berlin",
            "Land": "Deutschland",
        },
        {
            "Anrede": "Frau",
            "Vorname": "Erika",
            "Name": "Musterfrau",
            "Adresse1": "12 Main Street",
            "Adresse2": "",
            "PLZ": "10001",
            "Ort": "New York",
            "Land": "US",
        },
    ]


@pytest.fixture()
def make_csv() -> Callable[..., Path]:
    """Write rows as a semicolon CSV (default headers) and return the path."""
    def _make(path: Path, rows: list[dict[str, object]], headers: list[str] | None = None,
              encoding: str = "utf-8") -> Path:
        cols = headers or DEFAULT_HEADERS
        lines = [";".join(cols)]
        for row in rows:
            lines.append(";".join(str(row.get(h, "")) for h in cols))
        path.write_text("\n".join(lines) + "\n", encoding=encoding)
        return path
    return _make


@pytest.fixture()
def make_xlsx() -> Callable[..., Path]:
    """Write {sheet: rows} (first row = header) as an .xlsx workbook."""
    def _make(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for sheet, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
        return path
    return _make


@pytest.fixture()
def sample_config_yaml() -> str:
    return """input_file: ./data/addresses.csv
output_directory: ./out
export_scopes: [all]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "labels.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def source_csv(temp_workdir: Path, sample_rows, make_csv) -> Path:
    return make_csv(temp_workdir / "data" / "addresses.csv", sample_rows)
