from __future__ import annotations

import csv
import io
import logging
import zipfile
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd
import xlrd
from openpyxl.utils.exceptions import InvalidFileException

"""Source file reader (CSV / XLSX / XLS / ODS) -> raw rows + headers.

The first row of the sheet is the header row, every following non-empty row a
data row. Cells are read as text so postal codes keep their leading zeros;
empty cells become "". Parsing itself is pandas' job (openpyxl / xlrd / odf
engines for workbooks, the python CSV engine for text). The CSV delimiter is
sniffed from a fixed set before pandas sees the file.
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "EmptySourceError",
    "SheetData",
    "SourceReadError",
    "list_sheets",
    "normalize_frame",
    "read_source",
    "sniff_delimiter",
]

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".xlsx", ".xls", ".ods")
CSV_ENCODINGS = ("utf-8-sig", "cp1252")
CSV_DELIMITERS = ",;\t|"
SNIFF_SAMPLE_SIZE = 64 * 1024

# 壊れた / 形式違いのワークブックで各エンジンが投げる例外
WORKBOOK_ERRORS: tuple[type[Exception], ...] = (
    OSError,
    ValueError,
    KeyError,
    zipfile.BadZipFile,
    InvalidFileException,
    xlrd.XLRDError,
)


class SourceReadError(Exception):
    """Raised when a source file cannot be read or parsed."""


class EmptySourceError(SourceReadError):
    """Raised when a source file has a header but no data rows."""


@dataclass
class SheetData:
    sheet_name: str
    columns: list[str]
    rows: list[dict[str, Any]]  # ヘッダ名 -> セル値 (文字列)


def _check_suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise SourceReadError(
            f"unsupported file type '{suffix}' (supported: {', '.join(SUPPORTED_SUFFIXES)})"
        )
    return suffix


def _decode_csv(path: Path) -> str:
    last_error: UnicodeDecodeError | None = None
    for encoding in CSV_ENCODINGS:
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError as e:
            logger.debug("csv decode with %s failed: %s", encoding, e)
            last_error = e
        except OSError as e:
            raise SourceReadError(f"cannot read {path.name}: {e}") from e
    raise SourceReadError(f"CSV parsing error: {last_error}")


def sniff_delimiter(text: str) -> str:
    """Pick the delimiter among ``, ; TAB |``; ``,`` when none is detectable.

    Examples:
        >>> sniff_delimiter("Vorname;Name\\nMax;Mustermann\\n")
        ';'
        >>> sniff_delimiter("Name\\nMustermann\\n")
        ','
    """
    sample = text[:SNIFF_SAMPLE_SIZE]
    if len(text) > SNIFF_SAMPLE_SIZE and "\n" in sample:
        # 途中で切れた最終行は判定に使わない
        sample = sample.rsplit("\n", 1)[0]
    try:
        return csv.Sniffer().sniff(sample, delimiters=CSV_DELIMITERS).delimiter
    except csv.Error:
        return ","


def _read_csv_frame(path: Path) -> pd.DataFrame:
    text = _decode_csv(path)
    delimiter = sniff_delimiter(text)
    logger.debug("csv %s delimiter=%r", path.name, delimiter)
    try:
        return pd.read_csv(
            io.StringIO(text),
            sep=delimiter,
            engine="python",
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as e:
        raise EmptySourceError(f"no data found in CSV file: {path.name}") from e
    except (pd.errors.ParserError, csv.Error) as e:
        raise SourceReadError(f"CSV parsing error: {e}") from e


def list_sheets(path: Path) -> list[str]:
    """Sheet names of a workbook; a CSV file is one pseudo sheet named after the file."""
    if _check_suffix(path) == ".csv":
        return [path.stem]
    try:
        with pd.ExcelFile(path) as xls:
            return [str(name) for name in xls.sheet_names]
    except WORKBOOK_ERRORS as e:
        raise SourceReadError(f"File parsing error: {e}") from e


def _read_workbook_frame(path: Path, sheet: str | None) -> tuple[str, pd.DataFrame]:
    try:
        with pd.ExcelFile(path) as xls:
            names = [str(n) for n in xls.sheet_names]
            if not names:
                raise SourceReadError("No sheets found in file")
            if sheet is None:
                if len(names) > 1:
                    logger.info(f"workbook has {len(names)} sheets {names}, using '{names[0]}'")
                sheet = names[0]
            elif sheet not in names:
                raise SourceReadError(f"sheet '{sheet}' not found (available: {names})")
            df = xls.parse(sheet, header=None, dtype=str, keep_default_na=False)
    except SourceReadError:
        raise
    except WORKBOOK_ERRORS as e:
        raise SourceReadError(f"File parsing error: {e}") from e
    return sheet, df


def normalize_frame(
    df: pd.DataFrame,
    sheet_name: str,
    null_sentinels: Iterable[str] | None = None,
) -> SheetData:
    """Turn a header-less DataFrame into headers + row dicts.

    Steps:
    1. First row -> headers (trimmed); blank header cells drop their column
    2. Fully blank data rows are skipped
    3. NaN -> ""; cells equal to a null sentinel (case-insensitive) -> ""
    """
    if df.shape[0] < 1:
        raise EmptySourceError(f"sheet '{sheet_name}' has no header row")

    sentinels = {s.strip().upper() for s in null_sentinels or ()}
    header_cells = ["" if pd.isna(c) else str(c).strip() for c in df.iloc[0].tolist()]
    keep = [(i, h) for i, h in enumerate(header_cells) if h]
    columns = [h for _, h in keep]

    rows: list[dict[str, Any]] = []
    for raw in df.iloc[1:].itertuples(index=False, name=None):
        row: dict[str, Any] = {}
        for i, header in keep:
            value = raw[i] if i < len(raw) else ""
            if pd.isna(value):
                value = ""
            elif isinstance(value, str) and sentinels and value.strip().upper() in sentinels:
                value = ""
            row[header] = value
        if all(str(v).strip() == "" for v in row.values()):
            continue
        rows.append(row)

    return SheetData(sheet_name=sheet_name, columns=columns, rows=rows)


def read_source(
    path: Path,
    sheet: str | None = None,
    null_sentinels: Iterable[str] | None = None,
) -> SheetData:
    """Read a CSV/XLSX/XLS/ODS file into SheetData.

    Raises:
        SourceReadError: missing file, unsupported type, parse failure
        EmptySourceError: header present but no data rows
    """
    if not path.exists():
        raise SourceReadError(f"source file not found: {path}")
    suffix = _check_suffix(path)

    if suffix == ".csv":
        sheet_name, df = path.stem, _read_csv_frame(path)
    else:
        sheet_name, df = _read_workbook_frame(path, sheet)

    data = normalize_frame(df, sheet_name, null_sentinels=null_sentinels)
    if not data.rows:
        raise EmptySourceError(f"No data found in file: {path.name}")
    logger.debug("read %s sheet=%s cols=%s rows=%d", path.name, sheet_name, data.columns, len(data.rows))
    return data
