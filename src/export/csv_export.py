from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from enum import Enum
from pathlib import Path

from ..models.mapped_address import EXPORT_FIELDS, MappedAddress

"""CSV export for the postal label printing tool.

Format:
- delimiter ``;``, header row = EXPORT_FIELDS, lines joined by ``\\n``
- a field is quoted only when it contains ``;``, ``"`` or a newline;
  embedded quotes are doubled
- optional sender row first, then the (filtered) address rows
- bytes are Windows-1252; characters without a cp1252 byte become ``?``
"""

__all__ = [
    "CSVExportError",
    "ExportScope",
    "build_csv_content",
    "encode_cp1252",
    "escape_csv_value",
    "export_csv",
    "filter_by_scope",
    "is_german_land",
    "write_export",
]

logger = logging.getLogger(__name__)

DELIMITER = ";"
LINE_SEPARATOR = "\n"
TARGET_ENCODING = "cp1252"
GERMAN_LAND_VALUES = frozenset({"DE", "DEU", "GERMANY"})


class CSVExportError(Exception):
    pass


class ExportScope(Enum):
    """Which records go into an export file."""
    ALL = "all"
    LOCAL = "local"  # LAND is Germany
    INTERNATIONAL = "international"

    @property
    def filename(self) -> str:
        suffix = {
            ExportScope.ALL: "all",
            ExportScope.LOCAL: "germany",
            ExportScope.INTERNATIONAL: "international",
        }[self]
        return f"mapped_addresses_{suffix}.csv"


def escape_csv_value(value: str) -> str:
    escaped = value.replace('"', '""')
    if DELIMITER in escaped or "\n" in escaped or '"' in escaped:
        return f'"{escaped}"'
    return escaped


def _render_row(record: MappedAddress) -> str:
    return DELIMITER.join(escape_csv_value(str(record.get(f))) for f in EXPORT_FIELDS)


def build_csv_content(records: Iterable[MappedAddress], sender: MappedAddress | None = None) -> str:
    lines = [DELIMITER.join(EXPORT_FIELDS)]
    if sender is not None:
        lines.append(_render_row(sender))
    lines.extend(_render_row(r) for r in records)
    return LINE_SEPARATOR.join(lines)


def encode_cp1252(text: str) -> bytes:
    """Encode to Windows-1252, unmappable characters become ``?`` (0x3F).

    Code points 0x00-0x7F and 0xA0-0xFF map to their own byte value; the
    typographic block (€, smart quotes, dashes, ™, ...) maps to 0x80-0x9F.
    """
    return text.encode(TARGET_ENCODING, errors="replace")


def is_german_land(land: str) -> bool:
    return land.strip().upper() in GERMAN_LAND_VALUES


def filter_by_scope(records: Sequence[MappedAddress], scope: ExportScope) -> list[MappedAddress]:
    if scope is ExportScope.ALL:
        return list(records)
    if scope is ExportScope.LOCAL:
        return [r for r in records if is_german_land(str(r.land))]
    return [r for r in records if not is_german_land(str(r.land))]


def export_csv(
    records: Sequence[MappedAddress],
    sender: MappedAddress | None = None,
    scope: ExportScope = ExportScope.ALL,
) -> bytes:
    """Render the filtered records (plus sender) as cp1252 CSV bytes."""
    selected = filter_by_scope(records, scope)
    return encode_cp1252(build_csv_content(selected, sender))


def write_export(
    directory: Path,
    records: Sequence[MappedAddress],
    sender: MappedAddress | None = None,
    scope: ExportScope = ExportScope.ALL,
) -> tuple[Path, int, int]:
    """Write one scope's export file.

    Returns:
        (path, address rows written, size in bytes)
    """
    selected = filter_by_scope(records, scope)
    payload = encode_cp1252(build_csv_content(selected, sender))
    path = directory / scope.filename
    try:
        directory.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload)
    except OSError as e:
        raise CSVExportError(f"failed to write {path}: {e}") from e
    logger.debug("export scope=%s rows=%d path=%s", scope.value, len(selected), path)
    return path, len(selected), len(payload)
