from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path

from src.models.mapped_address import MappedAddress
from src.models.warning_record import WarningRecord

"""Warning log generation & buffering.

- JSON Lines with a fixed schema (see WarningRecord), no extra keys
- one file per run: ``logs/warnings-YYYYMMDD-HHMMSS.log`` (UTC), created lazily
- records are buffered and written on flush()
"""

__all__ = [
    "WarningRecord",
    "WarningLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class WarningLogBuffer:
    """In-memory buffer for warning records. Flush writes JSON Lines.

    シリアル実行前提のためスレッド安全性は不要。
    """

    def __init__(self, source_file: str = "", logs_dir: Path | None = None) -> None:
        self.source_file = source_file
        self._logs_dir = logs_dir or LOGS_DIR
        self._records: list[WarningRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"warnings-{stamp}.log"
        return self._file_path

    def append(self, record: WarningRecord) -> None:
        self._records.append(record)

    def add_warnings(self, records: list[MappedAddress], warnings: Mapping[int, list[str]]) -> None:
        """Buffer every entry of a validator warnings map.

        ``row`` is taken from the record's REFERENZ, falling back to index + 1.
        """
        for index in sorted(warnings):
            row = records[index].referenz if index < len(records) else index + 1
            for message in warnings[index]:
                self.append(
                    WarningRecord.create(self.source_file, row, WarningRecord.classify(message), message)
                )

    def add_sender_warnings(self, warnings: list[str]) -> None:
        for message in warnings:
            self.append(WarningRecord.create(self.source_file, 0, WarningRecord.classify(message), message))

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file.

        Returns:
            The file path, or None when nothing was buffered (no file created)
        """
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
