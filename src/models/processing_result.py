from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

"""Processing result models for the postal label mapper.

Aggregated outcome of one CLI run, consumed by the SUMMARY line renderer.
"""


@dataclass(frozen=True)
class ExportStat:
    """Per-scope export statistics."""
    scope: str  # all / local / international
    path: str  # 出力ファイルパス
    address_rows: int  # sender 行を除くデータ行数
    size_bytes: int


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results and summary output for one mapping run."""
    source_file: str
    total_rows: int  # mapped address records
    warning_rows: int  # records with at least one warning
    sender_warnings: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    exports: list[ExportStat] = field(default_factory=list)
    warnings_log: str | None = None  # JSON Lines path when warnings were flushed

    @property
    def has_warnings(self) -> bool:
        return self.warning_rows > 0 or self.sender_warnings > 0
