from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""WarningRecord model for the structured warning log.

Each validation warning of an export run is written as one JSON line with a
fixed set of keys. ``row`` is the REFERENZ of the record, 0 for the sender row
and -1 for file-level problems where no record applies.
"""

__all__ = [
    "WarningRecord",
]


@dataclass(frozen=True)
class WarningRecord:
    """Structured warning record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Source file the records were mapped from
        row: REFERENZ of the record (0 = sender, -1 = file level)
        warning_type: Classification in UPPER_SNAKE_CASE format
        message: Human-readable warning text
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int
    warning_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, row: int, warning_type: str, message: str) -> WarningRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return WarningRecord(
            timestamp=ts,
            file=file,
            row=row,
            warning_type=warning_type,
            message=message,
        )

    @staticmethod
    def classify(message: str) -> str:
        """Derive the warning type from a validator message."""
        if message.startswith("LAND could not be mapped"):
            return "UNMAPPED_COUNTRY"
        if message.startswith("Full address exceeds"):
            return "FULL_ADDRESS_TOO_LONG"
        if message == "REFERENZ must be unique":
            return "DUPLICATE_REFERENZ"
        if "exceeds max length" in message:
            return "FIELD_TOO_LONG"
        return "OTHER"

    def to_json_line(self) -> str:
        # 追加キー阻止: dataclass -> dict して json.dumps
        return json.dumps(asdict(self), ensure_ascii=False)
