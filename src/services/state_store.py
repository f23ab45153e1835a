from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .address_book import AddressBook

"""JSON file persistence for an AddressBook.

The whole state is one blob under a single storage key. A missing or
unreadable file means "no prior state" and is never fatal.
"""

__all__ = [
    "STORAGE_KEY",
    "StateStore",
]

logger = logging.getLogger(__name__)

STORAGE_KEY = "deutsche-post-mail-labels-data"


class StateStore:
    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> dict[str, Any] | None:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"state: failed to load {self.path}: {e}")
            return None
        blob = data.get(STORAGE_KEY) if isinstance(data, dict) else None
        if not isinstance(blob, dict):
            logger.warning(f"state: no '{STORAGE_KEY}' entry in {self.path}")
            return None
        return blob

    def load_book(self, **kwargs: Any) -> AddressBook | None:
        blob = self.load()
        if blob is None:
            return None
        return AddressBook.from_state(blob, **kwargs)

    def save(self, book: AddressBook) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps({STORAGE_KEY: book.to_state()}, ensure_ascii=False, default=str)
            self.path.write_text(payload, encoding="utf-8")
        except OSError as e:
            logger.warning(f"state: failed to save {self.path}: {e}")

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"state: failed to clear {self.path}: {e}")
