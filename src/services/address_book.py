from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import replace
from typing import Any

from ..countries.directory import CountryDirectory, default_directory
from ..mapping.columns import (
    TARGET_FIELDS,
    MappingError,
    build_alias_table,
    init_selections,
    missing_required,
)
from ..mapping.normalizer import is_blank
from ..mapping.transformer import map_data
from ..models.mapped_address import EXPORT_FIELDS, MappedAddress, default_sender
from ..validation.validator import validate, validate_record

"""AddressBook: the single state container for one record set.

All mutations (load, re-mapping, edit, delete, clear) go through this class
and each one rebuilds the warnings map over the whole record set. Only one
pass runs at a time; there is no concurrent writer.
"""

__all__ = [
    "AddressBook",
    "RowIndexError",
    "filter_records",
    "row_has_missing",
]

logger = logging.getLogger(__name__)

# 必須扱いの列 (任意列 ZUSATZ は空でもよい)
MISSING_CHECK_FIELDS: tuple[str, ...] = ("NAME", "STRASSE", "NUMMER", "PLZ", "STADT", "LAND")


class RowIndexError(IndexError):
    """Raised when an edit/delete targets an index outside the record set."""


def row_has_missing(record: MappedAddress) -> bool:
    return any(str(record.get(f)).strip() == "" for f in MISSING_CHECK_FIELDS)


def filter_records(
    records: Sequence[MappedAddress],
    warnings: Mapping[int, list[str]],
    *,
    warnings_only: bool = False,
    missing_only: bool = False,
    term: str = "",
) -> list[MappedAddress]:
    """Table-view filter: warnings are looked up by ``REFERENZ - 1``."""
    needle = term.strip().lower()
    result: list[MappedAddress] = []
    for record in records:
        if warnings_only and not warnings.get(record.referenz - 1):
            continue
        if missing_only and not row_has_missing(record):
            continue
        if needle and not any(needle in str(record.get(f)).lower() for f in EXPORT_FIELDS):
            continue
        result.append(record)
    return result


class AddressBook:
    """Raw input, column selections, mapped records, sender and warnings."""

    def __init__(
        self,
        directory: CountryDirectory | None = None,
        sender: MappedAddress | None = None,
    ) -> None:
        self.directory = directory or default_directory()
        self.raw_rows: list[dict[str, Any]] = []
        self.headers: list[str] = []
        self.selections: dict[str, str] = {}
        self.records: list[MappedAddress] = []
        self.warnings: dict[int, list[str]] = {}
        self.sender: MappedAddress | None = sender if sender is not None else default_sender()
        self.error: str = ""

    # -- input / mapping -------------------------------------------------

    def load(
        self,
        rows: Sequence[Mapping[str, Any]],
        headers: Sequence[str],
        selections: Mapping[str, str] | None = None,
        on_row: Callable[[int], None] | None = None,
    ) -> list[MappedAddress]:
        """Store a freshly read row set and map it.

        Auto-detected selections are used for every target not given in
        ``selections``.

        Raises:
            MappingError: required targets have no source column
        """
        self.raw_rows = [dict(r) for r in rows]
        self.headers = list(headers)
        proposed = init_selections(self.headers)
        if selections:
            proposed.update({k: v for k, v in selections.items() if v})
        self.selections = proposed
        logger.debug("selections: %s", self.selections)
        return self.remap(on_row=on_row)

    def select(self, target: str, source: str | None) -> list[MappedAddress]:
        """Assign (or with None, unassign) the source column of one target."""
        if target not in {f.key for f in TARGET_FIELDS}:
            raise KeyError(f"unknown target field: {target}")
        if source:
            self.selections[target] = source
        else:
            self.selections.pop(target, None)
        return self.remap()

    def remap(self, on_row: Callable[[int], None] | None = None) -> list[MappedAddress]:
        """Re-run mapping and validation over the raw rows.

        Missing required selections block the whole batch: records and
        warnings are cleared, ``error`` is set and MappingError raised.
        """
        if not self.raw_rows:
            self.records = []
            self.warnings = {}
            return self.records

        missing = missing_required(self.selections)
        if missing:
            err = MappingError(missing)
            self.error = str(err)
            self.records = []
            self.warnings = {}
            raise err

        self.error = ""
        alias_table = build_alias_table(self.selections)
        self.records = map_data(self.raw_rows, alias_table, self.directory, on_row=on_row)
        self.warnings = validate(self.records)
        return self.records

    # -- record edits ----------------------------------------------------

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.records):
            raise RowIndexError(f"row index {index} out of range (0..{len(self.records) - 1})")

    def edit_row(self, index: int, record: MappedAddress) -> MappedAddress:
        """Replace the record at ``index`` and re-validate.

        A replacement with a different LAND drops the unmapped-country marker.
        """
        self._check_index(index)
        current = self.records[index]
        if record.land != current.land and record.land_unmapped_original == current.land_unmapped_original:
            record = replace(record, land_unmapped_original=None)
        self.records = [*self.records[:index], record, *self.records[index + 1:]]
        self.warnings = validate(self.records)
        return record

    def update_row(self, index: int, **changes: Any) -> MappedAddress:
        """Field-level convenience around ``edit_row``."""
        self._check_index(index)
        return self.edit_row(index, self.records[index].with_changes(**changes))

    def delete_row(self, index: int) -> MappedAddress:
        """Remove one record and compact REFERENZ to 1..N-1."""
        self._check_index(index)
        removed = self.records[index]
        remaining = self.records[:index] + self.records[index + 1:]
        self.records = [replace(r, referenz=i + 1) for i, r in enumerate(remaining)]
        self.warnings = validate(self.records)
        return removed

    def clear(self) -> None:
        self.raw_rows = []
        self.headers = []
        self.selections = {}
        self.records = []
        self.warnings = {}
        self.sender = default_sender()
        self.error = ""

    # -- sender ----------------------------------------------------------

    def set_sender(self, sender: MappedAddress | None) -> None:
        self.sender = sender

    @property
    def sender_warnings(self) -> list[str]:
        if self.sender is None:
            return []
        return validate_record(self.sender)

    @property
    def warning_count(self) -> int:
        """Number of address rows with warnings (sender excluded)."""
        return len(self.warnings)

    # -- persistence -----------------------------------------------------

    def to_state(self) -> dict[str, Any]:
        return {
            "mappedData": [r.to_dict() for r in self.records],
            "rawData": [{k: ("" if is_blank(v) else v) for k, v in r.items()} for r in self.raw_rows],
            "sender": self.sender.to_dict() if self.sender is not None else None,
            "headers": list(self.headers),
            "columnSelections": dict(self.selections),
        }

    @classmethod
    def from_state(cls, state: Mapping[str, Any], directory: CountryDirectory | None = None) -> AddressBook:
        """Rebuild a book from a persisted blob; records are kept as stored."""
        book = cls(directory=directory)
        book.raw_rows = [dict(r) for r in state.get("rawData") or []]
        book.headers = [str(h) for h in state.get("headers") or []]
        book.selections = {k: v for k, v in (state.get("columnSelections") or {}).items() if v}
        book.records = [MappedAddress.from_dict(r) for r in state.get("mappedData") or []]
        sender = state.get("sender", {})
        book.sender = MappedAddress.from_dict(sender) if sender is not None else None
        book.warnings = validate(book.records)
        return book
