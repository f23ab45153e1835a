from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..export.csv_export import CSVExportError, ExportScope, write_export
from ..logging.error_log import WarningLogBuffer
from ..mapping.columns import TARGET_FIELDS, MappingError
from ..models.config_models import LabelConfig
from ..models.processing_result import ExportStat, ProcessingResult
from ..sources.reader import SourceReadError, read_source
from .address_book import AddressBook
from .progress import ProgressTracker
from .state_store import StateStore

"""Service orchestration for one mapping/export run.

read source -> map rows (AddressBook) -> log + buffer warnings -> write one
CSV per export scope -> persist state (optional) -> ProcessingResult.

Validation warnings never stop the export. Read failures, missing required
mappings and write failures are fatal and surface as ProcessingError.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error that prevents mapping or export."""
    pass


def parse_scopes(values: Iterable[str]) -> list[ExportScope]:
    scopes: list[ExportScope] = []
    for value in values:
        try:
            scope = ExportScope(str(value).lower())
        except ValueError as e:
            valid = ", ".join(s.value for s in ExportScope)
            raise ProcessingError(f"unknown export scope '{value}' (valid: {valid})") from e
        if scope not in scopes:
            scopes.append(scope)
    return scopes


def _log_selections(book: AddressBook) -> None:
    lower_headers = {h.lower() for h in book.headers}
    for field in TARGET_FIELDS:
        source = book.selections.get(field.key)
        if source is None:
            logger.debug(f"mapping: {field.label} -> (not mapped)")
            continue
        logger.debug(f"mapping: {field.label} -> {source}")
        if source.lower() not in lower_headers:
            logger.warning(f"mapping: column '{source}' for {field.label} not found in source headers")


def _log_warnings(book: AddressBook) -> None:
    for index in sorted(book.warnings):
        referenz = book.records[index].referenz
        for message in book.warnings[index]:
            logger.warning(f"row {referenz}: {message}")
    for message in book.sender_warnings:
        logger.warning(f"sender: {message}")


def process_file(
    config: LabelConfig,
    *,
    input_file: str | None = None,
    scopes: Iterable[str] | None = None,
    logs_dir: Path | None = None,
) -> ProcessingResult:
    """Map and export one source file.

    Args:
        config: Loaded configuration
        input_file: Overrides ``config.input_file``
        scopes: Overrides ``config.export_scopes``
        logs_dir: Directory for the JSON Lines warning log (default ./logs)

    Raises:
        ProcessingError: unreadable source, missing required mapping,
            unknown scope or export write failure
    """
    start_time = datetime.now(UTC)
    source = Path(input_file or config.input_file)
    export_scopes = parse_scopes(scopes or config.export_scopes)

    try:
        sheet = read_source(source, sheet=config.sheet, null_sentinels=config.null_sentinels)
    except SourceReadError as e:
        raise ProcessingError(str(e)) from e
    logger.info(f"Reading {source.name} sheet={sheet.sheet_name} rows={len(sheet.rows)}")

    book = AddressBook()
    book.set_sender(config.sender)
    with ProgressTracker(len(sheet.rows), source_name=source.name) as progress:
        try:
            book.load(sheet.rows, sheet.columns, config.column_mapping, on_row=progress.advance)
        except MappingError as e:
            raise ProcessingError(str(e)) from e
        progress.finish(book.warning_count)
    _log_selections(book)
    _log_warnings(book)

    warning_log = WarningLogBuffer(source.name, logs_dir)
    warning_log.add_warnings(book.records, book.warnings)
    warning_log.add_sender_warnings(book.sender_warnings)
    warnings_path = warning_log.flush()
    if warnings_path is not None:
        logger.info(f"warnings written to {warnings_path}")

    output_dir = Path(config.output_directory)
    exports: list[ExportStat] = []
    for scope in export_scopes:
        try:
            path, rows, size = write_export(output_dir, book.records, book.sender, scope)
        except CSVExportError as e:
            raise ProcessingError(str(e)) from e
        logger.info(f"export {scope.value}: {rows} addresses -> {path}")
        exports.append(ExportStat(scope=scope.value, path=str(path), address_rows=rows, size_bytes=size))

    if config.state_file:
        StateStore(Path(config.state_file)).save(book)
        logger.debug(f"state saved to {config.state_file}")

    end_time = datetime.now(UTC)
    return ProcessingResult(
        source_file=str(source),
        total_rows=len(book.records),
        warning_rows=book.warning_count,
        sender_warnings=len(book.sender_warnings),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        exports=exports,
        warnings_log=str(warnings_path) if warnings_path is not None else None,
    )
