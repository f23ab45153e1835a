from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.config.loader import ConfigError, load_config, resolve_config_path
from src.logging.init import enable_debug, log_summary, setup_logging
from src.mapping.columns import TARGET_FIELDS, init_selections
from src.services.orchestrator import ProcessingError, process_file
from src.services.summary import render_summary_line
from src.sources.reader import SourceReadError, read_source

"""CLI entrypoint.

Flow:
- load .env (LABELS_CONFIG may come from it)
- load config/labels.yml (or --config / LABELS_CONFIG)
- map + validate + export via services.orchestrator.process_file
- print one SUMMARY line

Exit codes: 0 = exported without warnings, 2 = exported with warnings,
1 = fatal (config, unreadable source, missing required mapping).
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_WARNINGS = 2


def _load_env_file(path: Path) -> None:
    """Load .env via python-dotenv without overriding existing variables."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="post-label-mapper",
        description="Map address spreadsheets to the postal label CSV format",
    )
    p.add_argument("--config", help="Path to the YAML config (default: config/labels.yml)")
    p.add_argument("--input", help="Source file (overrides input_file from the config)")
    p.add_argument(
        "--scope",
        action="append",
        choices=["all", "local", "international"],
        help="Export scope; repeat for several files (overrides export_scopes)",
    )
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data",
        action="store_true",
        help="Print headers, proposed column mapping and first rows then exit",
    )
    return p.parse_args(argv)


def _inspect_data(cfg, input_file: str | None) -> int:
    source = Path(input_file or cfg.input_file)
    try:
        sheet = read_source(source, sheet=cfg.sheet, null_sentinels=cfg.null_sentinels)
    except SourceReadError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    print(f"FILE: {source.name}")
    print(f"  SHEET: {sheet.sheet_name} cols={sheet.columns}")
    selections = init_selections(sheet.columns)
    selections.update(cfg.column_mapping)
    for field in TARGET_FIELDS:
        marker = "*" if field.required else " "
        print(f"  {marker} {field.label:<13} <- {selections.get(field.key, '(not mapped)')}")
    print("    sample_rows=", sheet.rows[:3])
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストで [] を渡すケース)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        enable_debug()
        logger.debug("debug mode enabled")

    config_path = resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg, args.input)

    try:
        result = process_file(cfg, input_file=args.input, scopes=args.scope)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    # render_summary_line は "SUMMARY " 付きで返すため接頭辞を除去
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.has_warnings:
        return EXIT_WARNINGS
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
