from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import LabelConfig
from ..models.mapped_address import MappedAddress, default_sender

"""Config loader for config/labels.yml.

Responsibilities:
- Load the YAML file
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults (output_directory=./out, export_scopes=[all], default sender)
"""

DEFAULT_CONFIG_PATH = Path("config/labels.yml")
CONFIG_ENV_VAR = "LABELS_CONFIG"
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def resolve_config_path(cli_value: str | None = None) -> Path:
    """CLI flag > LABELS_CONFIG env var > config/labels.yml."""
    if cli_value:
        return Path(cli_value)
    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value)
    return DEFAULT_CONFIG_PATH


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or invalid, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _build_sender(data: dict[str, Any]) -> MappedAddress | None:
    if "sender" not in data:
        return default_sender()
    raw = data["sender"]
    if raw is None:  # sender 行を出力しない
        return None
    return MappedAddress.from_dict({**default_sender().to_dict(), **raw})


def load_config(path: Path) -> LabelConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config root must be a mapping")

    _validate_config_schema(data)

    column_mapping = {k: v for k, v in (data.get("column_mapping") or {}).items() if v}
    return LabelConfig(
        input_file=data["input_file"],
        output_directory=data.get("output_directory", "./out"),
        export_scopes=tuple(data.get("export_scopes") or ("all",)),
        sheet=data.get("sheet"),
        column_mapping=column_mapping,
        sender=_build_sender(data),
        state_file=data.get("state_file"),
        null_sentinels=tuple(data.get("null_sentinels") or ()),
    )
