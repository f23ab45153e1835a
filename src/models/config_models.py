from __future__ import annotations

from dataclasses import dataclass, field

from .mapped_address import MappedAddress

"""Config dataclasses for the postal label mapper.

These are the typed form of config/labels.yml after schema validation in
src/config/loader.py.
"""

__all__ = [
    "LabelConfig",
    "TargetField",
]


@dataclass(frozen=True)
class TargetField:
    """A canonical input field the user maps a source column onto."""
    key: str  # canonical key, e.g. "first_name"
    label: str  # German label shown to the user
    required: bool = False


@dataclass(frozen=True)
class LabelConfig:
    """Root configuration object for one mapping/export run.

    ``column_mapping`` holds target key -> source header selections;
    targets that are missing get auto-detected from the headers.
    ``sender`` is None when the sender row is disabled.
    """
    input_file: str
    output_directory: str = "./out"
    export_scopes: tuple[str, ...] = ("all",)
    sheet: str | None = None
    column_mapping: dict[str, str] = field(default_factory=dict)
    sender: MappedAddress | None = None
    state_file: str | None = None
    null_sentinels: tuple[str, ...] = ()
