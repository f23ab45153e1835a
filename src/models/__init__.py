"""Domain models for the postal label mapper.

This package contains the record, reference and configuration types shared by
the mapping pipeline, the export writer and the CLI.
"""

from .config_models import LabelConfig, TargetField
from .country import CountryEntry, CountryMatch
from .mapped_address import EXPORT_FIELDS, AddressType, MappedAddress, default_sender
from .processing_result import ExportStat, ProcessingResult
from .warning_record import WarningRecord

__all__ = [
    # Configuration models
    "LabelConfig",
    "TargetField",
    # Reference data
    "CountryEntry",
    "CountryMatch",
    # Records
    "AddressType",
    "EXPORT_FIELDS",
    "MappedAddress",
    "default_sender",
    # Processing models
    "ExportStat",
    "ProcessingResult",
    "WarningRecord",
]
