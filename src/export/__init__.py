from .csv_export import (
    CSVExportError,
    ExportScope,
    build_csv_content,
    encode_cp1252,
    export_csv,
    filter_by_scope,
    is_german_land,
    write_export,
)

__all__ = [
    "CSVExportError",
    "ExportScope",
    "build_csv_content",
    "encode_cp1252",
    "export_csv",
    "filter_by_scope",
    "is_german_land",
    "write_export",
]
