from .reader import EmptySourceError, SheetData, SourceReadError, list_sheets, read_source

__all__ = [
    "EmptySourceError",
    "SheetData",
    "SourceReadError",
    "list_sheets",
    "read_source",
]
