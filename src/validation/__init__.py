from .validator import DUPLICATE_REFERENZ_WARNING, FIELD_MAX_LENGTHS, validate, validate_record

__all__ = [
    "DUPLICATE_REFERENZ_WARNING",
    "FIELD_MAX_LENGTHS",
    "validate",
    "validate_record",
]
