from .columns import (
    DEFAULT_COLUMN_MAPPING,
    TARGET_FIELDS,
    MappingError,
    build_alias_table,
    init_selections,
    missing_required,
    remap_columns,
)
from .normalizer import clean_value, create_full_name
from .transformer import map_address_type, map_data, map_row, split_street_number, transform_row

__all__ = [
    "DEFAULT_COLUMN_MAPPING",
    "TARGET_FIELDS",
    "MappingError",
    "build_alias_table",
    "clean_value",
    "create_full_name",
    "init_selections",
    "map_address_type",
    "map_data",
    "map_row",
    "missing_required",
    "remap_columns",
    "split_street_number",
    "transform_row",
]
