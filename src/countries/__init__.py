from .directory import CountryDirectory, default_directory, load_country_entries, resolve_country

__all__ = [
    "CountryDirectory",
    "default_directory",
    "load_country_entries",
    "resolve_country",
]
