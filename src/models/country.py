from __future__ import annotations

from dataclasses import dataclass

"""Country reference models.

CountryEntry mirrors one row of the ISO 3166-1 reference table, CountryMatch is
the result of a directory lookup.
"""

__all__ = [
    "CountryEntry",
    "CountryMatch",
]


@dataclass(frozen=True)
class CountryEntry:
    """One ISO 3166-1 country (read-only at runtime)."""
    english_short_name: str
    german_short_name: str
    alpha2_code: str
    alpha3_code: str
    numeric: int
    aliases: tuple[str, ...] = ()  # common names ("Bolivia", "Iran")


@dataclass(frozen=True)
class CountryMatch:
    """Outcome of resolving a free-text country value.

    ``matched`` is False only for non-empty input that is not in the directory;
    ``original`` then carries the trimmed input.
    """
    code: str
    matched: bool = True
    original: str | None = None
