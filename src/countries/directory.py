from __future__ import annotations

import gettext
import logging
import unicodedata
from collections.abc import Iterable
from functools import lru_cache
from types import MappingProxyType
from typing import Any

import pycountry

from ..models.country import CountryEntry, CountryMatch
from ..models.mapped_address import DEFAULT_COUNTRY_CODE

"""Country directory: ISO 3166-1 lookup to alpha-3 codes.

The reference table comes from pycountry (ISO 3166-1 data plus the iso-codes
German translations). For every entry four case-insensitive keys are
registered: English short name, German short name, alpha-2 and alpha-3.
pycountry common names ("Bolivia") and their German translation are added
when they do not collide with one of those keys.
Lookup is a single exact match on the lower-cased, trimmed input.
"""

__all__ = [
    "CountryDirectory",
    "default_directory",
    "load_country_entries",
    "resolve_country",
]

logger = logging.getLogger(__name__)

ISO3166_DOMAIN = "iso3166-1"


def _german_translator() -> gettext.NullTranslations:
    return gettext.translation(ISO3166_DOMAIN, pycountry.LOCALES_DIR, languages=["de"], fallback=True)


def load_country_entries() -> list[CountryEntry]:
    """Build CountryEntry rows from pycountry's ISO 3166-1 table."""
    de = _german_translator()
    entries: list[CountryEntry] = []
    for country in pycountry.countries:
        english = country.name
        german = de.gettext(english)
        common = getattr(country, "common_name", None)
        aliases = (common, de.gettext(common)) if common else ()
        entries.append(
            CountryEntry(
                english_short_name=english,
                german_short_name=german,
                alpha2_code=country.alpha_2,
                alpha3_code=country.alpha_3,
                numeric=int(country.numeric),
                aliases=tuple(dict.fromkeys(aliases)),
            )
        )
    logger.debug("loaded %d country entries", len(entries))
    return entries


def _sort_key(text: str) -> str:
    # 大文字小文字・アクセント無視 (Ä -> A)
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


class CountryDirectory:
    """Read-only lookup from country names/codes to alpha-3 codes.

    Built once and shared by reference; the lookup table is exposed as a
    ``MappingProxyType`` so callers cannot mutate it.
    """

    def __init__(self, entries: Iterable[CountryEntry]) -> None:
        self._entries: tuple[CountryEntry, ...] = tuple(entries)
        lookup: dict[str, str] = {}
        for entry in self._entries:
            alpha3 = entry.alpha3_code
            lookup[entry.english_short_name.lower()] = alpha3
            if entry.german_short_name:
                lookup[entry.german_short_name.lower()] = alpha3
            lookup[entry.alpha2_code.lower()] = alpha3
            lookup[alpha3.lower()] = alpha3
        # 通称は正式キーを上書きしない
        for entry in self._entries:
            for alias in entry.aliases:
                lookup.setdefault(alias.lower(), entry.alpha3_code)
        self._lookup = MappingProxyType(lookup)
        self._by_alpha3 = MappingProxyType({e.alpha3_code: e for e in self._entries})

    @property
    def entries(self) -> tuple[CountryEntry, ...]:
        return self._entries

    @property
    def lookup(self) -> MappingProxyType[str, str]:
        return self._lookup

    def __len__(self) -> int:
        return len(self._entries)

    def resolve(self, value: Any) -> CountryMatch:
        """Resolve a free-text country value to an alpha-3 code.

        Empty or absent input is a valid default (DEU, matched). Non-empty
        input that is not in the table also yields DEU but ``matched=False``
        and the trimmed original for the downstream warning.
        """
        if value is None or value is False:
            return CountryMatch(code=DEFAULT_COUNTRY_CODE)
        text = str(value).strip()
        if not text:
            return CountryMatch(code=DEFAULT_COUNTRY_CODE)
        code = self._lookup.get(text.lower())
        if code is not None:
            return CountryMatch(code=code)
        return CountryMatch(code=DEFAULT_COUNTRY_CODE, matched=False, original=text)

    def find(self, alpha3: str) -> CountryEntry | None:
        return self._by_alpha3.get(alpha3.upper())

    @staticmethod
    def label(entry: CountryEntry) -> str:
        """Display label, German name preferred: ``Deutschland (DEU)``."""
        name = entry.german_short_name or entry.english_short_name
        return f"{name} ({entry.alpha3_code})"

    def sorted_for_display(self) -> list[CountryEntry]:
        """Entries sorted by German name (fallback English), accent-insensitive."""
        return sorted(
            self._entries,
            key=lambda e: _sort_key(e.german_short_name or e.english_short_name),
        )


@lru_cache(maxsize=1)
def default_directory() -> CountryDirectory:
    """Shared directory instance built from the bundled ISO table."""
    return CountryDirectory(load_country_entries())


def resolve_country(value: Any, directory: CountryDirectory | None = None) -> CountryMatch:
    return (directory or default_directory()).resolve(value)
