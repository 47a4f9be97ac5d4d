"""
places.py - Country resolution for free-text event locations.

Migration events carry a location typed by the user ("Madrid, Spain",
"New York, USA", "Alemania"). CountryResolver maps such text to a canonical
country using pycountry names, a YAML substitution table and rapidfuzz fuzzy
matching for misspellings.

Module: genogram_patterns.places
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Tuple

import pycountry
import yaml
from rapidfuzz import fuzz, process

logger = logging.getLogger(__name__)

DEFAULT_PLACES_PATH = Path(__file__).parent / "places.yaml"


class CountryResolver:
    """
    Resolves free-text places to canonical country names and ISO alpha-2 codes.

    The country is taken from the last comma-separated element of the place.
    Lookup order: substitution table, exact country name (name, official and
    common names, alpha-2/alpha-3 codes), then fuzzy match.

    Attributes:
        substitutions_lower (Dict[str, str]): Lowercase alias -> canonical country name.
        fuzzy_cutoff (float): Minimum rapidfuzz ratio (0-100) for a fuzzy match.
    """

    def __init__(self, places_path: Optional[Path] = DEFAULT_PLACES_PATH,
                 substitutions: Optional[Dict[str, str]] = None, fuzzy_cutoff: float = 88.0) -> None:
        if places_path is not None and not isinstance(places_path, Path):
            raise TypeError("places_path must be a pathlib.Path or None")
        self.fuzzy_cutoff = fuzzy_cutoff
        self.substitutions_lower: Dict[str, str] = {}
        if places_path is not None:
            self._load_substitutions(places_path)
        if substitutions:
            self.substitutions_lower.update({k.lower(): v for k, v in substitutions.items()})

        self._names_lower: Dict[str, Tuple[str, str]] = {}
        for country in pycountry.countries:
            entry = (country.name, country.alpha_2)
            for name in (country.name, getattr(country, 'official_name', None), getattr(country, 'common_name', None)):
                if name:
                    self._names_lower[name.lower()] = entry
        self._choices = list(self._names_lower.keys())

    def _load_substitutions(self, places_path: Path) -> None:
        if not places_path.exists():
            raise FileNotFoundError(f"Places file not found: {places_path}")
        try:
            with open(places_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing {places_path}: {e}")
        substitutions = data.get('country_substitutions', {}) or {}
        self.substitutions_lower = {str(k).lower(): v for k, v in substitutions.items()}

    def _lookup_code(self, text: str) -> Optional[Tuple[str, str]]:
        if len(text) not in (2, 3) or not text.isalpha():
            return None
        key = 'alpha_2' if len(text) == 2 else 'alpha_3'
        country = pycountry.countries.get(**{key: text.upper()})
        return (country.name, country.alpha_2) if country else None

    def lookup(self, place: Optional[str]) -> Optional[Tuple[str, str]]:
        """
        Resolve a place to (country name, alpha-2 code).

        Args:
            place: Free-text place.

        Returns:
            Tuple of canonical country name and ISO alpha-2 code, or None.
        """
        if not place or not place.strip():
            return None
        last_element = place.split(',')[-1].strip()
        key = last_element.lower()

        substituted = self.substitutions_lower.get(key)
        if substituted:
            logger.debug(f"Substituting country '{last_element}' with '{substituted}' in place '{place}'")
            key = substituted.lower()

        if key in self._names_lower:
            return self._names_lower[key]

        by_code = self._lookup_code(last_element)
        if by_code:
            return by_code

        match = process.extractOne(key, self._choices, scorer=fuzz.ratio, score_cutoff=self.fuzzy_cutoff)
        if match:
            logger.debug(f"Fuzzy matched '{last_element}' to '{match[0]}' (score {match[1]:.1f})")
            return self._names_lower[match[0]]

        logger.debug(f"No country found for place '{place}'")
        return None

    def country_name(self, place: Optional[str]) -> Optional[str]:
        found = self.lookup(place)
        return found[0] if found else None

    def country_code(self, place: Optional[str]) -> Optional[str]:
        found = self.lookup(place)
        return found[1] if found else None


@lru_cache(maxsize=1)
def default_resolver() -> CountryResolver:
    """Shared resolver built from the packaged places.yaml."""
    return CountryResolver()
