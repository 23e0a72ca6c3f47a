"""Correct free-text addresses against the gazetteer using fuzzy matching."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from gazetteer import Gazetteer

logger = logging.getLogger(__name__)

# Street names are searched for in the trailing 6 down to 2 tokens. Longer
# windows are tried first and tolerate fewer spelling errors.
MAX_STREET_WINDOW = 6
MIN_STREET_WINDOW = 2
STREET_THRESHOLD_BASE = 7

SUBURB_MATCH_THRESHOLD = 2

SPECIAL_SUFFIXES = (
    (" TCE NTH", " TERRACE NORTH"),
    (" TCE STH", " TERRACE SOUTH"),
    (" TCE EAST", " TERRACE EAST"),
    (" TCE WEST", " TERRACE WEST"),
)


def expand_special_suffixes(text: str) -> str:
    for abbreviation, expansion in SPECIAL_SUFFIXES:
        text = text.replace(abbreviation, expansion)
    return text


def _comparable(text: str) -> str:
    return " ".join(text.split()).upper()


def find_closest_match(text: str, candidates: Sequence[str], threshold: int) -> Optional[str]:
    """
    Find the first candidate with the smallest edit distance to the text.

    Comparison ignores case and surrounding or repeated whitespace.

    Returns:
        The matching candidate, or None if none is within ``threshold`` edits
    """
    match = process.extractOne(
        text,
        candidates,
        scorer=Levenshtein.distance,
        processor=_comparable,
        score_cutoff=threshold,
    )
    if match is None:
        return None
    return match[0]


class AddressNormalizer:
    """Expand street suffixes and resolve street and suburb names."""

    def __init__(self, gazetteer: Gazetteer):
        self.gazetteer = gazetteer
        self.street_candidates: List[str] = list(gazetteer.street_names)
        self.suburb_candidates: List[str] = list(gazetteer.suburb_names)

    def format_street_name(self, text: Optional[str]) -> Optional[str]:
        """
        Format text as a street, eg. "22 SMYTH RD" becomes "22 SMYTH ROAD".

        Any house number or other leading text is preserved. Text containing
        no recognisable street name is returned unchanged.
        """
        if text is None or not text.strip():
            return text

        street = expand_special_suffixes(text.strip().upper())

        tokens = street.split()
        suffix = tokens.pop()
        tokens.append(self.gazetteer.street_suffixes.get(suffix, suffix))

        for window in range(MAX_STREET_WINDOW, MIN_STREET_WINDOW - 1, -1):
            if " ".join(tokens[-window:]) in self.gazetteer.street_names:
                return " ".join(tokens)

        for window in range(MAX_STREET_WINDOW, MIN_STREET_WINDOW - 1, -1):
            threshold = STREET_THRESHOLD_BASE - window
            match = find_closest_match(" ".join(tokens[-window:]), self.street_candidates, threshold)
            if match is not None:
                logger.debug(f"Corrected street \"{' '.join(tokens[-window:])}\" to \"{match}\"")
                del tokens[-window:]
                return (" ".join(tokens) + " " + match).strip()

        return text

    def resolve_suburb(self, text: str) -> Optional[str]:
        """Return the "SUBURB STATE POSTCODE" string for a suburb, or None if unknown."""
        match = find_closest_match(text, self.suburb_candidates, SUBURB_MATCH_THRESHOLD)
        if match is None:
            return None
        return self.gazetteer.suburb_names[match]

    def format_address(self, address: str) -> Optional[str]:
        """
        Format a "street, suburb" address.

        Returns:
            "<street>, <SUBURB STATE POSTCODE>", or None when the address has
            no suburb part or the suburb cannot be resolved
        """
        address = expand_special_suffixes(address.strip().upper())
        comma_index = address.rfind(",")
        if comma_index < 0:
            return None

        street_name = address[:comma_index]
        suburb_name = address[comma_index + 1:]

        suburb = self.resolve_suburb(suburb_name)
        if suburb is None:
            logger.debug(f"Suburb \"{suburb_name.strip()}\" not found in the gazetteer")
            return None

        return f"{self.format_street_name(street_name.strip())}, {suburb}"
