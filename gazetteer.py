"""Street, street suffix and suburb reference data used to correct addresses."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Set, Tuple

from exceptions import GazetteerError

logger = logging.getLogger(__name__)

STREET_NAMES_FILENAME = "streetnames.txt"
STREET_SUFFIXES_FILENAME = "streetsuffixes.txt"
SUBURB_NAMES_FILENAME = "suburbnames.txt"

MOUNT_PREFIX = "MOUNT "
MOUNT_ABBREVIATIONS = ("MT ", "MT.", "MT. ")


@dataclass
class Gazetteer:
    """
    Read-only address reference data, loaded once per run.

    Attributes:
        street_names: Street name -> suburbs it runs through
        street_suffixes: Suffix abbreviation (eg. "RD") -> full suffix (eg. "ROAD")
        suburb_names: Suburb name -> "SUBURB STATE POSTCODE" style string
    """
    street_names: Dict[str, Set[str]] = field(default_factory=dict)
    street_suffixes: Dict[str, str] = field(default_factory=dict)
    suburb_names: Dict[str, str] = field(default_factory=dict)

    def add_street(self, street_name: str, suburb_name: str) -> None:
        # Several suburbs may share the same street name.
        self.street_names.setdefault(street_name, set()).add(suburb_name)

    def add_suburb(self, suburb_name: str, canonical_name: str) -> None:
        self.suburb_names[suburb_name] = canonical_name
        if suburb_name.startswith(MOUNT_PREFIX):
            remainder = suburb_name[len(MOUNT_PREFIX):]
            for abbreviation in MOUNT_ABBREVIATIONS:
                self.suburb_names[abbreviation + remainder] = canonical_name

    @classmethod
    def from_files(cls, street_names_path: Path, street_suffixes_path: Path,
                   suburb_names_path: Path) -> "Gazetteer":
        """
        Load the three comma-separated datasets.

        Raises:
            GazetteerError: If a file cannot be read or a record has no comma
        """
        gazetteer = cls()
        for street_name, suburb_name in _read_records(street_names_path):
            gazetteer.add_street(street_name, suburb_name)
        for abbreviation, suffix in _read_records(street_suffixes_path):
            gazetteer.street_suffixes[abbreviation] = suffix
        for suburb_name, canonical_name in _read_records(suburb_names_path):
            gazetteer.add_suburb(suburb_name, canonical_name)

        logger.info(
            f"Loaded {len(gazetteer.street_names)} street names, "
            f"{len(gazetteer.street_suffixes)} street suffixes and "
            f"{len(gazetteer.suburb_names)} suburb names"
        )
        return gazetteer


def _read_records(path: Path) -> Iterator[Tuple[str, str]]:
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        error_msg = f"Failed to read gazetteer file: {path}. Error: {str(e)}"
        logger.error(error_msg)
        raise GazetteerError(error_msg) from e

    lines: List[str] = content.replace("\r", "").strip().split("\n")
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        tokens = line.upper().split(",")
        if len(tokens) < 2:
            error_msg = f"Malformed record in {path} at line {line_number}: {line!r}"
            logger.error(error_msg)
            raise GazetteerError(error_msg)
        yield tokens[0].strip(), tokens[1].strip()


def load_gazetteer(directory: Path) -> Gazetteer:
    """Load the gazetteer from the standard file names in a directory."""
    directory = Path(directory)
    return Gazetteer.from_files(
        directory / STREET_NAMES_FILENAME,
        directory / STREET_SUFFIXES_FILENAME,
        directory / SUBURB_NAMES_FILENAME,
    )
