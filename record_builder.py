"""Turn projected table rows into validated development applications."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Dict, Optional

from address_normalizer import AddressNormalizer
from exceptions import MissingIdentifier, RowRejection
from models import APPLICATION_NUMBER_PATTERN, Cell, Column, DevelopmentApplication

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "No Description Provided"
DEFAULT_COMMENT_URL = "mailto:mail@dclep.sa.gov.au"

# Received dates are printed as D/MM/YYYY and parsed strictly.
RECEIVED_DATE_PATTERN = re.compile(r"^\d{1,2}/\d{2}/\d{4}$")
RECEIVED_DATE_FORMAT = "%d/%m/%Y"
OUTPUT_DATE_FORMAT = "%Y-%m-%d"

_WHITESPACE_RUN = re.compile(r"\s+")


def join_cell_text(cell: Optional[Cell]) -> str:
    """Join a cell's text fragments in reading order, collapsing whitespace."""
    if cell is None:
        return ""
    return _WHITESPACE_RUN.sub(" ", " ".join(cell.texts)).strip()


def parse_received_date(cell: Optional[Cell]) -> str:
    """
    Parse the received date from the first fragment of a cell.

    Returns:
        The date as YYYY-MM-DD, or "" when absent or not a valid D/MM/YYYY date
    """
    if cell is None or not cell.elements:
        return ""

    text = cell.elements[0].text.strip()
    if not RECEIVED_DATE_PATTERN.match(text):
        return ""

    try:
        return datetime.strptime(text, RECEIVED_DATE_FORMAT).strftime(OUTPUT_DATE_FORMAT)
    except ValueError:
        return ""


class RecordBuilder:
    """Build development applications from the cells of one row."""

    def __init__(
        self,
        normalizer: AddressNormalizer,
        information_url: str,
        comment_url: str = DEFAULT_COMMENT_URL,
        scrape_date: Optional[str] = None,
    ):
        """
        Initialize RecordBuilder.

        Args:
            normalizer: Address normalizer backed by the run's gazetteer
            information_url: URL of the document the rows come from
            comment_url: Where comments on an application can be sent
            scrape_date: Date of this run as YYYY-MM-DD (defaults to today)
        """
        self.normalizer = normalizer
        self.information_url = information_url
        self.comment_url = comment_url
        self.scrape_date = scrape_date or date.today().strftime(OUTPUT_DATE_FORMAT)

    def build(self, cells: Dict[Column, Optional[Cell]]) -> DevelopmentApplication:
        """
        Build a development application from a projected row.

        Args:
            cells: The row's cell under each column (None where absent)

        Returns:
            DevelopmentApplication

        Raises:
            MissingIdentifier: If the row has no application number (eg. the heading row)
            RowRejection: If the address is missing or cannot be resolved
        """
        application_number_cell = cells.get(Column.APPLICATION_NUMBER)
        if application_number_cell is None:
            raise MissingIdentifier("the row has no application number cell")

        application_number = "".join(application_number_cell.texts).strip()
        if not APPLICATION_NUMBER_PATTERN.search(application_number):
            raise MissingIdentifier(f"\"{application_number}\" is not an application number")

        logger.info(f"Found development application {application_number}.")

        street_name_cell = cells.get(Column.STREET_NAME)
        suburb_name_cell = cells.get(Column.SUBURB_NAME)
        if street_name_cell is None:
            raise RowRejection(f"application {application_number} has no street name cell")
        if suburb_name_cell is None:
            raise RowRejection(f"application {application_number} has no suburb name cell")

        street_name = join_cell_text(street_name_cell)
        suburb_name = join_cell_text(suburb_name_cell)
        if street_name == "":
            raise RowRejection(f"application {application_number} has no street name")
        if suburb_name == "":
            raise RowRejection(f"application {application_number} has no suburb name")

        address = self.normalizer.format_address(f"{street_name}, {suburb_name}")
        if not address:
            raise RowRejection(
                f"application {application_number} has an unresolvable address "
                f"\"{street_name}, {suburb_name}\""
            )

        description = join_cell_text(cells.get(Column.DESCRIPTION))

        return DevelopmentApplication(
            application_number=application_number,
            address=address,
            description=description or DEFAULT_DESCRIPTION,
            information_url=self.information_url,
            comment_url=self.comment_url,
            scrape_date=self.scrape_date,
            received_date=parse_received_date(cells.get(Column.RECEIVED_DATE)),
            legal_description=join_cell_text(cells.get(Column.LEGAL_DESCRIPTION)),
        )
