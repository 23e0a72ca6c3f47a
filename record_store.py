"""Persist development applications to an SQLite database."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Iterable, Optional

from exceptions import RecordStoreError
from models import DevelopmentApplication

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL = (
    "create table if not exists [data] ("
    "[council_reference] text primary key, [address] text, [description] text, "
    "[info_url] text, [comment_url] text, [date_scraped] text, [date_received] text, "
    "[legal_description] text)"
)
INSERT_SQL = "insert or ignore into [data] values (?, ?, ?, ?, ?, ?, ?, ?)"


class RecordStore:
    """Insert development applications keyed on their application number."""

    def __init__(self, database_path: Path):
        """
        Initialize RecordStore.

        Args:
            database_path: Path to the SQLite database file (created if missing)
        """
        self.database_path = Path(database_path)
        self.connection: Optional[sqlite3.Connection] = None

    def open(self) -> "RecordStore":
        """
        Open the database and ensure the table exists.

        Raises:
            RecordStoreError: If the database cannot be opened
        """
        try:
            self.connection = sqlite3.connect(self.database_path)
            self.connection.execute(CREATE_TABLE_SQL)
            self.connection.commit()
        except sqlite3.Error as e:
            error_msg = f"Failed to open database: {self.database_path}. Error: {str(e)}"
            logger.error(error_msg)
            raise RecordStoreError(error_msg) from e

        logger.info(f"Database opened: {self.database_path}")
        return self

    def insert(self, application: DevelopmentApplication) -> bool:
        """
        Insert an application unless one with the same number is already stored.

        Returns:
            True if a row was inserted, False if it was already present

        Raises:
            RecordStoreError: If the insert fails
        """
        if self.connection is None:
            raise RecordStoreError("Database not opened. Call open() first.")

        try:
            cursor = self.connection.execute(INSERT_SQL, (
                application.application_number,
                application.address,
                application.description,
                application.information_url,
                application.comment_url,
                application.scrape_date,
                application.received_date,
                application.legal_description,
            ))
            self.connection.commit()
        except sqlite3.Error as e:
            error_msg = (
                f"Failed to insert application {application.application_number}: {str(e)}"
            )
            logger.error(error_msg)
            raise RecordStoreError(error_msg) from e

        summary = (
            f"application \"{application.application_number}\" with address "
            f"\"{application.address}\", description \"{application.description}\", "
            f"legal description \"{application.legal_description}\" and received date "
            f"\"{application.received_date}\""
        )
        if cursor.rowcount > 0:
            logger.info(f"Inserted: {summary} into the database.")
            return True

        logger.info(f"Skipped: {summary} because it was already present in the database.")
        return False

    def insert_all(self, applications: Iterable[DevelopmentApplication]) -> int:
        """Insert several applications, returning how many were new."""
        return sum(1 for application in applications if self.insert(application))

    def close(self) -> None:
        """Close the database connection."""
        if self.connection is not None:
            self.connection.close()
            self.connection = None
            logger.info("Database closed")

    def __enter__(self) -> "RecordStore":
        return self.open()

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
