"""Command-line argument parsing and validation."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from gazetteer import STREET_NAMES_FILENAME, STREET_SUFFIXES_FILENAME, SUBURB_NAMES_FILENAME
from record_builder import DEFAULT_COMMENT_URL

logger = logging.getLogger(__name__)


class CLIHandler:
    """Handle command-line argument parsing and validation."""

    @staticmethod
    def _parse_page_number(text: str, part: str) -> int:
        try:
            page_num = int(text.strip())
        except ValueError as e:
            raise ValueError(f"Invalid page range format: {part}") from e
        if page_num < 1:
            raise ValueError(f"Page numbers must be >= 1: {part}")
        return page_num

    @staticmethod
    def parse_page_range(page_str: str) -> List[int]:
        """
        Parse page range string into list of page numbers.

        Supports formats:
        - "1,3,5" -> [0, 2, 4] (0-indexed)
        - "1-5" -> [0, 1, 2, 3, 4]
        - "1,3-5,10" -> [0, 2, 3, 4, 9]

        Args:
            page_str: Comma-separated page range string (1-indexed)

        Returns:
            Sorted, de-duplicated list of page numbers (0-indexed)

        Raises:
            ValueError: If page range format is invalid
        """
        if not page_str:
            return []

        pages = set()
        for part in page_str.split(','):
            part = part.strip()
            if '-' in part:
                start_text, end_text = part.split('-', 1)
                start = CLIHandler._parse_page_number(start_text, part)
                end = CLIHandler._parse_page_number(end_text, part)
                if start > end:
                    raise ValueError(f"Start page must be <= end page: {part}")
                pages.update(range(start - 1, end))
            else:
                pages.add(CLIHandler._parse_page_number(part, part) - 1)

        return sorted(pages)

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            description="Parse development applications from the grid of a register PDF",
            formatter_class=argparse.RawDescriptionHelpFormatter
        )

        parser.add_argument(
            'pdf_path',
            type=str,
            help='Path to input PDF file'
        )

        parser.add_argument(
            '--gazetteer-dir',
            type=str,
            default='.',
            metavar='DIR',
            help=f'Directory containing {STREET_NAMES_FILENAME}, {STREET_SUFFIXES_FILENAME} '
                 f'and {SUBURB_NAMES_FILENAME} (default: current directory)'
        )

        parser.add_argument(
            '--database',
            type=str,
            default=None,
            metavar='FILE',
            help='SQLite database to insert applications into. '
                 'Applications already present are skipped.'
        )

        parser.add_argument(
            '--save-json',
            type=str,
            nargs='?',
            const='',
            default=None,
            metavar='FILENAME',
            help='Save parsed applications to a JSON file. '
                 'If flag is provided without filename, uses default: {pdfname}_applications.json.'
        )

        parser.add_argument(
            '--info-url',
            type=str,
            default=None,
            metavar='URL',
            help='Information URL recorded against each application (default: the PDF file URI)'
        )

        parser.add_argument(
            '--comment-url',
            type=str,
            default=DEFAULT_COMMENT_URL,
            metavar='URL',
            help=f'Comment URL recorded against each application (default: {DEFAULT_COMMENT_URL})'
        )

        parser.add_argument(
            '--encryption-password',
            type=str,
            default=None,
            metavar='PASSWORD',
            help='Password for encrypted PDF.'
        )

        parser.add_argument(
            '--pages',
            type=str,
            default=None,
            metavar='RANGE',
            help='Page range to process (1-indexed). '
                 'Examples: "1,3,5" or "1-5" or "1,3-5,10"'
        )

        parser.add_argument(
            '--log-level',
            type=str,
            default='INFO',
            choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
            help='Set logging level (default: INFO)'
        )

        return parser

    @staticmethod
    def parse_arguments(argv: List[str] = None) -> argparse.Namespace:
        """
        Parse command-line arguments.

        Args:
            argv: Argument list (defaults to sys.argv[1:])

        Returns:
            Parsed arguments namespace
        """
        return CLIHandler.build_parser().parse_args(argv)

    @staticmethod
    def validate_arguments(args: argparse.Namespace) -> bool:
        """
        Validate parsed arguments.

        Args:
            args: Parsed arguments namespace

        Returns:
            True if arguments are valid

        Raises:
            ValueError: If arguments are invalid
        """
        pdf_path = Path(args.pdf_path)
        if not pdf_path.is_file():
            raise ValueError(f"PDF file not found: {pdf_path}")

        if pdf_path.suffix.lower() != '.pdf':
            raise ValueError(f"File is not a PDF: {pdf_path}")

        if not Path(args.gazetteer_dir).is_dir():
            raise ValueError(f"Gazetteer directory not found: {args.gazetteer_dir}")

        if args.pages:
            try:
                CLIHandler.parse_page_range(args.pages)
            except ValueError as e:
                raise ValueError(f"Invalid page range: {e}") from e

        return True
