"""Main entry point for the development register mapper."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from address_normalizer import AddressNormalizer
from cli_handler import CLIHandler
from exceptions import DARegisterException, PDFDecryptionError
from gazetteer import load_gazetteer
from json_exporter import JSONExporter
from pdf_reader import PDFReader
from record_builder import RecordBuilder
from record_store import RecordStore
from register_parser import RegisterParser

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main entry point for the development register mapper."""
    try:
        args = CLIHandler.parse_arguments(argv)

        logging.basicConfig(
            level=getattr(logging, args.log_level),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        CLIHandler.validate_arguments(args)

        pdf_path = Path(args.pdf_path)
        logger.info(f"Parsing document: {pdf_path}")

        page_range = None
        if args.pages:
            page_range = CLIHandler.parse_page_range(args.pages)
            logger.info(f"Processing pages: {[p + 1 for p in page_range]} (1-indexed)")

        # The gazetteer is loaded once and shared read-only by every page.
        gazetteer = load_gazetteer(Path(args.gazetteer_dir))
        record_builder = RecordBuilder(
            AddressNormalizer(gazetteer),
            information_url=args.info_url or pdf_path.resolve().as_uri(),
            comment_url=args.comment_url,
        )
        register_parser = RegisterParser(record_builder)

        pdf_reader = PDFReader(pdf_path)
        pdf_reader.validate_path()
        pdf_reader.open_pdf()

        try:
            try:
                pdf_reader.decrypt_pdf(password=args.encryption_password)
            except PDFDecryptionError as e:
                logger.error(f"PDF decryption failed: {e}")
                if not args.encryption_password:
                    logger.error("Please provide --encryption-password if PDF is encrypted")
                sys.exit(1)

            applications = register_parser.parse_document(pdf_reader, page_range)
            total_pages = pdf_reader.get_pdf_metadata()['total_pages']
        finally:
            pdf_reader.close()

        count = len(applications)
        logger.info(
            f"Parsed {count} development {'application' if count == 1 else 'applications'} "
            f"from document: {pdf_path}"
        )

        if args.database:
            with RecordStore(Path(args.database)) as record_store:
                inserted = record_store.insert_all(applications)
            logger.info(f"Inserted {inserted} new application(s) into {args.database}")

        if args.save_json is not None:
            json_exporter = JSONExporter(pdf_path)
            output_filename = None if args.save_json == '' else args.save_json
            output_path = json_exporter.export(
                applications,
                output_filename=output_filename,
                total_pages=total_pages
            )
            logger.info(f"JSON exported to: {output_path}")

        logger.info("Complete.")

    except DARegisterException as e:
        logger.error(f"Development register error: {e}")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Validation Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Process interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
