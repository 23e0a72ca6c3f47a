"""PDF file reading, validation, decryption, and page decoding."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import fitz  # PyMuPDF

from exceptions import PDFDecryptionError, PDFReadError, PDFValidationError
from models import Operation, OperatorKind, PathOp, TextRun

logger = logging.getLogger(__name__)


class PDFReader:
    """Handle PDF file reading, validation, decryption, and page decoding."""

    def __init__(self, pdf_path: Path):
        """
        Initialize PDFReader with PDF file path.

        Args:
            pdf_path: Path to the PDF file
        """
        self.pdf_path = Path(pdf_path)
        self.pdf_document: Optional[fitz.Document] = None

    def validate_path(self) -> bool:
        """
        Validate PDF file path and existence.

        Returns:
            True if path is valid

        Raises:
            PDFValidationError: If path is invalid or file doesn't exist
        """
        if not self.pdf_path.exists():
            error_msg = f"PDF file not found: {self.pdf_path}"
            logger.error(error_msg)
            raise PDFValidationError(error_msg)

        if not self.pdf_path.is_file():
            error_msg = f"Path is not a file: {self.pdf_path}"
            logger.error(error_msg)
            raise PDFValidationError(error_msg)

        if self.pdf_path.suffix.lower() != '.pdf':
            error_msg = f"File is not a PDF: {self.pdf_path}"
            logger.error(error_msg)
            raise PDFValidationError(error_msg)

        logger.info(f"PDF path validated: {self.pdf_path}")
        return True

    def open_pdf(self) -> fitz.Document:
        """
        Open PDF file.

        Returns:
            Opened PyMuPDF Document object

        Raises:
            PDFReadError: If PDF cannot be opened
        """
        try:
            self.pdf_document = fitz.open(self.pdf_path)
            logger.info(f"PDF opened successfully: {self.pdf_path}")
            return self.pdf_document
        except Exception as e:
            error_msg = f"Failed to open PDF: {self.pdf_path}. Error: {str(e)}"
            logger.error(error_msg)
            raise PDFReadError(error_msg) from e

    def decrypt_pdf(self, password: str = None) -> bool:
        """
        Decrypt PDF if encrypted.

        Args:
            password: Optional password for encrypted PDF

        Returns:
            True if decryption successful or PDF is not encrypted

        Raises:
            PDFDecryptionError: If decryption fails
        """
        if self.pdf_document is None:
            raise PDFReadError("PDF document not opened. Call open_pdf() first.")

        if not self.pdf_document.needs_pass:
            logger.info("PDF is not encrypted")
            return True

        try:
            result = self.pdf_document.authenticate(password or "")
        except Exception as e:
            error_msg = f"Failed to decrypt PDF: {str(e)}"
            logger.error(error_msg)
            raise PDFDecryptionError(error_msg) from e

        if not result:
            error_msg = (
                "PDF decryption failed: Invalid password" if password
                else "PDF is encrypted and requires a password"
            )
            logger.error(error_msg)
            raise PDFDecryptionError(error_msg)

        logger.info("PDF decrypted successfully")
        return True

    def _get_page(self, page_num: int) -> fitz.Page:
        if self.pdf_document is None:
            raise PDFReadError("PDF document not opened. Call open_pdf() first.")

        if page_num < 0 or page_num >= len(self.pdf_document):
            raise ValueError(f"Invalid page number: {page_num}")

        return self.pdf_document[page_num]

    @staticmethod
    def _path_to_operations(path: Dict[str, Any], page_height: float) -> List[Operation]:
        """Re-express one filled PyMuPDF drawing path in PDF space (Y up)."""
        path_ops = []
        args = []

        def point(p):
            return [p.x, page_height - p.y]

        for item in path["items"]:
            kind = item[0]
            if kind == "re":
                rect = fitz.Rect(item[1])
                path_ops.append(PathOp.RECTANGLE)
                args.extend([rect.x0, page_height - rect.y1, rect.width, rect.height])
            elif kind == "l":
                path_ops.extend([PathOp.MOVE_TO, PathOp.LINE_TO])
                args.extend(point(item[1]) + point(item[2]))
            elif kind == "c":
                path_ops.extend([PathOp.MOVE_TO, PathOp.CURVE_TO])
                args.extend(point(item[1]) + point(item[2]) + point(item[3]) + point(item[4]))
            elif kind == "qu":
                quad = item[1]
                path_ops.extend([PathOp.MOVE_TO, PathOp.LINE_TO, PathOp.LINE_TO,
                                 PathOp.LINE_TO, PathOp.CLOSE_PATH])
                args.extend(point(quad.ul) + point(quad.ur) + point(quad.lr) + point(quad.ll))
            else:
                logger.debug(f"Ignoring unsupported drawing item: {kind}")

        fill = OperatorKind.EO_FILL if path.get("even_odd") else OperatorKind.FILL
        return [
            Operation(OperatorKind.CONSTRUCT_PATH, args=tuple(args), path_ops=tuple(path_ops)),
            Operation(fill),
        ]

    def extract_operations(self, page_num: int) -> List[Operation]:
        """
        Decode the filled vector paths of a page into an operator stream.

        PyMuPDF applies the page's transforms already, so the stream runs under
        the identity transform in PDF user space.

        Args:
            page_num: Page number (0-indexed)

        Returns:
            List of Operation objects

        Raises:
            PDFReadError: If the drawings cannot be read
        """
        page = self._get_page(page_num)
        try:
            page_height = page.rect.height
            operations = []
            for path in page.get_drawings():
                # Stroked-only paths never commit a rectangle.
                if "f" not in (path.get("type") or ""):
                    continue
                operations.extend(self._path_to_operations(path, page_height))
        except Exception as e:
            error_msg = f"Failed to extract drawings from page {page_num}: {str(e)}"
            logger.error(error_msg)
            raise PDFReadError(error_msg) from e

        logger.debug(f"Decoded {len(operations)} operations from page {page_num}")
        return operations

    def extract_text_runs(self, page_num: int) -> List[TextRun]:
        """
        Decode the text spans of a page.

        Each span's transform is rebuilt from its font size, writing direction
        and baseline origin, in PDF user space (Y up).

        Args:
            page_num: Page number (0-indexed)

        Returns:
            List of TextRun objects

        Raises:
            PDFReadError: If the text cannot be read
        """
        page = self._get_page(page_num)
        try:
            page_height = page.rect.height
            text_runs = []
            for block in page.get_text("dict")["blocks"]:
                if block.get("type") != 0:
                    continue
                for line in block["lines"]:
                    cos, sin = line.get("dir", (1.0, 0.0))
                    for span in line["spans"]:
                        size = span["size"]
                        origin_x, origin_y = span["origin"]
                        transform = (
                            size * cos,
                            -size * sin,
                            size * sin,
                            size * cos,
                            origin_x,
                            page_height - origin_y,
                        )
                        width = fitz.Rect(span["bbox"]).width
                        text_runs.append(TextRun(text=span["text"], transform=transform, width=width))
        except Exception as e:
            error_msg = f"Failed to extract text from page {page_num}: {str(e)}"
            logger.error(error_msg)
            raise PDFReadError(error_msg) from e

        logger.debug(f"Decoded {len(text_runs)} text runs from page {page_num}")
        return text_runs

    def extract_page(self, page_num: int) -> Tuple[List[Operation], List[TextRun]]:
        """Decode a page into its operator stream and text runs."""
        return self.extract_operations(page_num), self.extract_text_runs(page_num)

    def get_pdf_metadata(self) -> Dict[str, Any]:
        """
        Get PDF metadata.

        Returns:
            Dictionary with the document's page count under 'total_pages'

        Raises:
            PDFReadError: If PDF is not opened
        """
        if self.pdf_document is None:
            raise PDFReadError("PDF document not opened. Call open_pdf() first.")

        metadata = {
            'total_pages': len(self.pdf_document),
        }
        return metadata

    def close(self) -> None:
        """Close the PDF document."""
        if self.pdf_document is not None:
            self.pdf_document.close()
            self.pdf_document = None
            logger.info("PDF document closed")
