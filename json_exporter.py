"""Export parsed development applications to JSON format."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from exceptions import JSONExportError
from models import DevelopmentApplication

logger = logging.getLogger(__name__)


class JSONExporter:
    """Export development applications to JSON format."""

    def __init__(self, pdf_path: Path):
        """
        Initialize JSONExporter.

        Args:
            pdf_path: Path to the PDF file the applications were parsed from
        """
        self.pdf_path = Path(pdf_path)
        self.pdf_name = self.pdf_path.name

    def _get_output_path(self, filename: Optional[str] = None) -> Path:
        """
        Get output path for JSON file.

        Args:
            filename: Optional custom filename. If None, uses default naming.

        Returns:
            Path to output JSON file
        """
        if filename is None:
            # Default: {pdfname}_applications.json
            filename = f"{self.pdf_path.stem}_applications.json"

        if not filename.endswith('.json'):
            filename = f"{filename}.json"

        # Output in PDF's parent directory
        return self.pdf_path.parent / filename

    def _format_data(
        self,
        applications: List[DevelopmentApplication],
        total_pages: Optional[int] = None
    ) -> Dict[str, Any]:
        return {
            "pdf_name": self.pdf_name,
            "total_pages": total_pages,
            "development_applications": [asdict(application) for application in applications],
        }

    def export(
        self,
        applications: List[DevelopmentApplication],
        output_filename: Optional[str] = None,
        total_pages: Optional[int] = None
    ) -> Path:
        """
        Export development applications to a JSON file.

        Args:
            applications: List of DevelopmentApplication objects
            output_filename: Optional custom output filename
            total_pages: Optional total page count from PDF

        Returns:
            Path to the exported JSON file

        Raises:
            JSONExportError: If export fails
        """
        try:
            output_path = self._get_output_path(output_filename)
            data = self._format_data(applications, total_pages=total_pages)

            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            logger.info(f"JSON exported successfully: {output_path}")
            return output_path

        except Exception as e:
            error_msg = f"Failed to export JSON: {str(e)}"
            logger.error(error_msg)
            raise JSONExportError(error_msg) from e
