"""Custom exception classes for development register parsing errors."""

from __future__ import annotations


class DARegisterException(Exception):
    """Base exception for development register parsing errors."""
    pass


class PDFValidationError(DARegisterException):
    """Raised when PDF path validation fails."""
    pass


class PDFReadError(DARegisterException):
    """Raised when PDF cannot be opened or a page cannot be decoded."""
    pass


class PDFDecryptionError(DARegisterException):
    """Raised when PDF decryption fails."""
    pass


class GazetteerError(DARegisterException):
    """Raised when a gazetteer dataset is missing or malformed."""
    pass


class StructuralFailure(DARegisterException):
    """Raised when a page has no usable table structure.

    The whole page is skipped; the run continues with the next page.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class NoGridError(StructuralFailure):
    """Raised when too few grid lines exist to form any cell."""
    pass


class MissingHeaderError(StructuralFailure):
    """Raised when a required column heading cannot be found."""

    def __init__(self, column):
        super().__init__(f'the "{column.title}" column heading was not found')
        self.column = column


class RowRejection(DARegisterException):
    """Raised when a single table row cannot produce a record."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class MissingIdentifier(RowRejection):
    """Raised for rows without a well-formed application number (eg. the heading row)."""
    pass


class JSONExportError(DARegisterException):
    """Raised when JSON export fails."""
    pass


class RecordStoreError(DARegisterException):
    """Raised when the record database cannot be opened or written."""
    pass
