# --- pdftext_lib/errors.py ---
"""
pdftext_lib/errors.py: Exception taxonomy for text extraction.

Only ValidationError and DocumentLoadError ever escape the public API.
PageExtractionError and MetadataError are absorbed where they occur.
"""


class PdfTextError(Exception):
    """Base class for all extraction errors."""


class ValidationError(PdfTextError):
    """The file was rejected before any parsing was attempted."""

    def __init__(self, reason: str, filename: str | None = None):
        self.reason = reason
        self.filename = filename
        super().__init__(f"{filename}: {reason}" if filename else reason)


class DocumentLoadError(PdfTextError):
    """The PDF bytes could not be opened or parsed at all."""

    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"PDF processing failed: {cause}")


class PageExtractionError(PdfTextError):
    """A single page could not be fetched or reconstructed."""

    def __init__(self, page_number: int, cause):
        self.page_number = page_number
        self.cause = cause
        super().__init__(f"Error processing page {page_number}: {cause}")


class MetadataError(PdfTextError):
    """The document info dictionary could not be read."""
