# --- pdftext_lib/validation.py ---
"""
pdftext_lib/validation.py: Pre-flight checks run before any parsing.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from .errors import ValidationError
from .models import PDF_MIME_TYPE

log_validate = logging.getLogger("pdftext.validate")

MAX_FILE_SIZE = 50 * 1024 * 1024
MAX_BATCH_FILES = 10


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    reason: Optional[str] = None


VALID = ValidationResult(True)


def validate_file(descriptor) -> ValidationResult:
    """Checks a file descriptor (anything with `mime_type` and `size`).
    Rules are checked in order and the first failure wins: presence, PDF type,
    size ceiling, non-empty.
    """
    if descriptor is None:
        return ValidationResult(False, "No file provided")
    if descriptor.mime_type != PDF_MIME_TYPE:
        return ValidationResult(False, "File must be a PDF document")
    if descriptor.size > MAX_FILE_SIZE:
        return ValidationResult(False, "File size must be less than 50MB")
    if descriptor.size == 0:
        return ValidationResult(False, "File appears to be empty")
    return VALID


def ensure_valid(descriptor):
    """Raises ValidationError naming the file and the violated rule."""
    result = validate_file(descriptor)
    if not result.ok:
        name = getattr(descriptor, "name", None)
        log_validate.info("Rejected %s: %s", name or "file", result.reason)
        raise ValidationError(result.reason, name)


def validate_batch(files) -> ValidationResult:
    """Checks the batch as a whole, after non-PDF files were dropped by
    select_pdf_files and before any per-file validation.
    """
    if not files:
        return ValidationResult(False, "Please select valid PDF files only.")
    if len(files) > MAX_BATCH_FILES:
        return ValidationResult(False, f"Maximum {MAX_BATCH_FILES} files allowed at once.")
    return VALID


def select_pdf_files(files):
    """Keeps only the files typed as PDF; everything else is dropped from the batch."""
    selected = []
    for f in files or []:
        if getattr(f, "mime_type", None) == PDF_MIME_TYPE:
            selected.append(f)
        else:
            log_validate.info("Skipping non-PDF file: %s", getattr(f, "name", f))
    return selected
