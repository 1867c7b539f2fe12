# --- pdftext_lib/api.py ---
"""
pdftext_lib/api.py: Public entry points of the extraction library.
"""
import dataclasses
import logging
import time

from .assembler import DocumentAssembler
from .errors import DocumentLoadError, ValidationError
from .models import DocumentResult, ExtractedFile, ExtractionOptions, PdfFile
from .progress import BatchProgress, ProgressReporter
from .source import PdfFragmentSource
from .validation import ensure_valid, select_pdf_files, validate_batch, validate_file

log = logging.getLogger("pdftext.api")


def validate(descriptor):
    """Runs the validation gate on a single file descriptor."""
    return validate_file(descriptor)


def extract_detailed(
    data: bytes,
    options: ExtractionOptions | None = None,
    source: PdfFragmentSource | None = None,
) -> DocumentResult:
    """
    Extracts text, per-page results and (optionally) metadata from PDF bytes.
    Raises DocumentLoadError if the document cannot be opened at all; failing
    pages are replaced by sentinel text.
    """
    options = options or ExtractionOptions()
    source = source or PdfFragmentSource()
    handle = source.open_document(data)
    result = DocumentAssembler(options).assemble(handle)
    log.info(
        "Extracted %d characters from %d pages.", len(result.text), result.page_count
    )
    return result


def extract_text(
    data: bytes,
    options: ExtractionOptions | None = None,
    source: PdfFragmentSource | None = None,
) -> str:
    """Like extract_detailed, but returns only the document text."""
    try:
        return extract_detailed(data, options, source).text
    except DocumentLoadError as e:
        log.error("PDF text extraction failed: %s", e)
        raise


def extract_detailed_with_progress(
    pdf_file: PdfFile,
    on_progress=None,
    options: ExtractionOptions | None = None,
    source: PdfFragmentSource | None = None,
) -> DocumentResult:
    """
    Validates and extracts a file into a DocumentResult, reporting
    `(percent, status)` to `on_progress` at every stage. The last value
    reported on success is 100.
    """
    options = options or ExtractionOptions()
    source = source or PdfFragmentSource()
    progress = ProgressReporter(on_progress)

    progress.validating()
    ensure_valid(pdf_file)

    progress.loading()
    data = pdf_file.data

    progress.parsing()
    handle = source.open_document(data)

    progress.start_pages(handle.page_count)
    result = DocumentAssembler(options).assemble(handle, on_page=progress.page_done)

    progress.finalizing()
    log.info(
        "Extracted %d characters from %d pages of '%s'.",
        len(result.text),
        result.page_count,
        pdf_file.name,
    )
    progress.completed()
    return result


def extract_with_progress(
    pdf_file: PdfFile,
    on_progress=None,
    options: ExtractionOptions | None = None,
    source: PdfFragmentSource | None = None,
) -> str:
    """Like extract_detailed_with_progress, but returns only the text."""
    options = options or ExtractionOptions()
    # Metadata is not part of the returned string, so it is not fetched here.
    options = dataclasses.replace(options, include_metadata=False)
    return extract_detailed_with_progress(pdf_file, on_progress, options, source).text


def extract_batch(
    files: list[PdfFile],
    on_progress=None,
    options: ExtractionOptions | None = None,
    source: PdfFragmentSource | None = None,
) -> list[ExtractedFile]:
    """
    Extracts a batch of files strictly one after the other. Files not typed
    as PDF are dropped first; the batch limits and every remaining file are
    validated before the first extraction starts, and the first file that
    fails aborts the batch.
    """
    files = select_pdf_files(files)
    check = validate_batch(files)
    if not check.ok:
        raise ValidationError(check.reason)
    for pdf_file in files:
        ensure_valid(pdf_file)

    results = []
    for index, pdf_file in enumerate(files):
        start = time.monotonic()
        sink = BatchProgress(on_progress, index, len(files), pdf_file.name)
        text = extract_with_progress(pdf_file, sink, options, source)
        elapsed = time.monotonic() - start
        log.info("Processed '%s' in %.2fs.", pdf_file.name, elapsed)
        results.append(ExtractedFile(pdf_file.name, text, elapsed))
    return results
