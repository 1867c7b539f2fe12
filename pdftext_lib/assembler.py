# --- pdftext_lib/assembler.py ---
"""
pdftext_lib/assembler.py: Contains the DocumentAssembler, the page loop that
joins per-page text into the final document string.
"""
import logging

from .errors import PageExtractionError
from .metadata import extract_metadata
from .models import DocumentResult, ExtractionOptions, PageResult
from .reconstructor import PageReconstructor

log_assemble = logging.getLogger("pdftext.assemble")


def page_marker(page_number: int) -> str:
    """The separator placed before the text of every page after the first."""
    return f"\n\n--- Page {page_number} ---\n\n"


class DocumentAssembler:
    """
    Walks the pages of an opened document in ascending order and builds a
    DocumentResult. A failing page is replaced by a sentinel text and never
    aborts the document.
    """

    def __init__(self, options: ExtractionOptions | None = None):
        self.options = options or ExtractionOptions()
        self.reconstructor = PageReconstructor(self.options)

    def assemble(self, handle, on_page=None) -> DocumentResult:
        """Runs the page loop over `handle`.
        Args:
            handle: An opened document exposing `page_count` and `get_page(n)`.
            on_page: Optional callable `(page_number, page_count)` invoked after
                every page, including failed ones.
        """
        page_count = handle.page_count
        metadata = extract_metadata(handle) if self.options.include_metadata else None

        pages, full_text, failed = [], [], 0
        for page_number in range(1, page_count + 1):
            try:
                page_text = self._extract_page(handle, page_number)
            except PageExtractionError as e:
                log_assemble.warning("%s", e)
                pages.append(PageResult.failed(page_number))
                failed += 1
            else:
                pages.append(PageResult.from_text(page_number, page_text))
                if page_number > 1 and page_text.strip():
                    full_text.append(page_marker(page_number))
                full_text.append(page_text)
                log_assemble.debug("Page %d: %d characters.", page_number, len(page_text))
            if on_page:
                on_page(page_number, page_count)

        if failed:
            log_assemble.info("%d of %d pages could not be extracted.", failed, page_count)
        return DocumentResult(text="".join(full_text).strip(), pages=pages, metadata=metadata)

    def _extract_page(self, handle, page_number):
        try:
            fragments = handle.get_page(page_number)
            return self.reconstructor.reconstruct(fragments)
        except Exception as e:
            raise PageExtractionError(page_number, e) from e
