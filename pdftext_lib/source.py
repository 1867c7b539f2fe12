# --- pdftext_lib/source.py ---
"""
pdftext_lib/source.py: The positioned-fragment source, built on pdfminer.six.

PdfFragmentSource opens PDF bytes and hands out, per page, the text fragments
in content-stream order. Layout analysis is deliberately disabled so that the
characters come out in the order they are painted, not in a guessed reading
order.
"""
import logging
from io import BytesIO

from pdfminer.converter import PDFPageAggregator
from pdfminer.layout import LTChar, LTFigure
from pdfminer.pdfdocument import PDFDocument
from pdfminer.pdfinterp import PDFPageInterpreter, PDFResourceManager
from pdfminer.pdfpage import PDFPage
from pdfminer.pdfparser import PDFParser
from pdfminer.pdftypes import resolve1
from pdfminer.psparser import PSLiteral
from pdfminer.utils import decode_text

from .errors import DocumentLoadError, MetadataError
from .models import TextFragment

log_source = logging.getLogger("pdftext.source")

INFO_FIELDS = {
    "title": "Title",
    "author": "Author",
    "subject": "Subject",
    "creator": "Creator",
    "producer": "Producer",
    "created_at": "CreationDate",
    "modified_at": "ModDate",
}


class PdfFragmentSource:
    """
    Factory for PdfDocumentHandle objects.
    Configured once at construction; the settings are read-only afterwards.
    Args:
        password (str): Password for encrypted documents.
        word_margin (float): Largest gap between two glyphs, relative to the
            glyph size, that still keeps them in the same fragment.
        caching (bool): Let pdfminer cache resolved objects.
    """

    def __init__(self, password="", word_margin=0.1, caching=True):
        self._password = password or ""
        self._word_margin = float(word_margin)
        self._caching = bool(caching)

    @property
    def password(self):
        return self._password

    @property
    def word_margin(self):
        return self._word_margin

    @property
    def caching(self):
        return self._caching

    def open_document(self, data: bytes) -> "PdfDocumentHandle":
        """Parses the document structure. Raises DocumentLoadError on any failure."""
        if not data:
            raise DocumentLoadError("document is empty")
        try:
            parser = PDFParser(BytesIO(data))
            document = PDFDocument(parser, password=self._password, caching=self._caching)
            pages = list(PDFPage.create_pages(document))
        except Exception as e:
            log_source.debug("pdfminer could not open document: %r", e)
            raise DocumentLoadError(e) from e
        log_source.info("Opened PDF document with %d pages.", len(pages))
        return PdfDocumentHandle(document, pages, self._word_margin, self._caching)


class PdfDocumentHandle:
    """An opened document: page count, per-page fragments and metadata."""

    def __init__(self, document, pages, word_margin=0.1, caching=True):
        self.document = document
        self.pages = pages
        self.word_margin = word_margin
        self.rsrcmgr = PDFResourceManager(caching=caching)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def get_page(self, page_number: int) -> list[TextFragment]:
        """Returns the fragments of a 1-based page in content-stream order."""
        if not 1 <= page_number <= len(self.pages):
            raise IndexError(f"Page {page_number} out of range (1-{len(self.pages)})")
        device = PDFPageAggregator(self.rsrcmgr, laparams=None)
        interpreter = PDFPageInterpreter(self.rsrcmgr, device)
        interpreter.process_page(self.pages[page_number - 1])
        layout = device.get_result()
        chars = list(self._iter_chars(layout))
        fragments = self._group_chars(chars)
        log_source.debug(
            "Page %d: %d glyphs grouped into %d fragments.",
            page_number,
            len(chars),
            len(fragments),
        )
        return fragments

    def get_metadata(self) -> dict:
        """Reads the info dictionary. Raises MetadataError if it cannot be read."""
        try:
            info = {}
            for entry in self.document.info or []:
                info.update(resolve1(entry) or {})
            return {key: self._decode_info_value(info.get(name)) for key, name in INFO_FIELDS.items()}
        except Exception as e:
            raise MetadataError(f"Could not read PDF metadata: {e}") from e

    def _iter_chars(self, obj):
        """Yields LTChar objects in painting order, descending into figures."""
        for child in obj:
            if isinstance(child, LTChar):
                yield child
            elif isinstance(child, LTFigure):
                yield from self._iter_chars(child)

    def _group_chars(self, chars):
        """Merges consecutive glyphs sharing font and baseline into fragments."""
        fragments, run = [], []
        for char in chars:
            if run and not self._continues_run(run[-1], char):
                fragments.append(self._run_to_fragment(run))
                run = []
            run.append(char)
        if run:
            fragments.append(self._run_to_fragment(run))
        return fragments

    def _continues_run(self, prev, char):
        if prev.fontname != char.fontname or abs(prev.size - char.size) > 0.01:
            return False
        if abs(prev.matrix[5] - char.matrix[5]) > 0.01 * max(prev.size, 1):
            return False
        gap = char.x0 - prev.x1
        margin = self.word_margin * max(prev.width, prev.height)
        return -margin <= gap <= margin

    def _run_to_fragment(self, run):
        first, last = run[0], run[-1]
        return TextFragment.from_raw(
            "".join(c.get_text() for c in run),
            first.matrix[4],
            first.matrix[5],
            max(last.x1 - first.x0, 0.0),
        )

    @staticmethod
    def _decode_info_value(value):
        value = resolve1(value)
        if value is None:
            return None
        if isinstance(value, PSLiteral):
            value = value.name
        if isinstance(value, bytes):
            value = decode_text(value)
        text = str(value).strip().strip("\x00")
        return text or None
