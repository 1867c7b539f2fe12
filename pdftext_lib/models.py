# --- pdftext_lib/models.py ---
"""
pdftext_lib/models.py: Value types passed between the extraction stages.

All of them are created fresh for every extraction call.
"""
import math
import mimetypes
import os
from dataclasses import asdict, dataclass, field
from typing import Optional

PDF_MIME_TYPE = "application/pdf"


@dataclass(frozen=True)
class TextFragment:
    """A positioned run of text as it appears in a page's content stream."""

    content: str
    origin_x: float
    origin_y: float
    width: float = 0.0

    @classmethod
    def from_raw(cls, content, origin_x, origin_y, width=None):
        """Builds a fragment from untrusted source values, checking their types."""
        if not isinstance(content, str):
            raise ValueError(f"Fragment content must be a string, got {type(content).__name__}")
        coords = []
        for name, value in (("origin_x", origin_x), ("origin_y", origin_y), ("width", width)):
            if value is None and name == "width":
                value = 0.0
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Fragment {name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"Fragment {name} must be finite, got {value!r}")
            coords.append(float(value))
        return cls(content, *coords)

    @property
    def trailing_edge(self) -> float:
        return self.origin_x + self.width

    @property
    def is_blank(self) -> bool:
        return not self.content.strip()


@dataclass(frozen=True)
class ExtractionOptions:
    """Switches for a single extraction call."""

    preserve_formatting: bool = True
    include_metadata: bool = True
    combine_text_items: bool = True


@dataclass
class PageResult:
    """The reconstructed text of one page."""

    page_number: int
    text: str
    character_count: int

    @classmethod
    def from_text(cls, page_number: int, text: str):
        return cls(page_number, text, len(text))

    @classmethod
    def failed(cls, page_number: int):
        """Sentinel result for a page whose extraction raised."""
        return cls(page_number, f"[Error extracting text from page {page_number}]", 0)


@dataclass
class DocumentMetadata:
    """Descriptive fields from the PDF info dictionary."""

    page_count: int
    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    creator: Optional[str] = None
    producer: Optional[str] = None
    created_at: Optional[str] = None
    modified_at: Optional[str] = None

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class DocumentResult:
    """Full result of an extraction: text, per-page results and metadata."""

    text: str
    pages: list[PageResult] = field(default_factory=list)
    metadata: Optional[DocumentMetadata] = None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "metadata": self.metadata.to_dict() if self.metadata else None,
            "pages": [asdict(p) for p in self.pages],
        }


@dataclass
class PdfFile:
    """A candidate file as handed over by the caller: name, declared type, bytes."""

    name: str
    mime_type: Optional[str]
    data: bytes = b""

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: str):
        """Reads a file from disk, guessing its MIME type from the file name."""
        if not os.path.exists(path):
            raise FileNotFoundError(f"PDF file not found: {path}")
        with open(path, "rb") as f:
            data = f.read()
        mime_type, _ = mimetypes.guess_type(path)
        return cls(os.path.basename(path), mime_type, data)


@dataclass
class ExtractedFile:
    """One processed file of a batch."""

    name: str
    text: str
    processing_time: float
