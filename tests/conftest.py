import pytest

from pdftext_lib.models import TextFragment


def frag(content, x, y, width=10.0):
    return TextFragment(content, float(x), float(y), float(width))


class FakeHandle:
    """Stands in for PdfDocumentHandle; a page given as an exception raises it."""

    def __init__(self, pages, metadata=None, metadata_error=None):
        self.pages = pages
        self.metadata = metadata or {}
        self.metadata_error = metadata_error
        self.requested = []

    @property
    def page_count(self):
        return len(self.pages)

    def get_page(self, page_number):
        self.requested.append(page_number)
        page = self.pages[page_number - 1]
        if isinstance(page, Exception):
            raise page
        return page

    def get_metadata(self):
        if self.metadata_error:
            raise self.metadata_error
        return self.metadata


class FakeSource:
    def __init__(self, handle):
        self.handle = handle
        self.opened = 0

    def open_document(self, data):
        self.opened += 1
        return self.handle


def _build_pdf(page_streams, info=None):
    """Assembles a minimal, valid PDF with Helvetica text and a correct xref."""
    objects = []
    page_ids = [3 + 2 * i for i in range(len(page_streams))]
    font_id = 3 + 2 * len(page_streams)
    info_id = font_id + 1

    objects.append(b"<< /Type /Catalog /Pages 2 0 R >>")
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)
    objects.append(f"<< /Type /Pages /Kids [{kids}] /Count {len(page_ids)} >>".encode())
    for pid, stream in zip(page_ids, page_streams):
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 {font_id} 0 R >> >> /Contents {pid + 1} 0 R >>"
            ).encode()
        )
        data = stream.encode("latin-1")
        objects.append(
            f"<< /Length {len(data)} >>\nstream\n".encode() + data + b"\nendstream"
        )
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")
    info_entries = " ".join(f"/{k} ({v})" for k, v in (info or {}).items())
    objects.append(f"<< {info_entries} >>".encode())

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"
    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for off in offsets:
        out += f"{off:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R /Info {info_id} 0 R >>\n"
        f"startxref\n{xref_at}\n%%EOF\n"
    ).encode()
    return bytes(out)


@pytest.fixture
def sample_pdf_bytes():
    return _build_pdf(
        [
            "BT /F1 12 Tf 72 700 Td (Hello) Tj ET\nBT /F1 12 Tf 72 680 Td (World) Tj ET",
            "BT /F1 12 Tf 72 700 Td (Second page) Tj ET",
        ],
        info={"Title": "Test Document", "Author": "Jane Roe"},
    )


@pytest.fixture
def sample_pdf_path(tmp_path, sample_pdf_bytes):
    path = tmp_path / "sample.pdf"
    path.write_bytes(sample_pdf_bytes)
    return path
