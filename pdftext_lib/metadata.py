# --- pdftext_lib/metadata.py ---
"""
pdftext_lib/metadata.py: Descriptive document fields, independent of text
reconstruction. Failures here never fail an extraction.
"""
import logging

from .models import DocumentMetadata

log_metadata = logging.getLogger("pdftext.metadata")


def extract_metadata(handle) -> DocumentMetadata:
    """Returns the document's metadata, degrading to page-count-only on error."""
    page_count = handle.page_count
    try:
        info = handle.get_metadata()
    except Exception as e:
        log_metadata.warning("Could not extract PDF metadata: %s", e)
        return DocumentMetadata(page_count=page_count)

    fields = {k: v for k, v in (info or {}).items() if k in DocumentMetadata.__dataclass_fields__}
    fields.pop("page_count", None)
    metadata = DocumentMetadata(page_count=page_count, **fields)
    log_metadata.debug("Metadata: %s", metadata.to_dict())
    return metadata
