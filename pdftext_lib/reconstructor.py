# --- pdftext_lib/reconstructor.py ---
"""
pdftext_lib/reconstructor.py: Contains the PageReconstructor, which turns one
page's stream-ordered fragments into readable text.
"""
import logging

from .models import ExtractionOptions, TextFragment
from .normalizer import normalize_whitespace

log_reconstruct = logging.getLogger("pdftext.reconstruct")

# Document-space units. Fixed, not scaled by font size.
LINE_BREAK_THRESHOLD = 5
COLUMN_GAP_THRESHOLD = 20


class PageReconstructor:
    """
    Rebuilds line breaks and word spacing from position deltas between
    consecutive fragments. Fragments are scanned once, in the order the source
    produced them; coordinates are never sorted.
    """

    def __init__(self, options: ExtractionOptions | None = None):
        self.options = options or ExtractionOptions()

    def reconstruct(self, fragments: list[TextFragment]) -> str:
        """Returns the normalized text of a page, or "" for an empty page."""
        if not fragments:
            return ""

        parts, last_y, last_x = [], None, None
        breaks = gaps = joins = 0

        for i, fragment in enumerate(fragments):
            if fragment.is_blank:
                continue

            current_x, current_y = fragment.origin_x, fragment.origin_y
            text = fragment.content
            same_line = last_y is not None and abs(current_y - last_y) <= LINE_BREAK_THRESHOLD

            if self.options.preserve_formatting and last_y is not None:
                if not same_line:
                    parts.append("\n")
                    breaks += 1
                elif current_x - last_x > COLUMN_GAP_THRESHOLD:
                    parts.append(" ")
                    gaps += 1

            if self.options.combine_text_items and i > 0 and same_line:
                ends_with_space = bool(parts) and parts[-1].endswith(" ")
                if not ends_with_space and not text.startswith(" "):
                    parts.append(" ")
                    joins += 1

            parts.append(text)
            last_y, last_x = current_y, fragment.trailing_edge

        log_reconstruct.debug(
            "Reconstructed %d fragments: %d line breaks, %d gap spaces, %d joins.",
            len(fragments),
            breaks,
            gaps,
            joins,
        )
        return normalize_whitespace("".join(parts))


def reconstruct_page(fragments: list[TextFragment], options: ExtractionOptions | None = None) -> str:
    """Convenience wrapper around PageReconstructor.reconstruct."""
    return PageReconstructor(options).reconstruct(fragments)
