# --- pdftext_lib/normalizer.py ---
"""
pdftext_lib/normalizer.py: Whitespace cleanup for reconstructed text.
"""
import re

_HORIZONTAL_RUN = re.compile(r"[ \t]+")
_EXCESS_BREAKS = re.compile(r"\n\s*\n\s*\n")
_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")


def normalize_whitespace(text: str) -> str:
    """Canonicalizes whitespace. Applying it twice gives the same result as once.

    1. Runs of spaces/tabs become one space.
    2. Three or more line breaks (whitespace between allowed) become two.
    3. Every line is stripped.
    4. The whole string is stripped.
    """
    if not text:
        return ""
    text = _HORIZONTAL_RUN.sub(" ", text)
    text = _EXCESS_BREAKS.sub("\n\n", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    return text.strip()


def text_statistics(text: str) -> dict:
    """Counts characters, words, lines and paragraphs of a text."""
    return {
        "characters": len(text),
        "words": len(text.split()),
        "lines": len(text.split("\n")),
        "paragraphs": sum(1 for p in _PARAGRAPH_SPLIT.split(text) if p.strip()),
    }
