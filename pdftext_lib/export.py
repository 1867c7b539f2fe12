# --- pdftext_lib/export.py ---
"""
pdftext_lib/export.py: Wraps extracted text into downloadable file formats.
"""
import html
import logging

log_export = logging.getLogger("pdftext.export")

EXPORT_FORMATS = {
    "txt": {"name": "Plain Text", "extension": "txt", "mime_type": "text/plain"},
    "html": {"name": "HTML Document", "extension": "html", "mime_type": "text/html"},
    "doc": {"name": "Word Document", "extension": "doc", "mime_type": "application/msword"},
}

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        body {{
            font-family: Arial, sans-serif;
            line-height: 1.6;
            max-width: 800px;
            margin: 0 auto;
            padding: 20px;
            color: #333;
        }}
        pre {{
            white-space: pre-wrap;
            word-wrap: break-word;
        }}
    </style>
</head>
<body>
    <h1>{title}</h1>
    <pre>{body}</pre>
</body>
</html>"""

DOC_TEMPLATE = """<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<h1>{title}</h1>
<pre style="white-space: pre-wrap; font-family: Arial, sans-serif;">{body}</pre>
</body>
</html>"""


def export_text(text: str, title: str, fmt: str = "txt") -> str:
    """Returns `text` serialized as `fmt` ('txt', 'html' or 'doc')."""
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format: {fmt}")
    log_export.debug("Exporting %d characters as %s.", len(text), fmt)
    if fmt == "txt":
        return text
    title, body = html.escape(title), html.escape(text)
    if fmt == "html":
        return HTML_TEMPLATE.format(title=title, body=body)
    # Word picks the encoding up from the BOM
    return "\ufeff" + DOC_TEMPLATE.format(title=title, body=body)
