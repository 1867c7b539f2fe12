import pytest

from pdftext_lib.export import EXPORT_FORMATS, export_text


def test_txt_is_unchanged():
    assert export_text("a <b>\nc", "doc", "txt") == "a <b>\nc"


def test_html_escapes_text_and_title():
    out = export_text("x < y & z", "Q&A", "html")
    assert out.startswith("<!DOCTYPE html>")
    assert "<title>Q&amp;A</title>" in out
    assert "<h1>Q&amp;A</h1>" in out
    assert "<pre>x &lt; y &amp; z</pre>" in out


def test_doc_starts_with_bom():
    out = export_text("text", "report", "doc")
    assert out.startswith("\ufeff<html>")
    assert "<h1>report</h1>" in out


def test_unknown_format():
    with pytest.raises(ValueError, match="Unknown export format"):
        export_text("text", "t", "pdf")


def test_formats_table():
    assert EXPORT_FORMATS["html"]["mime_type"] == "text/html"
    assert {f["extension"] for f in EXPORT_FORMATS.values()} == {"txt", "html", "doc"}
