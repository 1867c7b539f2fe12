import pytest

from pdftext_lib.normalizer import normalize_whitespace, text_statistics

SAMPLES = [
    "",
    "   ",
    "plain",
    "a  b\t\tc",
    "a\n\n\n\nb",
    "a\n \n\t\n \nb",
    "  lead\ntrail  \n  both  ",
    "a\r\n\r\n\r\nb",
    "x \n\n\n y \n\n z",
    "\n\n\nstart",
    "end\n\n\n",
    " nbsp    text ",
    "tab\tand  space \t mix\n\n \n\n\n",
]


def test_collapses_horizontal_whitespace():
    assert normalize_whitespace("a   b \t c") == "a b c"


def test_collapses_excess_line_breaks_to_two():
    assert normalize_whitespace("a\n\n\n\n\nb") == "a\n\nb"


def test_keeps_single_paragraph_gap():
    assert normalize_whitespace("a\n\nb") == "a\n\nb"


def test_blank_lines_with_spaces_count_as_breaks():
    assert normalize_whitespace("a\n  \n \t \nb") == "a\n\nb"


def test_trims_each_line_and_the_whole_text():
    assert normalize_whitespace("  one  \n  two  \n") == "one\ntwo"


def test_empty_and_blank_input():
    assert normalize_whitespace("") == ""
    assert normalize_whitespace(" \n\t\n ") == ""


@pytest.mark.parametrize("text", SAMPLES)
def test_idempotent(text):
    once = normalize_whitespace(text)
    assert normalize_whitespace(once) == once


def test_text_statistics():
    stats = text_statistics("Hello world\nsecond line\n\nNew paragraph")
    assert stats == {"characters": 38, "words": 6, "lines": 4, "paragraphs": 2}


def test_text_statistics_empty():
    assert text_statistics("") == {"characters": 0, "words": 0, "lines": 1, "paragraphs": 0}
