import pytest

from conftest import FakeHandle, frag
from pdftext_lib.assembler import DocumentAssembler, page_marker
from pdftext_lib.errors import MetadataError
from pdftext_lib.models import ExtractionOptions


def test_page_marker_format():
    assert page_marker(3) == "\n\n--- Page 3 ---\n\n"


def test_single_page_has_no_marker():
    handle = FakeHandle([[frag("Only page", 0, 100, 50)]])
    result = DocumentAssembler().assemble(handle)
    assert result.text == "Only page"
    assert [p.page_number for p in result.pages] == [1]
    assert result.pages[0].character_count == len("Only page")


def test_pages_are_joined_with_markers():
    handle = FakeHandle(
        [
            [frag("One", 0, 100, 20)],
            [frag("Two", 0, 100, 20)],
            [frag("Three", 0, 100, 30)],
        ]
    )
    result = DocumentAssembler().assemble(handle)
    assert result.text == "One\n\n--- Page 2 ---\n\nTwo\n\n--- Page 3 ---\n\nThree"


def test_blank_page_gets_no_marker():
    handle = FakeHandle([[frag("One", 0, 100, 20)], [], [frag("Three", 0, 100, 30)]])
    result = DocumentAssembler().assemble(handle)
    assert result.text == "One\n\n--- Page 3 ---\n\nThree"
    assert result.pages[1].text == ""
    assert result.pages[1].character_count == 0


def test_failed_page_is_replaced_by_sentinel():
    handle = FakeHandle(
        [
            [frag("First", 0, 100, 30)],
            RuntimeError("broken content stream"),
            [frag("Third", 0, 100, 30)],
        ]
    )
    result = DocumentAssembler().assemble(handle)

    assert result.pages[1].text == "[Error extracting text from page 2]"
    assert result.pages[1].character_count == 0
    assert result.pages[0].text == "First"
    assert result.pages[2].text == "Third"
    assert "--- Page 2 ---" not in result.text
    assert result.text == "First\n\n--- Page 3 ---\n\nThird"


def test_failure_inside_reconstruction_is_contained():
    handle = FakeHandle([[object()], [frag("Fine", 0, 100, 20)]])
    result = DocumentAssembler().assemble(handle)
    assert result.pages[0].text == "[Error extracting text from page 1]"
    assert result.pages[1].text == "Fine"
    # the marker only depends on the page number, not on earlier pages succeeding
    assert result.text == "--- Page 2 ---\n\nFine"


def test_failed_page_logs_a_warning(caplog):
    handle = FakeHandle([ValueError("bad font")])
    with caplog.at_level("WARNING", logger="pdftext.assemble"):
        DocumentAssembler().assemble(handle)
    assert "page 1" in caplog.text
    assert "bad font" in caplog.text


@pytest.mark.parametrize("page_count", [0, 1, 2, 5])
def test_one_result_per_page(page_count):
    pages = [[frag(f"p{i}", 0, 100)] for i in range(page_count)]
    if page_count > 1:
        pages[1] = IOError("unreadable")
    result = DocumentAssembler().assemble(FakeHandle(pages))
    assert len(result.pages) == page_count
    assert [p.page_number for p in result.pages] == list(range(1, page_count + 1))


def test_pages_are_processed_in_ascending_order():
    handle = FakeHandle([[frag(str(i), 0, 100)] for i in range(4)])
    DocumentAssembler().assemble(handle)
    assert handle.requested == [1, 2, 3, 4]


def test_on_page_is_called_for_every_page_including_failures():
    calls = []
    handle = FakeHandle([[frag("a", 0, 100)], KeyError("x"), []])
    DocumentAssembler().assemble(handle, on_page=lambda n, total: calls.append((n, total)))
    assert calls == [(1, 3), (2, 3), (3, 3)]


def test_metadata_is_merged_with_page_count():
    handle = FakeHandle(
        [[frag("a", 0, 100)]],
        metadata={"title": "Report", "author": None, "producer": "Writer"},
    )
    result = DocumentAssembler().assemble(handle)
    assert result.metadata.page_count == 1
    assert result.metadata.title == "Report"
    assert result.metadata.author is None
    assert result.metadata.to_dict() == {"page_count": 1, "title": "Report", "producer": "Writer"}


def test_metadata_failure_degrades_to_page_count():
    handle = FakeHandle([[], []], metadata_error=MetadataError("no info"))
    result = DocumentAssembler().assemble(handle)
    assert result.metadata.to_dict() == {"page_count": 2}


def test_metadata_not_requested():
    handle = FakeHandle([[]], metadata={"title": "ignored"})
    result = DocumentAssembler(ExtractionOptions(include_metadata=False)).assemble(handle)
    assert result.metadata is None
