"""Text reconstruction tests — pure functions, no I/O."""
from __future__ import annotations

from datetime import datetime, timezone

from read_ocr.ocr.models import Line, PageRecognitionResult, RecognitionDocument
from read_ocr.ocr.text import (
    build_output_files,
    output_base_name,
    reconstruct_document,
    reconstruct_page,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _line(top: float, text: str, left: float = 0.5) -> Line:
    return Line(boundingBox=[left, top, 8.0, top, 8.0, top + 0.1, left, top + 0.1], text=text)


def _page(number: int, *lines: Line) -> PageRecognitionResult:
    return PageRecognitionResult(page=number, lines=list(lines))


# ---------------------------------------------------------------------------
# reconstruct_page
# ---------------------------------------------------------------------------

def test_reconstruct_page_example() -> None:
    lines = [_line(0.10, "Hello"), _line(0.12, "World"), _line(0.45, "New"), _line(0.46, "Para")]
    assert reconstruct_page(lines) == "Hello World\nNew Para"


def test_reconstruct_page_empty() -> None:
    assert reconstruct_page([]) == ""


def test_reconstruct_page_single_line_has_no_separator() -> None:
    assert reconstruct_page([_line(1.0, "Only")]) == "Only"


def test_reconstruct_page_small_deltas_stay_on_one_line() -> None:
    lines = [_line(0.10 + i * 0.19, f"w{i}") for i in range(6)]
    text = reconstruct_page(lines)
    assert "\n" not in text
    assert text == "w0 w1 w2 w3 w4 w5"


def test_reconstruct_page_breaks_only_at_large_delta() -> None:
    lines = [_line(1.0, "a"), _line(1.1, "b"), _line(1.5, "c"), _line(1.6, "d")]
    assert reconstruct_page(lines) == "a b\nc d"


def test_reconstruct_page_threshold_is_inclusive() -> None:
    lines = [_line(0.0, "a"), _line(0.2, "b")]
    assert reconstruct_page(lines) == "a\nb"


def test_reconstruct_page_breaks_on_decimal_gaps_with_float_error() -> None:
    # 0.3 - 0.1 and 1.5 - 1.3 are not exactly 0.2 in binary floats
    assert reconstruct_page([_line(0.1, "a"), _line(0.3, "b")]) == "a\nb"
    assert reconstruct_page([_line(1.3, "a"), _line(1.5, "b")]) == "a\nb"


def test_reconstruct_page_upward_jump_is_not_a_break() -> None:
    # Negative deltas (a line above the previous one) continue the current row
    lines = [_line(2.0, "right"), _line(1.0, "left")]
    assert reconstruct_page(lines) == "right left"


def test_reconstruct_page_keeps_text_verbatim() -> None:
    lines = [_line(0.1, "  Mixed CASE  "), _line(0.1, "")]
    assert reconstruct_page(lines) == "  Mixed CASE   "


def test_reconstruct_page_ignores_everything_but_top_and_text() -> None:
    a = [_line(0.1, "x", left=0.0), _line(0.5, "y", left=0.0)]
    b = [_line(0.1, "x", left=6.0), _line(0.5, "y", left=3.0)]
    assert reconstruct_page(a) == reconstruct_page(b) == "x\ny"


# ---------------------------------------------------------------------------
# reconstruct_document
# ---------------------------------------------------------------------------

def test_reconstruct_document_joins_pages_with_triple_newline() -> None:
    pages = [
        _page(1, _line(0.1, "one")),
        _page(2, _line(0.1, "two")),
        _page(3, _line(0.1, "three")),
    ]
    text = reconstruct_document(pages)
    assert text == "one\n\n\ntwo\n\n\nthree"
    assert text.count("\n\n\n") == 2


def test_reconstruct_document_preserves_given_order() -> None:
    pages = [_page(2, _line(0.1, "second")), _page(1, _line(0.1, "first"))]
    assert reconstruct_document(pages) == "second\n\n\nfirst"


def test_reconstruct_document_single_and_empty() -> None:
    assert reconstruct_document([_page(1, _line(0.1, "solo"))]) == "solo"
    assert reconstruct_document([]) == ""


def test_recognition_document_text_matches_reconstruct_document() -> None:
    pages = [_page(1, _line(0.1, "a")), _page(2)]
    doc = RecognitionDocument(pages=pages)
    assert doc.text == "a\n\n\n"
    assert doc.page_count == 2
    assert pages[0].text == "a"


# ---------------------------------------------------------------------------
# Output naming
# ---------------------------------------------------------------------------

def test_output_base_name_strips_folder_and_extension() -> None:
    now = datetime(2024, 3, 5, 14, 7, 9, tzinfo=timezone.utc)
    assert output_base_name("scans/contract.v2.pdf", now) == "contract.v2_2024-03-05T14-07-09"


def test_build_output_files_names_and_full_text() -> None:
    pages = [
        _page(1, _line(0.1, "Hello"), _line(0.12, "World")),
        _page(2, _line(0.1, "Bye")),
    ]
    files = build_output_files("doc_2024", pages)
    assert files == {
        "doc_2024_page001.txt": "Hello World",
        "doc_2024_page002.txt": "Bye",
        "doc_2024_full.txt": "Hello World\n\n\nBye",
    }


def test_build_output_files_pads_page_number_to_three_digits() -> None:
    files = build_output_files("b", [_page(12, _line(0.1, "x"))])
    assert "b_page012.txt" in files
