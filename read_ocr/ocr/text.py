"""Plain-text reconstruction from recognized line geometry.

Lines arrive in the order the engine emitted them. A line whose top edge sits
at least ``LINE_BREAK_THRESHOLD`` below the previous line's top starts a new
output line; otherwise it is joined to the current one with a single space.
The threshold is in the engine's coordinate units and is not scaled by page
size or resolution.
"""
from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from read_ocr.ocr.models import Line, PageRecognitionResult

LINE_BREAK_THRESHOLD = 0.2
PAGE_SEPARATOR = "\n\n\n"

# Gaps like 0.3 - 0.1 come out a hair under 0.2 in binary floats
_DELTA_PRECISION = 9


def reconstruct_page(lines: Iterable[Line]) -> str:
    parts: list[str] = []
    last_top: float | None = None
    for line in lines:
        top = line.bounding_box[1]
        if last_top is not None and round(top - last_top, _DELTA_PRECISION) >= LINE_BREAK_THRESHOLD:
            parts.append("\n")
        elif parts:
            parts.append(" ")
        parts.append(line.text)
        last_top = top
    return "".join(parts)


def reconstruct_document(pages: Iterable[PageRecognitionResult]) -> str:
    """Join page texts in the order given; callers sort pages if they need to."""
    return PAGE_SEPARATOR.join(reconstruct_page(page.lines) for page in pages)


def output_base_name(document_name: str, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    stem = os.path.splitext(os.path.basename(document_name))[0]
    return f"{stem}_{now.strftime('%Y-%m-%dT%H-%M-%S')}"


def page_filename(base_name: str, page_number: int) -> str:
    return f"{base_name}_page{page_number:03d}.txt"


def full_filename(base_name: str) -> str:
    return f"{base_name}_full.txt"


def build_output_files(base_name: str, pages: Sequence[PageRecognitionResult]) -> dict[str, str]:
    """Map output filename -> text: one file per page plus the full document."""
    files = {page_filename(base_name, page.page_number): reconstruct_page(page.lines) for page in pages}
    files[full_filename(base_name)] = PAGE_SEPARATOR.join(
        files[page_filename(base_name, page.page_number)] for page in pages
    )
    return files
