from __future__ import annotations

from read_ocr.ocr.base_ocr import OCREngine
from read_ocr.ocr.models import Line, PageRecognitionResult, RecognitionDocument


def _line(top: float, text: str) -> Line:
    return Line(boundingBox=[0.5, top, 7.5, top, 7.5, top + 0.15, 0.5, top + 0.15], text=text)


class MockOCREngine(OCREngine):
    async def recognize(self, document_url: str) -> RecognitionDocument:
        # Mock OCR for development/testing
        return RecognitionDocument(
            pages=[
                PageRecognitionResult(
                    page=1,
                    lines=[
                        _line(0.50, "INVOICE"),
                        _line(0.52, "INV-2024-001"),
                        _line(1.10, "Vendor: Acme Corp"),
                        _line(1.40, "Total: $300.00"),
                    ],
                ),
                PageRecognitionResult(
                    page=2,
                    lines=[_line(0.50, "Thank you for your business")],
                ),
            ]
        )
