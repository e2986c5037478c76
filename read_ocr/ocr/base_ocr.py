from __future__ import annotations

from read_ocr.ocr.models import RecognitionDocument


class OCREngine:
    async def recognize(self, document_url: str) -> RecognitionDocument:
        raise NotImplementedError
