from __future__ import annotations

import httpx

from read_ocr.core.config import Settings
from read_ocr.ocr.base_ocr import OCREngine
from read_ocr.ocr.mock_ocr import MockOCREngine


def get_ocr_engine(settings: Settings, client: httpx.AsyncClient | None = None) -> OCREngine:
    """Return the configured OCR engine instance.

    OCR_PROVIDER options:
        mock      — synthetic two-page document (dev/test, no network)
        read_api  — ReadOCREngine against COGNITIVE_SERVICE_BASE_URI
    """
    provider = settings.ocr_provider.lower().strip()

    if provider == "mock":
        return MockOCREngine()

    if provider == "read_api":
        if client is None:
            raise ValueError("OCR_PROVIDER=read_api needs a shared HTTP client")
        from read_ocr.ocr.engines import ReadOCREngine
        return ReadOCREngine(
            client,
            base_uri=settings.cognitive_service_base_uri,
            mode=settings.ocr_mode,
            max_attempts=settings.ocr_max_retries,
            retry_interval=float(settings.ocr_retry_seconds),
        )

    raise ValueError(f"Unknown OCR_PROVIDER={settings.ocr_provider!r}")
