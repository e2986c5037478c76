from __future__ import annotations

import httpx

from read_ocr.core.config import Settings

SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"


def create_http_client(settings: Settings, **kwargs) -> httpx.AsyncClient:
    """Build the client shared by the submitter and the poller.

    Created once at startup and not mutated afterwards, so it is safe to share
    across concurrently processed documents. Extra kwargs (e.g. ``transport``)
    are passed through to ``httpx.AsyncClient``.
    """
    return httpx.AsyncClient(
        headers={SUBSCRIPTION_KEY_HEADER: settings.cognitive_service_api_key.get_secret_value()},
        timeout=settings.http_timeout_seconds,
        **kwargs,
    )
