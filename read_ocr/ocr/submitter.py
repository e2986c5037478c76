from __future__ import annotations

import logging

import httpx

from read_ocr.core.errors import MissingOperationReference, SubmissionFailed
from read_ocr.ocr.models import RecognitionMode

logger = logging.getLogger(__name__)

READ_PATH = "/vision/v2.0/read/core/asyncBatchAnalyze"
OPERATION_LOCATION_HEADER = "Operation-Location"


class OperationSubmitter:
    """Starts an asynchronous read operation for a document URL.

    The URL must already be fetchable by the remote service (e.g. carry a
    short-lived read token). A single request is sent; failures are not retried.
    """

    def __init__(self, client: httpx.AsyncClient, base_uri: str) -> None:
        self._client = client
        self._read_url = base_uri.rstrip("/") + READ_PATH

    async def submit(self, document_url: str, mode: RecognitionMode = RecognitionMode.PRINTED) -> str:
        mode = RecognitionMode(mode)
        try:
            response = await self._client.post(
                self._read_url,
                params={"mode": mode.value},
                json={"url": document_url},
            )
        except httpx.HTTPError as exc:
            raise SubmissionFailed(f"Read request could not be sent: {exc}") from exc

        if not response.is_success:
            raise SubmissionFailed(
                f"Read request rejected with HTTP {response.status_code}",
                status_code=response.status_code,
                detail=response.text,
            )

        operation_location = response.headers.get(OPERATION_LOCATION_HEADER)
        if not operation_location:
            raise MissingOperationReference(f"No {OPERATION_LOCATION_HEADER} header returned")

        logger.info(
            "ocr_submitted",
            extra={"mode": mode.value, "operation_location": operation_location},
        )
        return operation_location
