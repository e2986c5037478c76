"""Polling loop for asynchronous read operations.

States: Pending -> Succeeded | Failed | TimedOut.

After a fixed grace period the status endpoint is queried once per attempt.
"Succeeded" returns the result, "Failed" raises at once, any other status
counts against the attempt budget and waits ``retry_interval`` before the
next query. No wait follows the last attempt. Transport errors are raised
immediately and are never retried as if the operation were still running.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx
from pydantic import ValidationError
from tenacity import AsyncRetrying, RetryCallState, retry_if_result, stop_after_attempt, wait_fixed

from read_ocr.core.errors import EngineRecognitionFailed, InvalidRecognitionResult, OcrTimeout, PollTransportError
from read_ocr.ocr.models import OperationState, ReadOperationResult, RecognitionOperation

logger = logging.getLogger(__name__)

# The service never finishes a read this fast, so the first query waits
INITIAL_GRACE_SECONDS = 2.0

STATUS_SUCCEEDED = "succeeded"
STATUS_FAILED = "failed"


def _status(result: ReadOperationResult) -> str:
    return (result.status or "").strip().lower()


def _is_pending(result: ReadOperationResult) -> bool:
    return _status(result) != STATUS_SUCCEEDED


class OperationPoller:
    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        grace_period: float = INITIAL_GRACE_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._grace_period = grace_period
        self._sleep = sleep

    async def poll_endpoint(
        self, status_endpoint: str, max_attempts: int, retry_interval: float
    ) -> ReadOperationResult:
        operation = RecognitionOperation(
            status_endpoint=status_endpoint,
            max_attempts=max_attempts,
            retry_interval=retry_interval,
        )
        return await self.poll(operation)

    async def poll(self, operation: RecognitionOperation) -> ReadOperationResult:
        if operation.state is not OperationState.PENDING:
            raise ValueError(f"Operation already resolved ({operation.state.value}); create a new one")

        await self._sleep(self._grace_period)

        def _timed_out(retry_state: RetryCallState) -> ReadOperationResult:
            operation.state = OperationState.TIMED_OUT
            logger.warning(
                "ocr_poll_timeout",
                extra={"status_endpoint": operation.status_endpoint, "attempts": operation.attempt_count},
            )
            raise OcrTimeout(operation.attempt_count)

        def _log_waiting(retry_state: RetryCallState) -> None:
            logger.info(
                "ocr_poll_waiting",
                extra={
                    "attempt": operation.attempt_count,
                    "max_attempts": operation.max_attempts,
                    "retry_in_seconds": operation.retry_interval,
                },
            )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(operation.max_attempts),
            wait=wait_fixed(operation.retry_interval),
            retry=retry_if_result(_is_pending),
            sleep=self._sleep,
            before_sleep=_log_waiting,
            retry_error_callback=_timed_out,
        )
        return await retrying(self._check_status, operation)

    async def _check_status(self, operation: RecognitionOperation) -> ReadOperationResult:
        result = await self._query(operation.status_endpoint)
        status = _status(result)

        if status == STATUS_SUCCEEDED:
            if result.recognition_results is None:
                raise InvalidRecognitionResult("Operation succeeded without recognitionResults")
            operation.state = OperationState.SUCCEEDED
            logger.info(
                "ocr_poll_succeeded",
                extra={"attempts": operation.attempt_count + 1, "pages": len(result.recognition_results)},
            )
            return result

        if status == STATUS_FAILED:
            operation.state = OperationState.FAILED
            raise EngineRecognitionFailed("Document could not be OCRed. Engine returned 'Failed'")

        operation.attempt_count += 1
        return result

    async def _query(self, status_endpoint: str) -> ReadOperationResult:
        try:
            response = await self._client.get(status_endpoint)
        except httpx.HTTPError as exc:
            raise PollTransportError(f"Status query failed: {exc}") from exc

        if not response.is_success:
            raise PollTransportError(
                f"Status query returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return ReadOperationResult.model_validate_json(response.content)
        except ValidationError as exc:
            raise InvalidRecognitionResult(f"Unreadable status payload: {exc}") from exc
