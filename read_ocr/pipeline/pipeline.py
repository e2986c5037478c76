"""Processing pipeline — orchestrates file-type gate → OCR → text rendering → storage.

- Idempotent: skips re-processing if the document is already completed
- Audit trail: writes ProcessingEvent rows for every step
- All-or-nothing: outputs are only written once the whole document is recognized
"""
from __future__ import annotations

import asyncio
import logging
import os
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession

from read_ocr.core.errors import OcrCancelled, UnsupportedFileType
from read_ocr.db.models import Document, ProcessingEvent
from read_ocr.ocr.base_ocr import OCREngine
from read_ocr.ocr.models import RecognitionDocument
from read_ocr.ocr.text import build_output_files, output_base_name
from read_ocr.storage.local import LocalOutputStore

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({".pdf", ".png", ".jpg", ".jpeg"})


def ensure_supported(name: str) -> None:
    if os.path.splitext(name)[1].lower() not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileType(name)


@dataclass(frozen=True)
class ProcessingOutcome:
    base_name: str
    output_folder: Path
    files: dict[str, str]
    zip_path: Path | None = None


class ProcessingPipeline:
    def __init__(
        self,
        session: AsyncSession,
        ocr_engine: OCREngine,
        store: LocalOutputStore,
        *,
        create_result_zip: bool = False,
        ocr_deadline_seconds: float | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._session = session
        self._ocr_engine = ocr_engine
        self._store = store
        self._create_result_zip = create_result_zip
        self._ocr_deadline_seconds = ocr_deadline_seconds
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    # ------------------------------------------------------------------ #
    #  Public entry point                                                  #
    # ------------------------------------------------------------------ #

    async def process_document(
        self, document_id: uuid.UUID, document_url: str, name: str
    ) -> ProcessingOutcome | None:
        ensure_supported(name)

        doc = await self._session.get(Document, document_id)
        if not doc:
            raise ValueError(f"Document {document_id} not found")

        # ── Idempotency guard ─────────────────────────────────────────
        if doc.status == "completed":
            logger.info(
                "processing_skipped_idempotent",
                extra={"document_id": str(document_id), "status": doc.status},
            )
            return None

        try:
            doc.status = "processing"
            await self._session.flush()

            # ── Step 1: OCR (submit + poll) ───────────────────────────
            recognized: RecognitionDocument = await self._run_step(
                document_id,
                step="ocr",
                coro=self._recognize(document_url),
            )
            logger.info(
                "ocr_complete",
                extra={"document_id": str(document_id), "pages": recognized.page_count},
            )

            # ── Step 2: Render page and full texts ────────────────────
            base_name = output_base_name(name, self._clock())
            files = build_output_files(base_name, recognized.pages)
            await self._emit_event(
                document_id,
                step="render",
                status="completed",
                detail=f"{recognized.page_count} pages, {len(files)} files",
            )

            # ── Step 3: Persist outputs ───────────────────────────────
            outcome: ProcessingOutcome = await self._run_step(
                document_id,
                step="store",
                coro=self._store_outputs(base_name, files),
            )

            doc.status = "completed"
            doc.output_folder = str(outcome.output_folder)
            doc.page_count = recognized.page_count
            await self._emit_event(
                document_id,
                step="completed",
                status="completed",
                detail=f"output_folder={outcome.output_folder}",
            )
            await self._session.commit()

            logger.info(
                "processing_complete",
                extra={
                    "document_id": str(document_id),
                    "output_folder": str(outcome.output_folder),
                    "pages": recognized.page_count,
                },
            )
            return outcome

        except Exception as exc:
            kind = getattr(exc, "kind", None)
            logger.exception(
                "processing_failed",
                extra={"document_id": str(document_id), "error_kind": kind.value if kind else None},
            )
            doc.status = "failed"
            doc.error_kind = kind.value if kind else None
            await self._emit_event(
                document_id, step="failed", status="failed", detail=f"{type(exc).__name__}: {exc}"
            )
            await self._session.commit()
            raise

    # ------------------------------------------------------------------ #
    #  Steps                                                               #
    # ------------------------------------------------------------------ #

    async def _recognize(self, document_url: str) -> RecognitionDocument:
        if self._ocr_deadline_seconds is None:
            return await self._ocr_engine.recognize(document_url)
        try:
            return await asyncio.wait_for(
                self._ocr_engine.recognize(document_url), timeout=self._ocr_deadline_seconds
            )
        except asyncio.TimeoutError as exc:
            raise OcrCancelled(
                f"OCR cancelled after the {self._ocr_deadline_seconds}s deadline"
            ) from exc

    async def _store_outputs(self, base_name: str, files: dict[str, str]) -> ProcessingOutcome:
        loop = asyncio.get_running_loop()
        folder, zip_path = await loop.run_in_executor(
            None, self._store.write_outputs, base_name, files, self._create_result_zip
        )
        return ProcessingOutcome(base_name=base_name, output_folder=folder, files=files, zip_path=zip_path)

    # ------------------------------------------------------------------ #
    #  Audit trail helper                                                  #
    # ------------------------------------------------------------------ #

    async def _emit_event(
        self,
        document_id: uuid.UUID,
        *,
        step: str,
        status: str,
        detail: str | None = None,
        duration_ms: int | None = None,
    ) -> None:
        """Append a ProcessingEvent row for the audit trail."""
        event = ProcessingEvent(
            document_id=document_id,
            step=step,
            status=status,
            detail=detail,
            duration_ms=duration_ms,
        )
        self._session.add(event)
        await self._session.flush()

    async def _run_step(self, document_id: uuid.UUID, *, step: str, coro):
        """Run an async step, emit start/end audit events, and measure duration."""
        await self._emit_event(document_id, step=step, status="started")
        t0 = time.monotonic()
        try:
            result = await coro
            duration_ms = int((time.monotonic() - t0) * 1000)
            await self._emit_event(
                document_id, step=step, status="completed", duration_ms=duration_ms
            )
            return result
        except Exception as exc:
            duration_ms = int((time.monotonic() - t0) * 1000)
            await self._emit_event(
                document_id,
                step=step,
                status="failed",
                detail=str(exc),
                duration_ms=duration_ms,
            )
            raise
