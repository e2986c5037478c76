from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from read_ocr.core.config import Settings
from read_ocr.core.errors import OcrError, UnsupportedFileType
from read_ocr.db.models import Document
from read_ocr.db.session import get_session
from read_ocr.ocr.base_ocr import OCREngine
from read_ocr.pipeline.pipeline import ProcessingPipeline, ensure_supported
from read_ocr.schemas import (
    DocumentDetailResponse,
    DocumentSubmitRequest,
    DocumentSubmitResponse,
    ErrorOut,
    ProcessingEventOut,
)
from read_ocr.storage.local import LocalOutputStore

logger = logging.getLogger(__name__)
router = APIRouter()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_ocr_engine(request: Request) -> OCREngine:
    return request.app.state.ocr_engine


def get_output_store(request: Request) -> LocalOutputStore:
    return request.app.state.output_store


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post(
    "/documents",
    response_model=DocumentSubmitResponse,
    responses={415: {"model": ErrorOut}, 502: {"model": ErrorOut}},
)
async def submit_document(
    body: DocumentSubmitRequest,
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
    ocr_engine: OCREngine = Depends(get_ocr_engine),
    store: LocalOutputStore = Depends(get_output_store),
):
    try:
        ensure_supported(body.name)
    except UnsupportedFileType as exc:
        return JSONResponse(status_code=415, content={"kind": exc.kind.value, "message": exc.message})

    doc = Document(filename=body.name, status="pending")
    session.add(doc)
    await session.flush()
    logger.info("document_received", extra={"document_id": str(doc.id), "document_name": body.name})

    # Processed inline; the read operation is bounded by OCR_MAX_RETRIES * OCR_RETRY_SECONDS
    pipeline = ProcessingPipeline(
        session,
        ocr_engine,
        store,
        create_result_zip=settings.create_result_zip,
        ocr_deadline_seconds=settings.ocr_deadline_seconds,
    )
    try:
        outcome = await pipeline.process_document(doc.id, body.document_url, body.name)
    except OcrError as exc:
        return JSONResponse(status_code=502, content={"kind": exc.kind.value, "message": exc.message})

    return DocumentSubmitResponse(
        document_id=doc.id,
        status=doc.status,
        output_folder=doc.output_folder,
        files=sorted(outcome.files) if outcome else [],
    )


@router.get("/documents/{document_id}", response_model=DocumentDetailResponse)
async def get_document(
    document_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
) -> DocumentDetailResponse:
    stmt = (
        select(Document)
        .where(Document.id == document_id)
        .options(selectinload(Document.events))
    )
    result = await session.execute(stmt)
    doc = result.scalar_one_or_none()
    if not doc:
        raise HTTPException(status_code=404, detail="Document not found")

    events_out = [
        ProcessingEventOut(
            step=e.step,
            status=e.status,
            detail=e.detail,
            duration_ms=e.duration_ms,
            created_at=e.created_at,
        )
        for e in doc.events
    ]

    return DocumentDetailResponse(
        id=doc.id,
        filename=doc.filename,
        status=doc.status,
        output_folder=doc.output_folder,
        page_count=doc.page_count,
        error_kind=doc.error_kind,
        created_at=doc.created_at,
        updated_at=doc.updated_at,
        events=events_out,
    )
