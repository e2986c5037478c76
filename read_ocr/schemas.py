from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class DocumentSubmitRequest(BaseModel):
    # Must be fetchable by the remote service, e.g. a blob URL with a read-only SAS token
    document_url: str = Field(min_length=1)
    name: str = Field(min_length=1)


class DocumentSubmitResponse(BaseModel):
    document_id: uuid.UUID
    status: str
    output_folder: str | None = None
    files: list[str] = Field(default_factory=list)


class ProcessingEventOut(BaseModel):
    """Single audit trail entry."""
    step: str
    status: str
    detail: str | None
    duration_ms: int | None
    created_at: datetime


class DocumentDetailResponse(BaseModel):
    id: uuid.UUID
    filename: str
    status: str
    output_folder: str | None
    page_count: int | None
    error_kind: str | None
    created_at: datetime
    updated_at: datetime
    events: list[ProcessingEventOut] = Field(default_factory=list)


class ErrorOut(BaseModel):
    kind: str
    message: str
