from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class Document(Base):
    __tablename__ = "documents"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    filename: Mapped[str] = mapped_column(String(512))
    status: Mapped[str] = mapped_column(String(32), default="pending")  # pending | processing | completed | failed
    output_folder: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    page_count: Mapped[int | None] = mapped_column(nullable=True)
    error_kind: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    events: Mapped[list[ProcessingEvent]] = relationship(back_populates="document", cascade="all, delete-orphan", order_by="ProcessingEvent.created_at")


# ── Audit trail ──────────────────────────────────────────────────────────────────────
class ProcessingEvent(Base):
    """Audit trail: one row per pipeline step per document.

    step values: ocr | render | store | completed | failed
    """
    __tablename__ = "processing_events"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    document_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("documents.id", ondelete="CASCADE"), index=True
    )
    step: Mapped[str] = mapped_column(String(64))          # e.g. "ocr", "store"
    status: Mapped[str] = mapped_column(String(32))        # "started" | "completed" | "failed"
    detail: Mapped[str | None] = mapped_column(Text, nullable=True)   # human-readable note
    duration_ms: Mapped[int | None] = mapped_column(nullable=True)    # wall-clock ms for this step
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    document: Mapped[Document] = relationship(back_populates="events")
