"""Wire models for the asynchronous read operation and the recognized document."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from read_ocr.ocr.text import reconstruct_document, reconstruct_page


class RecognitionMode(str, Enum):
    PRINTED = "Printed"
    HANDWRITTEN = "Handwritten"


class OperationState(str, Enum):
    PENDING = "Pending"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    TIMED_OUT = "TimedOut"


@dataclass
class RecognitionOperation:
    """One in-flight read request. Only the poller mutates it."""

    status_endpoint: str
    max_attempts: int
    retry_interval: float  # seconds
    attempt_count: int = 0
    state: OperationState = field(default=OperationState.PENDING)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.retry_interval < 0:
            raise ValueError(f"retry_interval must be >= 0, got {self.retry_interval}")


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class Word(_WireModel):
    bounding_box: list[float] = Field(default_factory=list, alias="boundingBox")
    text: str = ""
    confidence: str | None = None


class Line(_WireModel):
    bounding_box: list[float] = Field(alias="boundingBox")
    text: str = ""
    words: list[Word] = Field(default_factory=list)

    @field_validator("bounding_box")
    @classmethod
    def _needs_top(cls, value: list[float]) -> list[float]:
        if len(value) < 2:
            raise ValueError("boundingBox needs at least a left and a top coordinate")
        return value


class PageRecognitionResult(_WireModel):
    page_number: int = Field(alias="page", gt=0)
    clockwise_orientation: float | None = Field(default=None, alias="clockwiseOrientation")
    width: float | None = None
    height: float | None = None
    unit: str | None = None
    lines: list[Line] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return reconstruct_page(self.lines)


class ReadOperationResult(_WireModel):
    """Status payload returned by the operation endpoint."""

    status: str | None = None
    recognition_results: list[PageRecognitionResult] | None = Field(
        default=None, alias="recognitionResults"
    )

    @model_validator(mode="after")
    def _unique_pages(self) -> ReadOperationResult:
        pages = [p.page_number for p in self.recognition_results or []]
        if len(pages) != len(set(pages)):
            raise ValueError(f"duplicate page numbers in recognition result: {pages}")
        return self


@dataclass(frozen=True)
class RecognitionDocument:
    pages: list[PageRecognitionResult]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def text(self) -> str:
        return reconstruct_document(self.pages)
