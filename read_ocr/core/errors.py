"""Error taxonomy for the OCR read flow.

Every failure surfaced by the submitter, poller, engine facade or pipeline
derives from ``OcrError`` and carries an ``ErrorKind`` so callers can
dispatch on ``exc.kind`` instead of matching message text.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    SUBMISSION_FAILED = "submission_failed"
    MISSING_OPERATION_REFERENCE = "missing_operation_reference"
    ENGINE_RECOGNITION_FAILED = "engine_recognition_failed"
    POLL_TRANSPORT_ERROR = "poll_transport_error"
    OCR_TIMEOUT = "ocr_timeout"
    INVALID_RECOGNITION_RESULT = "invalid_recognition_result"
    OCR_CANCELLED = "ocr_cancelled"
    UNSUPPORTED_FILE_TYPE = "unsupported_file_type"


class OcrError(Exception):
    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SubmissionFailed(OcrError):
    kind = ErrorKind.SUBMISSION_FAILED

    def __init__(self, message: str, *, status_code: int | None = None, detail: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class MissingOperationReference(OcrError):
    kind = ErrorKind.MISSING_OPERATION_REFERENCE


class EngineRecognitionFailed(OcrError):
    kind = ErrorKind.ENGINE_RECOGNITION_FAILED


class PollTransportError(OcrError):
    kind = ErrorKind.POLL_TRANSPORT_ERROR

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class OcrTimeout(OcrError):
    kind = ErrorKind.OCR_TIMEOUT

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Document could not be OCRed before timeout after {attempts} attempts")
        self.attempts = attempts


class InvalidRecognitionResult(OcrError):
    kind = ErrorKind.INVALID_RECOGNITION_RESULT


class OcrCancelled(OcrError):
    kind = ErrorKind.OCR_CANCELLED


class UnsupportedFileType(OcrError):
    kind = ErrorKind.UNSUPPORTED_FILE_TYPE

    def __init__(self, name: str) -> None:
        super().__init__(f"Unsupported file type: {name!r}")
        self.name = name
