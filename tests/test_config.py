"""Settings validation — fail fast on missing or malformed values."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from read_ocr.core.config import Settings
from read_ocr.ocr.models import RecognitionMode


def test_defaults(make_settings) -> None:
    settings = make_settings()
    assert settings.ocr_mode is RecognitionMode.PRINTED
    assert settings.ocr_max_retries == 10
    assert settings.ocr_retry_seconds == 5
    assert settings.create_result_zip is False
    assert settings.ocr_deadline_seconds is None


def test_base_uri_trailing_slash_is_stripped(make_settings) -> None:
    settings = make_settings(cognitive_service_base_uri="https://vision.example.test/ ")
    assert settings.cognitive_service_base_uri == "https://vision.example.test"


def test_api_key_is_secret(make_settings) -> None:
    settings = make_settings(cognitive_service_api_key="abc123")
    assert "abc123" not in repr(settings)
    assert settings.cognitive_service_api_key.get_secret_value() == "abc123"


@pytest.mark.parametrize(
    "overrides",
    [
        {"cognitive_service_base_uri": "vision.example.test"},
        {"cognitive_service_api_key": "   "},
        {"ocr_max_retries": 0},
        {"ocr_retry_seconds": -1},
        {"ocr_mode": "Cursive"},
        {"ocr_deadline_seconds": 0},
    ],
)
def test_invalid_values_are_rejected(make_settings, overrides) -> None:
    with pytest.raises(ValidationError):
        make_settings(**overrides)


def test_camelcase_setting_names_are_accepted(monkeypatch) -> None:
    monkeypatch.delenv("COGNITIVE_SERVICE_BASE_URI", raising=False)
    monkeypatch.delenv("COGNITIVE_SERVICE_API_KEY", raising=False)
    monkeypatch.setenv("cognitiveServiceBaseUri", "https://legacy.example.test")
    monkeypatch.setenv("CognitiveServiceApiKey", "legacy-key")
    monkeypatch.setenv("ocrMaxRetries", "7")
    monkeypatch.setenv("ocrRetrySeconds", "3")
    monkeypatch.setenv("ocrMode", "Handwritten")
    monkeypatch.setenv("createResultZip", "true")

    settings = Settings()

    assert settings.cognitive_service_base_uri == "https://legacy.example.test"
    assert settings.cognitive_service_api_key.get_secret_value() == "legacy-key"
    assert settings.ocr_max_retries == 7
    assert settings.ocr_retry_seconds == 3
    assert settings.ocr_mode is RecognitionMode.HANDWRITTEN
    assert settings.create_result_zip is True
