from __future__ import annotations

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from read_ocr.ocr.models import RecognitionMode


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_env: str = "dev"
    log_level: str = "INFO"

    database_url: str

    # OCR provider: read_api | mock
    ocr_provider: str = "read_api"

    # Remote vision service (camelCase names kept for existing deployments)
    cognitive_service_base_uri: str = Field(
        validation_alias=AliasChoices("cognitive_service_base_uri", "cognitiveServiceBaseUri"),
    )
    cognitive_service_api_key: SecretStr = Field(
        validation_alias=AliasChoices("cognitive_service_api_key", "CognitiveServiceApiKey"),
    )
    ocr_retry_seconds: int = Field(
        default=5,
        ge=0,
        validation_alias=AliasChoices("ocr_retry_seconds", "ocrRetrySeconds"),
    )
    ocr_max_retries: int = Field(
        default=10,
        ge=1,
        validation_alias=AliasChoices("ocr_max_retries", "ocrMaxRetries"),
    )
    ocr_mode: RecognitionMode = Field(
        default=RecognitionMode.PRINTED,
        validation_alias=AliasChoices("ocr_mode", "ocrMode"),
    )
    create_result_zip: bool = Field(
        default=False,
        validation_alias=AliasChoices("create_result_zip", "createResultZip"),
    )

    # Upper bound on the whole OCR step; unset means the attempt budget alone applies
    ocr_deadline_seconds: float | None = Field(default=None, gt=0)
    http_timeout_seconds: float = Field(default=30.0, gt=0)

    output_root: str = "./data"

    @field_validator("cognitive_service_base_uri")
    @classmethod
    def _check_base_uri(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError("cognitive_service_base_uri must be an http(s) URL")
        return value

    @field_validator("cognitive_service_api_key")
    @classmethod
    def _check_api_key(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("cognitive_service_api_key must not be empty")
        return value


settings = Settings()
