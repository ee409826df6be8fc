from zoneinfo import ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.feedback.time_window import get_report_timezone


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Storage
    storage_backend: str = Field(default="memory", pattern="^(memory|sql)$")
    database_url: str = "sqlite:///./feedback.db"

    # Reporting
    report_timezone: str = "UTC"  # IANA name, drives "thisYear" and trend buckets

    # HTTP
    cors_origins: str = "*"
    port: int = Field(default=5000, ge=1, le=65535)
    log_level: str = "INFO"

    # Client
    feedback_api_url: str = "http://localhost:5000"

    @field_validator("report_timezone")
    @classmethod
    def known_timezone(cls, v: str) -> str:
        try:
            get_report_timezone(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v!r}") from e
        return v

    def cors_origin_list(self) -> list[str]:
        raw = self.cors_origins.strip()
        if not raw or raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]


settings = Settings()
