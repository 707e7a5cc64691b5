"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_name: str = "Job Portal"
    debug: bool = False
    log_level: str = "INFO"
    frontend_url: str = "http://localhost:5173"

    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "job_portal"

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 7 * 24 * 60
    cookie_expire_days: int = 7
    cookie_secure: bool = False

    # SendGrid
    sendgrid_api_key: str = ""
    sendgrid_from: str = "noreply@example.com"

    # Resume storage (S3-compatible)
    s3_endpoint: Optional[str] = None
    s3_region: Optional[str] = None
    s3_bucket: str = "job-portal-resumes"
    s3_access_key: Optional[str] = None
    s3_secret_key: Optional[str] = None
    s3_public_base_url: Optional[str] = None

    # AI resume analysis (OpenAI-compatible)
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-3.5-turbo"

    # Application limits
    max_applications_per_job: int = 10
    max_applications_per_window: int = 10
    application_window_days: int = 30

    # Token lifetimes
    verify_token_minutes: int = 60
    reset_token_minutes: int = 15

    # Uploads
    max_resume_image_mb: int = 5

    @property
    def storage_base_url(self) -> str:
        """Public URL prefix for stored resumes."""
        if self.s3_public_base_url:
            return self.s3_public_base_url.rstrip("/")
        if self.s3_endpoint:
            return f"{self.s3_endpoint.rstrip('/')}/{self.s3_bucket}"
        return f"https://{self.s3_bucket}.s3.amazonaws.com"

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
