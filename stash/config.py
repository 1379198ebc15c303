"""
Configuration management for Stash.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Database
    database_url: str = ""

    # Identity (bearer JWTs issued by the auth service)
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_audience: str | None = "authenticated"

    # Blob storage
    s3_bucket: str = "resumes"
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    signed_url_ttl: int = 3600

    # Uploads
    max_resume_bytes: int = 5 * 1024 * 1024
    upload_rate_limit: str = "10/minute"
    rate_limit_enabled: bool = True

    # Observability
    log_level: str = "INFO"

    # Client / command palette
    api_base_url: str = "http://localhost:8000"
    api_token: str = ""
    search_debounce_seconds: float = 0.3
    search_group_limit: int = 5
    request_timeout: float = 10.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


settings = Settings()
