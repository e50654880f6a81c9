"""Application configuration using Pydantic Settings"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    environment: str = "development"
    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Database
    database_url: str = "sqlite+aiosqlite:///./builder.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # AWS / S3
    aws_region: str = "us-east-1"
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_endpoint_url: Optional[str] = None
    s3_bucket: str = "builder-portfolio-images"
    s3_folder: str = "projects"

    # Project images
    max_images_per_project: int = 5
    upload_timeout_seconds: float = 30.0
    upload_max_workers: int = 8

    # Email notifications
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True
    smtp_timeout_seconds: float = 10.0
    notification_recipient: Optional[str] = None

    # CORS
    cors_origins: str = "*"

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def notification_to(self) -> Optional[str]:
        """Address that receives booking notifications"""
        return self.notification_recipient or self.smtp_username


# Global settings instance
settings = Settings()
