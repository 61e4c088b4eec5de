from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings."""

    # Database
    database_url: str = Field(default="sqlite+aiosqlite:///./socialcare.db")

    # Tokens
    jwt_secret_key: str = Field(default="change-me-in-production")
    token_expire_seconds: int = Field(default=86400)  # 24 hours

    # Passwords
    bcrypt_rounds: int = Field(default=12)

    # Registration is limited to public-sector addresses
    allowed_email_domain: str = Field(default=".gov.uk")

    # File uploads
    upload_dir: str = Field(default="uploads")
    max_upload_bytes: int = Field(default=10 * 1024 * 1024)

    # HTTP
    cors_origins: list[str] = Field(default=["*"])

    # Logging
    log_level: str = Field(default="INFO")

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
