from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Application
    APP_NAME: str = "Portfolio Backend"
    CLIENT_URL: str = "http://localhost:3000"
    STATIC_DIR: str = "public"

    # MongoDB (record store is enabled only when MONGODB_URI is set)
    MONGODB_URI: Optional[str] = None
    MONGODB_DB_NAME: str = "portfolio_db"
    MONGODB_TIMEOUT_MS: int = Field(default=5000, gt=0)
    PERSISTENCE_FAILURE_POLICY: Literal["abort", "best_effort"] = "abort"

    # Email
    EMAIL_HOST: str = "smtp.gmail.com"
    EMAIL_PORT: int = 587
    EMAIL_USE_TLS: bool = True
    EMAIL_TIMEOUT: float = Field(default=30.0, gt=0)
    EMAIL_USER: Optional[str] = None
    EMAIL_PASS: Optional[str] = None
    RECIPIENT_EMAIL: Optional[str] = None
    OWNER_NAME: str = "Adnan Ali"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/portfolio.log"

    @field_validator("MONGODB_URI", "EMAIL_USER", "EMAIL_PASS", "RECIPIENT_EMAIL", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        # An empty variable in .env means "not configured"
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def recipient(self) -> Optional[str]:
        """Owner notification target, falling back to the sending account."""
        return self.RECIPIENT_EMAIL or self.EMAIL_USER

    @property
    def email_configured(self) -> bool:
        return bool(self.EMAIL_USER and self.EMAIL_PASS)

    @property
    def persistence_enabled(self) -> bool:
        return bool(self.MONGODB_URI)


# Create settings instance
settings = Settings()
