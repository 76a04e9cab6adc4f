"""
Application configuration from environment variables.
Settings class using pydantic-settings; shared by the API server and the form client.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from backend root so it loads when running from backend/ or project root
_BACKEND_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _BACKEND_ROOT / ".env"

DEFAULT_PORT = 5000


class Settings(BaseSettings):
    """
    Application settings loaded from environment and .env.
    All fields have local-dev defaults; call validate_for_production() before serving in production.
    """

    # Application
    ENVIRONMENT: str = "development"
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=DEFAULT_PORT, description="HTTP listen port", validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    # Store as string so an env value never triggers json.loads; parsed in cors_origins_list.
    cors_origins: str = Field(
        default="*",
        description="Comma-separated origins or JSON array",
        validation_alias="CORS_ORIGINS",
    )

    # MongoDB
    mongodb_uri: str = Field(
        default="",
        description="MongoDB connection string",
        validation_alias="MONGODB_URI",
    )
    mongodb_db: str = Field(
        default="contact_manager",
        description="Database name used when the connection string does not name one",
        validation_alias="MONGODB_DB",
    )

    # Form client
    contacts_api_url: str = Field(
        default=f"http://localhost:{DEFAULT_PORT}",
        description="Base URL of the contacts API used by the form client",
        validation_alias="CONTACTS_API_URL",
    )

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def normalize_cors_origins(cls, v: object) -> str:
        """Ensure we always have a string (avoid empty env causing json.loads in pydantic-settings)."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return "*"
        if isinstance(v, list):
            return ",".join(str(x).strip() for x in v if str(x).strip())
        return str(v).strip()

    @field_validator("mongodb_uri", "contacts_api_url", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> str:
        if isinstance(v, str) and v.strip():
            return v.strip().upper()
        return "INFO"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS_ORIGINS from comma-separated or JSON array string."""
        raw = (self.cors_origins or "").strip()
        if not raw:
            return ["*"]
        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
            except ValueError:
                parsed = None
            if isinstance(parsed, list):
                return [x.strip() for x in parsed if isinstance(x, str) and x.strip()] or ["*"]
        return [x.strip() for x in raw.split(",") if x.strip()] or ["*"]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    def validate_for_production(self) -> None:
        """
        Call to validate that required env vars are set (e.g. on startup in production).
        Raises ValueError with missing keys.
        """
        missing: List[str] = []
        if not self.mongodb_uri:
            missing.append("MONGODB_URI")
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
