import json
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_ROOT / ".env"),
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Rakugaki Reservations"
    RESTAURANT_NAME: str = "Rakugaki"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # Email (notifications run only when both are set)
    EMAIL_USER: Optional[str] = None
    EMAIL_PASS: Optional[SecretStr] = None
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 465

    # Storage
    STORE_BACKEND: str = "memory"  # memory | sqlite
    DB_FILE: str = "reservations.db"

    # Frontend
    FRONTEND_DIR: str = str(_PROJECT_ROOT / "static")

    # CORS
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = ["*"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            if v.startswith("["):
                return json.loads(v)
            return [i.strip() for i in v.split(",") if i.strip()]
        return v

    @field_validator("STORE_BACKEND")
    @classmethod
    def check_store_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in ("memory", "sqlite"):
            raise ValueError(f"Unknown STORE_BACKEND: {v}")
        return v

    # Logging
    LOG_DIR: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    @property
    def email_enabled(self) -> bool:
        return bool(self.EMAIL_USER and self.EMAIL_PASS and self.EMAIL_PASS.get_secret_value())


def get_settings() -> Settings:
    return Settings()
