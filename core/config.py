from __future__ import annotations
import os
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Base .env load first
load_dotenv()

class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # ignore unknown env keys to avoid crashes
    )

    # Environment
    environment: Literal["development", "staging", "production", "test"] = Field(default="development")
    log_level: str = Field(default="INFO")
    app_port: int = Field(default=8501, ge=1, le=65535)

    # Upload policy
    max_total_mb: int = Field(default=50, ge=1)
    max_files: int = Field(default=20, ge=1)
    allowed_ext: tuple[str, ...] = ("pdf", "png", "jpg", "jpeg", "webp")

    # Paths
    data_dir: Path = Field(default=Path(os.getenv("DATA_DIR", "data")))
    logs_dir: Path = Field(default=Path(os.getenv("LOGS_DIR", "data/output")))
    log_file: Path | None = None

    # GCP / Vertex AI
    gcp_project_id: str | None = Field(default=os.getenv("GCP_PROJECT_ID"))
    gcp_location: str = Field(default=os.getenv("GCP_LOCATION", "us-central1"))
    vertex_model: str = Field(default=os.getenv("VERTEX_MODEL", "gemini-2.5-flash"))
    extraction_temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    max_output_tokens: int = Field(default=16384, ge=256)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = str(value).upper() if value else "INFO"
        allowed = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}
        if level not in allowed:
            # Fallback to INFO instead of raising to avoid boot failure
            return "INFO"
        return level

    @model_validator(mode="after")
    def _derive_paths_and_ensure_dirs(self) -> "AppConfig":
        # Layered environment loading: .env.<ENVIRONMENT> overrides base
        env_file_variant = Path(f".env.{self.environment}")
        if env_file_variant.exists():
            load_dotenv(dotenv_path=env_file_variant, override=True)
            self.gcp_project_id = os.getenv("GCP_PROJECT_ID", self.gcp_project_id)
            self.gcp_location = os.getenv("GCP_LOCATION", self.gcp_location)
            self.vertex_model = os.getenv("VERTEX_MODEL", self.vertex_model)

        if self.log_file is None:
            self.log_file = self.logs_dir / "app.log"

        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        return self

    @property
    def max_total_bytes(self) -> int:
        return self.max_total_mb * 1024 * 1024

config = AppConfig()
