"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    spotdiff_env: str = "development"
    spotdiff_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Upload limits for encoded images
    max_image_bytes: int = 20 * 1024 * 1024
    max_image_pixels: int = 40_000_000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
