"""Application settings.

Values come from ``CHAKKI_*`` environment variables or a ``.env`` file in
the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    backend: Literal["json", "rest"] = "json"
    data_dir: Path = Path("data")

    api_base_url: str = "http://localhost:8000/api/v1"
    api_token: str | None = None
    api_timeout: float = 10.0

    currency_code: str = "PKR"
    currency_symbol: str = "₨"

    business_name: str = "Punjab Atta Chakki"
    business_address: str = "Main Street, Punjab"
    business_phone: str = "+92-XXXXXXXXX"
    receipt_width: int = Field(default=32, ge=24)

    operator_id: str = "operator"
    operator_name: str = "Operator"

    log_level: str = "INFO"
    log_file: Path | None = Path("logs/chakki.log")
    log_max_bytes: int = 1_048_576
    log_backup_count: int = 3

    model_config = SettingsConfigDict(
        env_prefix="CHAKKI_", env_file=".env", env_file_encoding="utf-8"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
