from __future__ import annotations

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from a .env file if present (local dev only)
load_dotenv()

DEFAULT_API_URL = "https://way2enjoy.com/modules/compress-png/way2enjoy-cli2.php"


class Settings(BaseSettings):
    """Client configuration loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_prefix="WAY2ENJOY_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: Optional[str] = Field(default=None, description="Way2enjoy API key")
    api_url: str = Field(DEFAULT_API_URL, description="Compression endpoint for uploads.")
    timeout: float = Field(30.0, gt=0, description="Per-request transport timeout (seconds).")
    chunk_size: int = Field(1024, ge=1, description="Read size used when draining responses.")


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
