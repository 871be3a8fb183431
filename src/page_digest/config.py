# src/page_digest/config.py

import os
import logging
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()

DEFAULT_API_URL = "https://api.together.xyz/inference"
DEFAULT_MODEL = "mistralai/Mixtral-8x7B-Instruct-v0.1"
DEFAULT_REQUEST_TIMEOUT = 60.0


class Settings(BaseModel):
    """Connection settings for the completion endpoint."""
    api_url: str = DEFAULT_API_URL
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)

    @classmethod
    def from_env(cls) -> "Settings":
        """Builds settings from TOGETHER_* / SUMMARY_* environment variables."""
        return cls(
            api_url=os.getenv("TOGETHER_API_URL", DEFAULT_API_URL),
            api_key=os.getenv("TOGETHER_API_KEY") or None,
            model=os.getenv("SUMMARY_MODEL", DEFAULT_MODEL),
            request_timeout=float(os.getenv("SUMMARY_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)),
        )


@lru_cache()
def get_settings() -> Settings:
    settings = Settings.from_env()
    logger.info(f"Loaded settings: endpoint={settings.api_url}, model={settings.model}")
    return settings
