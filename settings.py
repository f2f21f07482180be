# settings.py
import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv(override=True)


def _optional_int(raw: Optional[str]) -> Optional[int]:
    return int(raw) if raw else None


def _optional_float(raw: Optional[str]) -> Optional[float]:
    return float(raw) if raw else None


class Settings(BaseModel):
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    MODEL_NAME: str = os.getenv("MODEL_NAME", "gemini-1.5-flash")
    # generation knobs, left to the model's defaults when unset
    MAX_OUTPUT_TOKENS: Optional[int] = _optional_int(os.getenv("MAX_OUTPUT_TOKENS"))
    TEMPERATURE: Optional[float] = _optional_float(os.getenv("TEMPERATURE"))

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))
    SERVICE_ACCOUNT_KEY_PATH: str = os.getenv("SERVICE_ACCOUNT_KEY_PATH", "./serviceAccountKey.json")
    CORS_ALLOW_ORIGINS: str = os.getenv("CORS_ALLOW_ORIGINS", "*")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: Optional[str] = os.getenv("LOG_FILE") or None

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ALLOW_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
