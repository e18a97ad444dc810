from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_GROQ_URL = "https://api.groq.com/openai/v1/chat/completions"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    groq_api_key: Optional[str] = None
    model_name: str = DEFAULT_MODEL
    groq_api_url: str = DEFAULT_GROQ_URL
    llm_temperature: float = 0.2
    llm_timeout: float = 60.0
    llm_max_retries: int = 2
    llm_retry_backoff: float = 1.0
    log_level: str = "INFO"
    api_url: str = "http://localhost:8000"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment (and a .env file, if present)."""
        origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
        retries = _int_env("LLM_MAX_RETRIES", 2)
        if retries < 0:
            raise ValueError(f"LLM_MAX_RETRIES must be >= 0, got {retries}")
        return cls(
            groq_api_key=os.getenv("GROQ_API_KEY") or None,
            model_name=os.getenv("MODEL_NAME", DEFAULT_MODEL),
            groq_api_url=os.getenv("GROQ_API_URL", DEFAULT_GROQ_URL),
            llm_temperature=_float_env("LLM_TEMPERATURE", 0.2),
            llm_timeout=_float_env("LLM_TIMEOUT", 60.0),
            llm_max_retries=retries,
            llm_retry_backoff=_float_env("LLM_RETRY_BACKOFF", 1.0),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            api_url=os.getenv("API_URL", "http://localhost:8000").rstrip("/"),
            cors_origins=origins or ["*"],
        )
