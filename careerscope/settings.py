from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv
load_dotenv()  # load .env early


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, "").strip() or default)
    except Exception:
        return default


def _env_optional_float(name: str) -> Optional[float]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    v = v.strip().lower()
    return v in {"1", "true", "yes", "on", "y", "t"}


@dataclass
class Settings:
    # Credential; checked when the client is first used, not at startup
    openai_api_key: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))

    # LLM model
    openai_model: str = field(default_factory=lambda: os.getenv("OPENAI_MODEL", "gpt-4o-mini"))
    # None -> api.openai.com; set for proxies or OpenAI-compatible servers
    openai_base_url: Optional[str] = field(default_factory=lambda: os.getenv("OPENAI_BASE_URL") or None)
    # low temperature keeps scoring consistent between runs
    temperature: float = field(default_factory=lambda: _env_float("OPENAI_TEMPERATURE", 0.3))
    # None -> transport default
    request_timeout: Optional[float] = field(default_factory=lambda: _env_optional_float("OPENAI_TIMEOUT"))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    log_json: bool = field(default_factory=lambda: _env_bool("LOG_JSON", False))

    # UI
    no_banner: bool = field(default_factory=lambda: _env_bool("CAREERSCOPE_NO_BANNER", False))


SETTINGS = Settings()
