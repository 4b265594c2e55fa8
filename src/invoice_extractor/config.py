"""
Run configuration, loaded once at start and passed explicitly into the pipeline.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "gpt-4o-2024-08-06"
DEFAULT_MAX_ATTEMPTS = 8


@dataclass(frozen=True)
class Settings:
    input_dir: str = "invoices"
    output_path: str = "invoice_data.csv"
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: str = DEFAULT_MODEL
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    request_timeout_s: float = 120.0
    temperature: float = 0.0
    max_workers: int = 1


def _env_number(name: str, default, cast):
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def load_settings(**overrides) -> Settings:
    """
    Read settings from the environment (and a .env file if present).
    Keyword overrides that are not None take precedence, e.g. CLI flags.
    """
    load_dotenv()

    openrouter_key = os.getenv("OPENROUTER_API_KEY", "").strip()
    api_key = openrouter_key or os.getenv("OPENAI_API_KEY", "").strip() or None

    settings = Settings(
        input_dir=os.getenv("INVOICE_DIR", "invoices").strip(),
        output_path=os.getenv("OUTPUT_PATH", "invoice_data.csv").strip(),
        api_key=api_key,
        base_url=OPENROUTER_BASE_URL if openrouter_key else None,
        model=os.getenv("OPENAI_MODEL", DEFAULT_MODEL).strip(),
        max_attempts=_env_number("EXTRACTION_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS, int),
        request_timeout_s=_env_number("REQUEST_TIMEOUT_S", 120.0, float),
        temperature=_env_number("LLM_TEMPERATURE", 0.0, float),
        max_workers=_env_number("EXTRACTION_WORKERS", 1, int),
    )
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    if settings.max_attempts < 1:
        raise ConfigurationError("max_attempts must be at least 1")
    if settings.max_workers < 1:
        raise ConfigurationError("max_workers must be at least 1")
    return settings
