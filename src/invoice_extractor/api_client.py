"""
OpenAI API client construction. Works with OpenAI directly or through OpenRouter.
"""
from __future__ import annotations

from openai import OpenAI

from .config import Settings
from .errors import ConfigurationError


def get_openai_client(settings: Settings) -> OpenAI:
    """Build a client for the configured provider. Retries are left to the extraction engine."""
    if not settings.api_key:
        raise ConfigurationError("Set OPENAI_API_KEY or OPENROUTER_API_KEY to run extraction.")
    kwargs = {
        "api_key": settings.api_key,
        "timeout": settings.request_timeout_s,
        "max_retries": 0,
    }
    if settings.base_url:
        kwargs["base_url"] = settings.base_url
    return OpenAI(**kwargs)
