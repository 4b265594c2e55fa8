"""
LLM-based invoice extraction: one schema-constrained request per document,
validated against the invoice schema and retried on transient failures.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Optional, Union

import openai
from openai import OpenAI
from tenacity.wait import wait_base

from .api_client import get_openai_client
from .config import DEFAULT_MAX_ATTEMPTS, Settings
from .errors import ExtractionError, ValidationError
from .models import ExtractionResult, SourceDocument
from .retry import call_with_retry
from .schema import InvoiceRecord, request_schema, validate_record

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant that extracts detailed information from invoice contents. "
    "Focus on quality and extract detailed information to create an accurate representation "
    "of the invoice data."
)

# (system, prompt, schema) -> raw response text, or an already decoded object
Generator = Callable[[str, str, dict], Union[str, dict, None]]

_TRANSIENT_API_ERRORS = (
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
)


def build_prompt(text: str) -> str:
    return f"Extract the following information from this invoice content: {text}"


def is_retryable(exc: BaseException) -> bool:
    """Validation failures and transient API errors are worth another attempt."""
    return isinstance(exc, (ValidationError,) + _TRANSIENT_API_ERRORS)


def parse_response(raw: Union[str, dict, None]) -> Any:
    """Decode a response body into JSON, tolerating markdown code fences."""
    if isinstance(raw, dict):
        return raw
    content = (raw or "").strip()
    if not content:
        raise ValidationError("empty response")
    if "```" in content:
        content = re.sub(r"```(?:json)?\s*", "", content).replace("```", "").strip()
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ValidationError(f"response is not valid JSON: {e}") from e


class OpenAIGenerator:
    """Schema-constrained chat completion against the OpenAI (or OpenRouter) API."""

    def __init__(self, client: OpenAI, model: str, temperature: float = 0.0):
        self.client = client
        self.model = model
        self.temperature = temperature

    def __call__(self, system: str, prompt: str, schema: dict) -> Optional[str]:
        resp = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            response_format={
                "type": "json_schema",
                "json_schema": {"name": "invoice", "strict": True, "schema": schema},
            },
            temperature=self.temperature,
        )
        if not resp.choices:
            raise ValidationError("response has no choices")
        message = resp.choices[0].message
        if getattr(message, "refusal", None):
            raise ValidationError(f"model refused: {message.refusal}")
        return message.content


class InvoiceExtractor:
    """Turns one document's text into a validated invoice record."""

    def __init__(
        self,
        generate: Generator,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        wait: Optional[wait_base] = None,
        system_prompt: str = SYSTEM_PROMPT,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.generate = generate
        self.max_attempts = max_attempts
        self.wait = wait
        self.system_prompt = system_prompt

    @classmethod
    def from_settings(cls, settings: Settings, wait: Optional[wait_base] = None) -> "InvoiceExtractor":
        generator = OpenAIGenerator(get_openai_client(settings), settings.model, settings.temperature)
        return cls(generator, max_attempts=settings.max_attempts, wait=wait)

    def _attempt(self, text: str) -> InvoiceRecord:
        raw = self.generate(self.system_prompt, build_prompt(text), request_schema())
        outcome = validate_record(parse_response(raw))
        if not outcome.ok:
            raise ValidationError(list(outcome.errors))
        return outcome.record

    def extract_text(self, text: str, identifier: str = "<text>") -> InvoiceRecord:
        """Extract a record from raw invoice text. Raises ExtractionError when every attempt fails."""
        if not text or not text.strip():
            raise ExtractionError(identifier, ValueError("document has no extractable text"))

        attempts = 0

        def attempt() -> InvoiceRecord:
            nonlocal attempts
            attempts += 1
            return self._attempt(text)

        try:
            return call_with_retry(
                attempt,
                max_attempts=self.max_attempts,
                is_retryable=is_retryable,
                wait=self.wait,
            )
        except Exception as e:
            raise ExtractionError(identifier, e, attempts) from e

    def extract(self, document: SourceDocument) -> ExtractionResult:
        record = self.extract_text(document.text, document.identifier)
        return ExtractionResult(file_name=document.identifier, record=record)
