"""
Shared fixtures: valid invoice payloads, a scripted fake LLM, and fake PDFs
whose "extracted text" is simply the file contents.
"""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from tenacity import wait_none

from invoice_extractor.llm_extract import InvoiceExtractor


def make_payload(**overrides) -> dict:
    payload = {
        "invoiceNumber": "INV-001",
        "issueDate": "2024-01-15",
        "companyName": "Acme Supplies Ltd",
        "companyAddress": "1 Main Street, Springfield",
        "dueDate": "2024-02-15",
        "totalAmount": 150.00,
        "currency": "USD",
        "customerName": "Globex Corporation",
        "customerAddress": "42 Elm Road, Shelbyville",
        "taxes": 0,
    }
    payload.update(overrides)
    return payload


class ScriptedGenerator:
    """Returns (or raises) the scripted responses in order; the last one repeats."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls: list[tuple[str, str, dict]] = []

    def __call__(self, system: str, prompt: str, schema: dict):
        self.calls.append((system, prompt, schema))
        idx = min(len(self.calls), len(self.responses)) - 1
        response = self.responses[idx]
        if isinstance(response, BaseException):
            raise response
        if isinstance(response, dict):
            return json.dumps(response)
        return response


def make_extractor(generate, max_attempts: int = 8) -> InvoiceExtractor:
    return InvoiceExtractor(generate, max_attempts=max_attempts, wait=wait_none())


@pytest.fixture
def payload() -> dict:
    return make_payload()


@pytest.fixture
def fake_pdfs(monkeypatch):
    """Treat .pdf files as plain text so tests need no real PDFs."""
    monkeypatch.setattr(
        "invoice_extractor.loader.extract_text_from_pdf",
        lambda path: Path(path).read_text(encoding="utf-8"),
    )


@pytest.fixture
def invoice_dir(tmp_path) -> Path:
    d = tmp_path / "invoices"
    d.mkdir()
    return d
