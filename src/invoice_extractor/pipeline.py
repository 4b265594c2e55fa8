"""
End-to-end pipeline: PDFs -> text -> LLM extraction -> CSV.
A failed document is logged and skipped; only folder or output I/O errors stop a run.
"""
from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from .config import Settings
from .errors import ExtractionError
from .llm_extract import InvoiceExtractor
from .loader import load_documents
from .models import ExtractionResult, SourceDocument
from .writer import write_csv

logger = logging.getLogger(__name__)


class DocumentStatus(str, Enum):
    PENDING = "pending"
    EXTRACTING = "extracting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class DocumentOutcome:
    """Processing state of one document. SUCCEEDED and FAILED are terminal."""
    identifier: str
    status: DocumentStatus = DocumentStatus.PENDING
    result: Optional[ExtractionResult] = None
    error: Optional[ExtractionError] = None


@dataclass
class PipelineReport:
    output_path: Path
    outcomes: list[DocumentOutcome] = field(default_factory=list)

    @property
    def batch(self) -> list[ExtractionResult]:
        """Successful results in document order."""
        return [o.result for o in self.outcomes if o.status is DocumentStatus.SUCCEEDED]

    @property
    def failed(self) -> list[DocumentOutcome]:
        return [o for o in self.outcomes if o.status is DocumentStatus.FAILED]


def process_document(document: SourceDocument, extractor: InvoiceExtractor) -> DocumentOutcome:
    """Run extraction for one document; extraction errors are captured in the outcome."""
    outcome = DocumentOutcome(identifier=document.identifier)
    outcome.status = DocumentStatus.EXTRACTING
    logger.info("Processing invoice: %s", document.identifier)
    try:
        outcome.result = extractor.extract(document)
    except ExtractionError as e:
        outcome.status = DocumentStatus.FAILED
        outcome.error = e
        logger.error("Error extracting invoice data: %s", e)
        return outcome
    outcome.status = DocumentStatus.SUCCEEDED
    logger.info(
        "Extracted invoice data: %s",
        json.dumps(outcome.result.record.model_dump(), indent=2, ensure_ascii=False),
    )
    return outcome


def run_pipeline(
    input_dir: str | Path,
    output_path: str | Path,
    extractor: InvoiceExtractor,
    max_workers: int = 1,
) -> PipelineReport:
    """
    Extract every invoice PDF in input_dir and write the successes to output_path.
    When max_workers > 1, documents are extracted in parallel; row order still
    follows document order.
    """
    documents = load_documents(input_dir)
    logger.info("Parsed %d invoices.", len(documents))

    if max_workers <= 1 or len(documents) <= 1:
        outcomes = [process_document(doc, extractor) for doc in documents]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            outcomes = list(executor.map(lambda doc: process_document(doc, extractor), documents))

    report = PipelineReport(output_path=Path(output_path), outcomes=outcomes)
    write_csv(report.batch, report.output_path)
    logger.info("CSV file written to %s", report.output_path)
    return report


def run_from_settings(settings: Settings, extractor: Optional[InvoiceExtractor] = None) -> PipelineReport:
    """Run the pipeline with the folders and LLM options from settings."""
    if extractor is None:
        extractor = InvoiceExtractor.from_settings(settings)
    return run_pipeline(
        settings.input_dir,
        settings.output_path,
        extractor,
        max_workers=settings.max_workers,
    )
