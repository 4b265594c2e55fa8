"""
Invoice extraction pipeline: PDF folder -> LLM structured extraction -> CSV rows.
"""

from .pipeline import run_pipeline, run_from_settings, PipelineReport
from .llm_extract import InvoiceExtractor
from .models import SourceDocument, ExtractionResult
from .schema import InvoiceRecord, CSV_COLUMNS

__all__ = [
    "run_pipeline",
    "run_from_settings",
    "PipelineReport",
    "InvoiceExtractor",
    "SourceDocument",
    "ExtractionResult",
    "InvoiceRecord",
    "CSV_COLUMNS",
]
