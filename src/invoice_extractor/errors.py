"""
Error types raised by the extraction pipeline.
Filesystem failures are not wrapped: they surface as the builtin OSError family.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class PipelineError(Exception):
    """Base class for invoice extraction errors."""


class ConfigurationError(PipelineError):
    """Missing credentials or invalid settings."""


class DocumentParseError(PipelineError):
    """The PDF text extraction step could not read a document."""

    def __init__(self, path: str | Path, cause: Optional[BaseException] = None):
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Could not extract text from {self.path.name}{detail}")


class ValidationError(PipelineError):
    """A generation response did not conform to the invoice schema."""

    def __init__(self, errors: list[str] | str):
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        super().__init__("; ".join(self.errors))


class ExtractionError(PipelineError):
    """All extraction attempts for one document failed."""

    def __init__(self, identifier: str, cause: Optional[BaseException] = None, attempts: int = 0):
        self.identifier = identifier
        self.cause = cause
        self.attempts = attempts
        msg = f"Extraction failed for {identifier}"
        if attempts:
            msg += f" after {attempts} attempt(s)"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)
