"""
Pydantic models for documents flowing through the pipeline.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .schema import CSV_COLUMNS, FILE_NAME_COLUMN, InvoiceRecord


class SourceDocument(BaseModel):
    """Text of one invoice PDF, as produced by the document loader."""
    model_config = ConfigDict(frozen=True)

    identifier: str = Field(description="File name of the source PDF")
    text: str = Field(description="Text extracted from the PDF")
    origin: str = Field(description="Path the PDF was read from")


class ExtractionResult(BaseModel):
    """A validated invoice record tagged with the file it came from."""
    model_config = ConfigDict(frozen=True)

    file_name: str
    record: InvoiceRecord

    def as_dict(self) -> dict:
        data = self.record.model_dump()
        data[FILE_NAME_COLUMN] = self.file_name
        return data

    def as_row(self) -> list:
        """Values in output column order."""
        data = self.as_dict()
        return [data[col] for col in CSV_COLUMNS]
