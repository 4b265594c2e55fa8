"""
PDF text extraction with pdfplumber: page text plus table contents.
"""
from __future__ import annotations

from pathlib import Path

import pdfplumber

from .errors import DocumentParseError


def _tables_to_text(tables: list) -> str:
    """Convert extracted tables to readable text lines for LLM consumption."""
    lines: list[str] = []
    for table in tables:
        if not table:
            continue
        for row in table:
            if row and any(cell is not None and str(cell).strip() for cell in row):
                row_str = " | ".join(str(cell or "").strip() for cell in row)
                if row_str.strip():
                    lines.append(row_str)
    return "\n".join(lines)


def extract_text_from_pdf(path: str | Path) -> str:
    """
    Extract all text from a PDF: page text first (header, parties, totals),
    then table rows when they are not already part of the page text.
    Raises DocumentParseError if the file cannot be parsed as a PDF.
    OSError from reading the file propagates unchanged.
    """
    path = Path(path)
    text_parts: list[str] = []
    table_parts: list[str] = []
    try:
        with pdfplumber.open(path) as pdf:
            for page in pdf.pages:
                t = page.extract_text()
                if t:
                    text_parts.append(t)
                tables = page.extract_tables()
                if tables:
                    table_parts.append(_tables_to_text(tables))
    except OSError:
        raise
    except Exception as e:
        raise DocumentParseError(path, e) from e

    all_text = "\n\n".join(text_parts)
    table_text = "\n\n".join(t for t in table_parts if t)
    if table_text and table_text not in all_text:
        all_text = all_text + "\n\n--- LINE ITEM TABLE ---\n\n" + table_text
    return all_text
