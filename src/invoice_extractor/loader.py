"""
Document loader: reads every PDF in a folder into a SourceDocument.
"""
from __future__ import annotations

import errno
import logging
import os
from pathlib import Path

from .extract import extract_text_from_pdf
from .models import SourceDocument

logger = logging.getLogger(__name__)

ACCEPTED_EXTENSION = ".pdf"


def list_invoice_files(directory: str | Path) -> list[Path]:
    """PDF files directly inside directory, sorted by file name. Extension match ignores case."""
    path = Path(directory)
    if not path.exists():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))
    if not path.is_dir():
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(path))
    files = [p for p in path.iterdir() if p.is_file() and p.suffix.lower() == ACCEPTED_EXTENSION]
    return sorted(files, key=lambda p: p.name)


def load_documents(directory: str | Path) -> list[SourceDocument]:
    """
    Extract text from all invoice PDFs in directory, in file name order.
    The first unreadable file aborts the batch (OSError or DocumentParseError).
    """
    documents: list[SourceDocument] = []
    for pdf_path in list_invoice_files(directory):
        text = extract_text_from_pdf(pdf_path)
        logger.debug("Read %d characters from %s", len(text), pdf_path.name)
        documents.append(SourceDocument(identifier=pdf_path.name, text=text, origin=str(pdf_path)))
    return documents
