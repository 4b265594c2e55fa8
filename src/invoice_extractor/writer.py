"""
CSV output: one row per extracted invoice, fixed column order, no header row.
"""
from __future__ import annotations

import csv
import logging
import os
import tempfile
from decimal import Decimal
from pathlib import Path
from typing import Iterable

from .models import ExtractionResult

logger = logging.getLogger(__name__)


def _format_float(value: float) -> str:
    """Shortest round-trip text, exponent form only below 1e-6 or from 1e21 (as JavaScript prints numbers)."""
    magnitude = abs(value)
    if value == 0:
        return "0"
    if 1e-6 <= magnitude < 1e21:
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    mantissa, _, exponent = repr(value).partition("e")
    exp = int(exponent)
    return f"{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp)}"


def format_value(value) -> str:
    """Numbers as plain text with no thousands separators; integral values without a decimal part."""
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, int):
        return str(value)
    return "" if value is None else str(value)


def write_csv(batch: Iterable[ExtractionResult], output_path: str | Path) -> Path:
    """
    Write the batch to output_path, replacing any existing file.
    Rows go to a temporary file next to the target, which is moved into place
    only once fully written and closed.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        f = os.fdopen(fd, "w", newline="", encoding="utf-8")
    except BaseException:
        os.close(fd)
        os.unlink(tmp_name)
        raise

    rows = 0
    try:
        with f:
            writer = csv.writer(f, lineterminator="\n")
            for result in batch:
                writer.writerow([format_value(v) for v in result.as_row()])
                rows += 1
        os.chmod(tmp_name, 0o644)  # mkstemp creates 0600
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.debug("Wrote %d row(s) to %s", rows, path)
    return path
