from unittest.mock import MagicMock, patch

import pytest

from invoice_extractor.errors import DocumentParseError
from invoice_extractor.extract import _tables_to_text, extract_text_from_pdf
from invoice_extractor.loader import list_invoice_files, load_documents


def test_only_pdfs_in_name_order(invoice_dir, fake_pdfs):
    (invoice_dir / "b.pdf").write_text("second")
    (invoice_dir / "a.PDF").write_text("first")
    (invoice_dir / "notes.txt").write_text("ignored")
    (invoice_dir / "nested.pdf").mkdir()

    docs = load_documents(invoice_dir)

    assert [d.identifier for d in docs] == ["a.PDF", "b.pdf"]
    assert [d.text for d in docs] == ["first", "second"]
    assert docs[0].origin == str(invoice_dir / "a.PDF")


def test_empty_directory(invoice_dir, fake_pdfs):
    assert load_documents(invoice_dir) == []


def test_missing_directory_is_io_error(tmp_path):
    with pytest.raises(FileNotFoundError):
        list_invoice_files(tmp_path / "missing")


def test_file_instead_of_directory(tmp_path):
    f = tmp_path / "invoice.pdf"
    f.write_text("x")
    with pytest.raises(OSError):
        list_invoice_files(f)


def test_parse_error_aborts_batch(invoice_dir, monkeypatch):
    (invoice_dir / "a.pdf").write_text("ok")
    (invoice_dir / "b.pdf").write_text("broken")

    def fake_extract(path):
        if path.name == "b.pdf":
            raise DocumentParseError(path, ValueError("bad xref"))
        return "text"

    monkeypatch.setattr("invoice_extractor.loader.extract_text_from_pdf", fake_extract)
    with pytest.raises(DocumentParseError, match="b.pdf"):
        load_documents(invoice_dir)


def test_corrupt_pdf_raises_document_parse_error(tmp_path):
    f = tmp_path / "corrupt.pdf"
    f.write_bytes(b"this is not a pdf")
    with pytest.raises(DocumentParseError) as excinfo:
        extract_text_from_pdf(f)
    assert excinfo.value.path == f


def test_tables_to_text():
    tables = [[["Item", "Qty", None], [None, "", None], ["Widget", "2", "9.99"]], []]
    assert _tables_to_text(tables) == "Item | Qty | \nWidget | 2 | 9.99"


def _page(text, tables):
    page = MagicMock()
    page.extract_text.return_value = text
    page.extract_tables.return_value = tables
    return page


def test_extract_text_appends_table_rows(tmp_path):
    with patch("invoice_extractor.extract.pdfplumber.open") as mock_open:
        mock_open.return_value.__enter__.return_value.pages = [
            _page("Invoice INV-001", [[["Widget", "2"]]]),
            _page(None, []),
        ]
        text = extract_text_from_pdf(tmp_path / "x.pdf")
    assert text.startswith("Invoice INV-001")
    assert text.endswith("Widget | 2")
    assert "--- LINE ITEM TABLE ---" in text


def test_extract_text_skips_tables_already_in_page_text(tmp_path):
    with patch("invoice_extractor.extract.pdfplumber.open") as mock_open:
        mock_open.return_value.__enter__.return_value.pages = [
            _page("Header\nWidget | 2", [[["Widget", "2"]]]),
        ]
        assert extract_text_from_pdf(tmp_path / "x.pdf") == "Header\nWidget | 2"
