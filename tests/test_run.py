from pathlib import Path

import pytest

import run
from invoice_extractor.config import Settings
from invoice_extractor.errors import ConfigurationError, DocumentParseError, ExtractionError
from invoice_extractor.pipeline import DocumentOutcome, DocumentStatus, PipelineReport


@pytest.fixture
def cli(monkeypatch):
    monkeypatch.setattr("sys.argv", ["run.py", "--input", "in", "--output", "out.csv"])
    monkeypatch.setattr(run, "load_settings", lambda **kwargs: Settings(**{k: v for k, v in kwargs.items() if v is not None}))


def _raise(exc):
    def fail(settings):
        raise exc
    return fail


@pytest.mark.parametrize(
    "exc",
    [
        ConfigurationError("Set OPENAI_API_KEY"),
        DocumentParseError("in/broken.pdf"),
        FileNotFoundError(2, "No such file or directory", "in"),
        PermissionError(13, "Permission denied", "out.csv"),
    ],
)
def test_fatal_errors_exit_with_status_1(cli, monkeypatch, capsys, exc):
    monkeypatch.setattr(run, "run_from_settings", _raise(exc))
    assert run.main() == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_failed_documents_still_exit_with_status_0(cli, monkeypatch, capsys):
    received = []

    def fake_run(settings):
        received.append(settings)
        return PipelineReport(
            output_path=Path("out.csv"),
            outcomes=[
                DocumentOutcome(identifier="a.pdf", status=DocumentStatus.FAILED, error=ExtractionError("a.pdf")),
            ],
        )

    monkeypatch.setattr(run, "run_from_settings", fake_run)

    assert run.main() == 0
    assert received[0].input_dir == "in"
    assert received[0].output_path == "out.csv"
    out = capsys.readouterr().out
    assert "Extracted 0 of 1 invoice(s)" in out
    assert "a.pdf" in out
