"""Tests for resume text loading."""

from pathlib import Path
from unittest.mock import patch

import pytest

from src.resume.extractor import extract_text_from_pdf, load_resume_text

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


class TestLoadResumeText:
    def test_reads_text_fixture(self) -> None:
        text = load_resume_text(FIXTURES_DIR / "sample_resume.txt")
        assert text.startswith("Priya Raman")
        assert "WORK EXPERIENCE" in text

    def test_markdown_is_text(self, tmp_path: Path) -> None:
        path = tmp_path / "resume.MD"
        path.write_text("# Jane Doe\n\n## Skills\nPython", encoding="utf-8")
        assert "## Skills" in load_resume_text(path)

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Unsupported resume format '.docx'"):
            load_resume_text(tmp_path / "resume.docx")

    def test_missing_text_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Resume file not found"):
            load_resume_text(tmp_path / "missing.txt")

    def test_missing_pdf(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="PDF file not found"):
            load_resume_text(tmp_path / "missing.pdf")


class TestExtractTextFromPdf:
    def test_pymupdf_missing(self, tmp_path: Path) -> None:
        path = tmp_path / "resume.pdf"
        path.write_bytes(b"%PDF-1.4\n")
        with (
            patch.dict("sys.modules", {"pymupdf": None}),
            pytest.raises(ImportError, match="resume-normal-scoring\\[pdf\\]"),
        ):
            extract_text_from_pdf(path)
