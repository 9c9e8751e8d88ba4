"""Resume text loading: plain text files, or PDF via pymupdf (optional dependency)."""

from pathlib import Path

_TEXT_SUFFIXES = {".txt", ".md", ".text"}


def extract_text_from_pdf(path: str | Path) -> str:
    """Extract plain text from a PDF file.

    Raises:
        FileNotFoundError: If the PDF file does not exist.
        ImportError: If pymupdf is not installed.
    """
    path = Path(path)
    if not path.exists():
        msg = f"PDF file not found: {path}"
        raise FileNotFoundError(msg)

    try:
        import pymupdf
    except ImportError:
        msg = (
            "pymupdf is required for PDF extraction. "
            "Install with: pip install 'resume-normal-scoring[pdf]'"
        )
        raise ImportError(msg) from None

    with pymupdf.open(str(path)) as doc:
        return "\n".join(page.get_text() for page in doc)


def load_resume_text(path: str | Path) -> str:
    """Return the raw text of a resume file.

    ``.pdf`` goes through pymupdf; ``.txt``/``.md`` are read as UTF-8.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        return extract_text_from_pdf(path)
    if suffix not in _TEXT_SUFFIXES:
        msg = f"Unsupported resume format '{suffix}' (expected .pdf, .txt or .md)"
        raise ValueError(msg)
    if not path.exists():
        msg = f"Resume file not found: {path}"
        raise FileNotFoundError(msg)
    return path.read_text(encoding="utf-8")
