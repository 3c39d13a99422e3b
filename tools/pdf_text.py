"""
PDF Text Extraction
Reads the embedded text layer of a bar schedule PDF with PyMuPDF.

Each page's text is collected in page order and the pages are joined with a
single newline. Failures are logged and produce empty text so a comparison
can still run on whatever was read.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)


PAGE_SEPARATOR = "\n"


@dataclass
class DocumentText:
    """Text extracted from one PDF."""
    filepath: str
    filename: str
    pages: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def full_text(self) -> str:
        return PAGE_SEPARATOR.join(self.pages)

    @property
    def ok(self) -> bool:
        return not self.errors


def read_document(pdf_path: str) -> DocumentText:
    """
    Extract per-page text from a PDF.

    Args:
        pdf_path: Path to the PDF file

    Returns:
        DocumentText; on failure pages is empty and errors explains why
    """
    path = Path(pdf_path)
    result = DocumentText(filepath=str(path), filename=path.name)

    if not path.exists():
        logger.error(f"File not found: {path}")
        result.errors.append(f"File not found: {path}")
        return result

    if path.suffix.lower() != '.pdf':
        logger.error(f"Not a PDF file: {path}")
        result.errors.append(f"Not a PDF file: {path}")
        return result

    try:
        with fitz.open(str(path)) as doc:
            for page in doc:
                result.pages.append(page.get_text())
    except Exception as e:
        logger.error(f"Error extracting PDF text from {path.name}: {e}")
        result.pages = []
        result.errors.append(f"Error extracting PDF text: {e}")
        return result

    logger.info(f"Extracted {len(result.full_text)} chars from {result.page_count} pages of {path.name}")
    return result


def extract_document_text(pdf_path: str) -> str:
    """Full text of a PDF, or "" if it could not be read."""
    return read_document(pdf_path).full_text
