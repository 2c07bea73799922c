"""PDF parsing utilities for catalog ingestion.

Text extraction (pdfplumber with a pypdf fallback), page-image ordering and
the product-name heuristic used when turning a catalog into products.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import BinaryIO, Iterable

import pdfplumber
from pypdf import PdfReader

from .config import settings
from .pipelines.normalization import split_lines

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r'(\d+)')


class ParseError(Exception):
    """Raised when a document cannot be parsed."""
    pass


def is_pdf(filename: str | None, content: bytes | None = None) -> bool:
    """Check the extension, then the magic number if content is given."""
    if filename and filename.lower().endswith('.pdf'):
        return True
    return bool(content) and content.startswith(b'%PDF')


def extract_text_from_pdf(file_obj: BinaryIO) -> str:
    """Extract text from a PDF using native text extraction.

    Args:
        file_obj: Binary file object

    Returns:
        Extracted text, pages separated by blank lines

    Raises:
        ParseError: If neither pdfplumber nor pypdf can read the file
    """
    try:
        # Try pdfplumber first (better text extraction)
        with pdfplumber.open(file_obj) as pdf:
            text_parts = [page.extract_text() or "" for page in pdf.pages]
        return "\n\n".join(part for part in text_parts if part)

    except Exception as e:
        logger.warning(f"pdfplumber extraction failed: {e}, trying pypdf")

        # Fallback to pypdf
        try:
            file_obj.seek(0)
            reader = PdfReader(file_obj)
            text_parts = [page.extract_text() or "" for page in reader.pages]
            return "\n\n".join(part for part in text_parts if part)

        except Exception as e2:
            logger.error(f"pypdf extraction also failed: {e2}")
            raise ParseError(f"Failed to extract text from PDF: {e2}") from e2


def extract_catalog_text(pdf_path: Path) -> str:
    """Text used for name guessing; empty unless INGEST_EXTRACT_TEXT is on."""
    if not settings.ingest.extract_text:
        logger.debug("Text extraction disabled, skipping")
        return ""

    with open(pdf_path, 'rb') as f:
        text = extract_text_from_pdf(f)
    logger.info(f"Extracted {len(text)} characters from {pdf_path.name}")
    return text


def page_index(filename: str) -> int:
    """Page number embedded in a generated file name.

    pdftoppm writes names like ``page0001-07.jpg``; the page is the last run
    of digits in the stem. Files without digits sort first.
    """
    digits = _DIGITS.findall(Path(filename).stem)
    return int(digits[-1]) if digits else 0


def sort_page_files(paths: Iterable[Path]) -> list[Path]:
    """Order page images numerically (page-2 before page-10)."""
    return sorted(paths, key=lambda p: (page_index(p.name), p.name))


def product_name_pattern(
    min_length: int | None = None,
    max_length: int | None = None,
) -> re.Pattern[str]:
    """Lines starting with an uppercase letter, within the length bounds."""
    min_length = min_length or settings.ingest.name_min_length
    max_length = max_length or settings.ingest.name_max_length
    # [^\W\d_] is any letter; the uppercase check is done in guess_product_names
    return re.compile(rf'^[^\W\d_].{{{min_length - 1},{max_length - 1}}}$')


def guess_product_names(text: str) -> list[str]:
    """Guess product names from extracted catalog text.

    A candidate is a line of ``name_min_length``..``name_max_length``
    characters that begins with an uppercase letter.

    Args:
        text: Extracted PDF text (may be empty)

    Returns:
        Candidate names in document order
    """
    pattern = product_name_pattern()
    names = [
        line for line in split_lines(text)
        if line[0].isupper() and pattern.match(line)
    ]
    logger.debug(f"Guessed {len(names)} product names")
    return names
