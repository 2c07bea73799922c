"""Text cleanup for lines pulled out of catalog PDFs."""
from __future__ import annotations

import re
import unicodedata


def normalize_whitespace(text: str) -> str:
    """Normalize whitespace: collapse multiple spaces, remove leading/trailing."""
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def normalize_punctuation(text: str) -> str:
    """Normalize common punctuation variations."""
    # Replace smart quotes
    text = text.replace('“', '"').replace('”', '"')
    text = text.replace('‘', "'").replace('’', "'")

    # Normalize dashes
    text = text.replace('–', '-').replace('—', '-')

    return text


def normalize_unicode(text: str) -> str:
    """Compose characters (NFC) so Turkish letters compare and match reliably."""
    return unicodedata.normalize('NFC', text)


def normalize_line(line: str) -> str:
    """Clean a single extracted line before name matching."""
    if not line:
        return ""
    line = normalize_unicode(line)
    line = normalize_punctuation(line)
    return normalize_whitespace(line)


def split_lines(text: str) -> list[str]:
    """Split extracted text into cleaned, non-empty lines."""
    if not text or not text.strip():
        return []
    lines = (normalize_line(line) for line in text.splitlines())
    return [line for line in lines if line]
