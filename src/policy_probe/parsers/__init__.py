from pathlib import Path

from .base import TextExtractor
from .models import ExtractedText
from .pdf_parser import PdfTextExtractor
from .text_parser import PlainTextExtractor


def extractor_for(filename: str | Path) -> TextExtractor:
    """PDFs go through pdfplumber; everything else is read as text."""
    if str(filename).lower().endswith(".pdf"):
        return PdfTextExtractor()
    return PlainTextExtractor()


__all__ = [
    "ExtractedText",
    "PdfTextExtractor",
    "PlainTextExtractor",
    "TextExtractor",
    "extractor_for",
]
