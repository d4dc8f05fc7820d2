# parsers/pdf_parser.py

import logging
from pathlib import Path
from typing import Any, cast

import pdfplumber
from pdfminer.pdfparser import PDFSyntaxError
from pdfplumber.utils.exceptions import PdfminerException

from .base import TextExtractor
from .models import ExtractedText

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"


class PdfTextExtractor(TextExtractor):
    """
    Deterministic PDF text extraction.
    - Uses page order
    - Keeps pdfplumber's line breaks within a page
    - Separates pages with a blank line
    """

    def extract(self, source: str | Path) -> ExtractedText:
        try:
            # pdfplumber.open accepts path-like or buffer objects; cast to Any
            with pdfplumber.open(cast(Any, source)) as pdf:
                page_texts = [page.extract_text() or "" for page in pdf.pages]
        except (PDFSyntaxError, PdfminerException) as exc:
            raise ValueError(f"failed to extract text from PDF: {source}") from exc

        logger.debug("Extracted %d pages from %s", len(page_texts), source)
        text = PAGE_SEPARATOR.join(page_texts).strip()
        return ExtractedText(text=text, pages=len(page_texts), source_type="pdf")
