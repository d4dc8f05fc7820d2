# parsers/text_parser.py

from pathlib import Path

from .base import TextExtractor
from .models import ExtractedText


class PlainTextExtractor(TextExtractor):
    """Reads plain text and markdown uploads as UTF-8."""

    def extract(self, source: str | Path) -> ExtractedText:
        text = Path(source).read_text(encoding="utf-8")
        return ExtractedText(text=text, pages=1, source_type="text")
