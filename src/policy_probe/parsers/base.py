# parsers/base.py

from abc import ABC, abstractmethod
from pathlib import Path

from .models import ExtractedText


class TextExtractor(ABC):
    @abstractmethod
    def extract(self, source: str | Path) -> ExtractedText:
        """
        Extract plain text from a stored upload.

        Requirements:
        - Deterministic output for same input
        - Line breaks preserved so headings stay on their own line
        """
        raise NotImplementedError
