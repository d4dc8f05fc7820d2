# parsers/models.py

from dataclasses import dataclass
from typing import Literal

SourceType = Literal["text", "pdf"]


@dataclass(frozen=True)
class ExtractedText:
    text: str
    pages: int
    source_type: SourceType
