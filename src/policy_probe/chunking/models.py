# chunking/models.py

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Section:
    """One heading and the body text that follows it up to the next heading.

    Sections are mutable only while the parser builds the forest; children are
    appended in document order. There is no link back to the parent.
    """

    heading: str
    level: int
    path: str
    content: str = ""
    children: list["Section"] = field(default_factory=list)


@dataclass(frozen=True)
class ChunkMetadata:
    parent_heading: str
    top_level_section: str
    section_path: str
    source_page: int = 1


@dataclass(frozen=True)
class Chunk:
    content: str
    metadata: ChunkMetadata

    def to_record(self) -> dict[str, Any]:
        """Flatten into the five-field record handed to ingestion."""
        return {
            "content": self.content,
            "parent_heading": self.metadata.parent_heading,
            "top_level_section": self.metadata.top_level_section,
            "section_path": self.metadata.section_path,
            "source_page": self.metadata.source_page,
        }
