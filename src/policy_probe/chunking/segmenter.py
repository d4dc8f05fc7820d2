# chunking/segmenter.py

import re
from collections.abc import Iterable

from .models import Chunk, ChunkMetadata, Section

MAX_PARAGRAPH_CHARS = 800
SENTENCES_PER_CHUNK = 3
# Segments at or under this many characters are dropped as noise.
MIN_CHUNK_CHARS = 20

FALLBACK_HEADING = "Document"

_PARAGRAPH_BREAK = re.compile(r"\n\n+")
_SENTENCE = re.compile(r"[^.!?]+[.!?]+")


def split_into_segments(content: str) -> list[str]:
    """
    Split a body of text into retrieval-sized segments.

    - Paragraphs are separated by two or more newlines.
    - Paragraphs over MAX_PARAGRAPH_CHARS are cut into groups of
      SENTENCES_PER_CHUNK sentences; a shorter remainder is kept as the last
      group. Text after the final terminator is not a sentence and is lost.
    - No noise filtering happens here.
    """
    if not content or not content.strip():
        return []

    paragraphs = [p.strip() for p in _PARAGRAPH_BREAK.split(content)]

    segments: list[str] = []
    for paragraph in paragraphs:
        if not paragraph:
            continue
        if len(paragraph) <= MAX_PARAGRAPH_CHARS:
            segments.append(paragraph)
            continue

        sentences = _SENTENCE.findall(paragraph) or [paragraph]
        for i in range(0, len(sentences), SENTENCES_PER_CHUNK):
            group = sentences[i : i + SENTENCES_PER_CHUNK]
            segments.append(" ".join(s.strip() for s in group))

    return segments


def _is_noise(segment: str) -> bool:
    return len(segment.strip()) <= MIN_CHUNK_CHARS


def segment_sections(sections: Iterable[Section], source_page: int = 1) -> list[Chunk]:
    """Walk the forest pre-order and emit chunks in document order.

    A root is its own top-level section and its own parent heading. Every
    descendant inherits the root heading and takes its direct parent's heading.
    """
    chunks: list[Chunk] = []
    for root in sections:
        _segment_section(
            root,
            top_level_section=root.heading,
            parent_heading=root.heading,
            source_page=source_page,
            out=chunks,
        )
    return chunks


def _segment_section(
    section: Section,
    *,
    top_level_section: str,
    parent_heading: str,
    source_page: int,
    out: list[Chunk],
) -> None:
    metadata = ChunkMetadata(
        parent_heading=parent_heading,
        top_level_section=top_level_section,
        section_path=section.path,
        source_page=source_page,
    )
    for segment in split_into_segments(section.content):
        if not _is_noise(segment):
            out.append(Chunk(content=segment, metadata=metadata))

    for child in section.children:
        _segment_section(
            child,
            top_level_section=top_level_section,
            parent_heading=section.heading,
            source_page=source_page,
            out=out,
        )


def segment_flat(text: str, source_page: int = 1) -> list[Chunk]:
    """Paragraph chunking for documents without headings.

    Paths are the 1-based position of each segment before noise filtering,
    so a dropped segment leaves a gap in the numbering.
    """
    return [
        Chunk(
            content=segment,
            metadata=ChunkMetadata(
                parent_heading=FALLBACK_HEADING,
                top_level_section=FALLBACK_HEADING,
                section_path=str(ordinal),
                source_page=source_page,
            ),
        )
        for ordinal, segment in enumerate(split_into_segments(text), start=1)
        if not _is_noise(segment)
    ]
