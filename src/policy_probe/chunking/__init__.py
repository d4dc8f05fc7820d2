from .chunking import chunk_document
from .models import Chunk, ChunkMetadata, Section
from .parser import HeadingKind, build_hierarchy, match_heading, parse_sections
from .segmenter import segment_flat, segment_sections, split_into_segments

__all__ = [
    "Chunk",
    "ChunkMetadata",
    "HeadingKind",
    "Section",
    "build_hierarchy",
    "chunk_document",
    "match_heading",
    "parse_sections",
    "segment_flat",
    "segment_sections",
    "split_into_segments",
]
