# Chunking
from .chunking import Chunk, ChunkMetadata, Section, chunk_document

# Embeddings
from .embeddings import Embedding, EmbeddingsClient

# Ingestion
from .ingestion import (
    IngestionConfig,
    IngestionReport,
    IngestionService,
    PolicySegment,
)

# Observability
from .observability import LoggingMetricsHook, MetricsHook, NoOpMetricsHook

# Parsers
from .parsers import ExtractedText, PdfTextExtractor, PlainTextExtractor

# Upload
from .upload import FileValidationError, UploadConfig, UploadResult, UploadService

# Vector stores
from .vectorstores import (
    QdrantSegmentStore,
    SegmentStore,
    StoreConfig,
    VectorItem,
    create_segment_store,
)

__all__ = [
    # Chunking
    "Chunk",
    "ChunkMetadata",
    "Section",
    "chunk_document",
    # Embeddings
    "Embedding",
    "EmbeddingsClient",
    # Ingestion
    "IngestionConfig",
    "IngestionReport",
    "IngestionService",
    "PolicySegment",
    # Observability
    "LoggingMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Parsers
    "ExtractedText",
    "PdfTextExtractor",
    "PlainTextExtractor",
    # Upload
    "FileValidationError",
    "UploadConfig",
    "UploadResult",
    "UploadService",
    # Vector stores
    "QdrantSegmentStore",
    "SegmentStore",
    "StoreConfig",
    "VectorItem",
    "create_segment_store",
]
