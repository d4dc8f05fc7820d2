from .base import SegmentStore
from .config import POLICY_SEGMENT_COLLECTION, StoreConfig
from .factory import create_segment_store
from .qdrantvectorstore import QdrantSegmentStore
from .types import VectorItem

__all__ = [
    "POLICY_SEGMENT_COLLECTION",
    "QdrantSegmentStore",
    "SegmentStore",
    "StoreConfig",
    "VectorItem",
    "create_segment_store",
]
