from .config import IngestionConfig
from .segments import PolicySegment
from .service import IngestionReport, IngestionService

__all__ = [
    "IngestionConfig",
    "IngestionReport",
    "IngestionService",
    "PolicySegment",
]
