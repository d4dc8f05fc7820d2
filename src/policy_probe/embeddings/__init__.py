from .base import Embedding, EmbeddingsClient

__all__ = [
    "Embedding",
    "EmbeddingsClient",
]
