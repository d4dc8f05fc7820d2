# src/policy_probe/vectorstores/factory.py

from qdrant_client.models import Distance

from policy_probe.observability.base import MetricsHook, NoOpMetricsHook

from .base import SegmentStore
from .config import StoreConfig

_DISTANCES = {
    "cosine": Distance.COSINE,
    "dot": Distance.DOT,
    "euclid": Distance.EUCLID,
}


def create_segment_store(
    config: StoreConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> SegmentStore:
    """Create the segment store described by ``config``.

    Raises:
        ValueError: If vector_size is not positive or distance is unknown.
    """
    if config.vector_size <= 0:
        raise ValueError("vector_size must be > 0")
    if config.distance not in _DISTANCES:
        raise ValueError(f"Unknown distance: {config.distance}")

    from .qdrantvectorstore import QdrantSegmentStore

    return QdrantSegmentStore(
        url=config.url,
        path=config.path,
        api_key=config.api_key,
        collection_name=config.collection_name,
        vector_size=config.vector_size,
        distance=_DISTANCES[config.distance],
        on_disk=config.on_disk,
        metrics_hook=metrics_hook,
    )
