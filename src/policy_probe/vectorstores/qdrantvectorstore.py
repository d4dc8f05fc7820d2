import logging
from collections.abc import Iterable
from time import monotonic

from qdrant_client import AsyncQdrantClient
from qdrant_client.models import (
    Distance,
    PayloadSchemaType,
    PointStruct,
    TextIndexParams,
    TextIndexType,
    TokenizerType,
    VectorParams,
)

from policy_probe.observability import names
from policy_probe.observability.base import MetricsHook, NoOpMetricsHook

from .base import SegmentStore
from .config import POLICY_SEGMENT_COLLECTION
from .types import VectorItem

logger = logging.getLogger(__name__)

# Fixed payload schema of a policy segment. Only ``content`` is embedded;
# the heading/path fields are stored for filtering and display.
KEYWORD_FIELDS = ("parent_heading", "top_level_section", "section_path")
INTEGER_FIELDS = ("source_page",)
TEXT_FIELDS = ("content",)


class QdrantSegmentStore(SegmentStore):
    """Segment store backed by a Qdrant collection."""

    def __init__(
        self,
        *,
        url: str | None = None,
        path: str | None = None,
        api_key: str | None = None,
        collection_name: str = POLICY_SEGMENT_COLLECTION,
        vector_size: int,
        distance: Distance = Distance.COSINE,
        on_disk: bool = False,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        """
        Initialize the Qdrant segment store.

        Args:
            url: Qdrant server URL. If provided, connects to remote server.
            path: Path to local Qdrant storage directory.
            api_key: API key for Qdrant Cloud (only used with url).
            collection_name: Name of the collection.
            vector_size: Dimensionality of content vectors.
            distance: Distance metric (COSINE, EUCLID, DOT).
            on_disk: Whether to store vectors on disk.
            metrics_hook: Hook for recording metrics.

        Note:
            - If both url and path are None, uses in-memory mode.
            - Local storage (path) requires point IDs to be valid UUIDs.
            - The collection and its payload indexes are created on first use.
        """
        self.metrics_hook = metrics_hook

        if url:
            self._client = AsyncQdrantClient(url=url, api_key=api_key)
        elif path:
            self._client = AsyncQdrantClient(path=path)
        else:
            self._client = AsyncQdrantClient(":memory:")

        self._collection_name = collection_name
        self._vector_size = vector_size
        self._distance = distance
        self._on_disk = on_disk

    @property
    def collection_name(self) -> str:
        return self._collection_name

    async def _ensure_collection(self) -> None:
        """Create the collection and payload indexes if missing."""
        if await self._client.collection_exists(self._collection_name):
            return

        logger.info("Creating collection %s", self._collection_name)
        await self._client.create_collection(
            collection_name=self._collection_name,
            vectors_config=VectorParams(
                size=self._vector_size,
                distance=self._distance,
                on_disk=self._on_disk,
            ),
        )
        for field_name in TEXT_FIELDS:
            await self._client.create_payload_index(
                collection_name=self._collection_name,
                field_name=field_name,
                field_schema=TextIndexParams(
                    type=TextIndexType.TEXT,
                    tokenizer=TokenizerType.WORD,
                    lowercase=True,
                ),
            )
        for field_name in KEYWORD_FIELDS:
            await self._client.create_payload_index(
                collection_name=self._collection_name,
                field_name=field_name,
                field_schema=PayloadSchemaType.KEYWORD,
            )
        for field_name in INTEGER_FIELDS:
            await self._client.create_payload_index(
                collection_name=self._collection_name,
                field_name=field_name,
                field_schema=PayloadSchemaType.INTEGER,
            )

    async def close(self) -> None:
        """Close the Qdrant client."""
        await self._client.close()

    async def upsert(self, *, items: Iterable[VectorItem]) -> None:
        """
        Insert or update segments.

        Raises:
            ValueError: If a vector does not match the configured size.
        """
        start = monotonic()
        points = []
        for item in items:
            if len(item.vector) != self._vector_size:
                raise ValueError(
                    f"vector for {item.id} has size {len(item.vector)}, "
                    f"expected {self._vector_size}"
                )
            points.append(
                PointStruct(id=item.id, vector=item.vector, payload=dict(item.payload))
            )

        if not points:
            return

        await self._ensure_collection()
        await self._client.upsert(
            collection_name=self._collection_name,
            wait=True,
            points=points,
        )

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.QDRANT_UPSERT_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.QDRANT_OPERATIONS_TOTAL, labels={"operation": "upsert"}
        )

    async def count(self) -> int:
        start = monotonic()
        if not await self._client.collection_exists(self._collection_name):
            return 0

        result = await self._client.count(
            collection_name=self._collection_name,
            exact=True,
        )

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.QDRANT_COUNT_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.QDRANT_OPERATIONS_TOTAL, labels={"operation": "count"}
        )
        return int(result.count)

    async def clear(self) -> None:
        start = monotonic()
        if not await self._client.collection_exists(self._collection_name):
            logger.info("Collection %s does not exist, nothing to clear", self._collection_name)
            return

        await self._client.delete_collection(self._collection_name)
        logger.info("Dropped collection %s", self._collection_name)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.QDRANT_CLEAR_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.QDRANT_OPERATIONS_TOTAL, labels={"operation": "clear"}
        )
