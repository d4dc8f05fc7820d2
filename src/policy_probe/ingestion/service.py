import logging
import uuid
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from time import monotonic

from qdrant_client.http.exceptions import (
    ResponseHandlingException,
    UnexpectedResponse,
)
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from policy_probe.chunking.models import Chunk
from policy_probe.embeddings.base import EmbeddingsClient
from policy_probe.observability import names
from policy_probe.observability.base import MetricsHook, NoOpMetricsHook
from policy_probe.vectorstores.base import SegmentStore
from policy_probe.vectorstores.types import VectorItem

from .config import IngestionConfig
from .segments import PolicySegment

logger = logging.getLogger(__name__)

# Transport failures from the store client; 4xx responses are not retried.
RETRYABLE_ERRORS = (ResponseHandlingException, ConnectionError, TimeoutError)


def _is_server_error(exc: BaseException) -> bool:
    return (
        isinstance(exc, UnexpectedResponse)
        and exc.status_code is not None
        and exc.status_code >= 500
    )


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class IngestionReport:
    success_count: int
    error_count: int

    @property
    def total(self) -> int:
        return self.success_count + self.error_count


class IngestionService:
    """Writes chunks into a segment store, one batch at a time.

    A batch that still fails after retries is logged and counted as errors;
    the remaining batches are still attempted.
    """

    def __init__(
        self,
        *,
        store: SegmentStore,
        embeddings: EmbeddingsClient,
        config: IngestionConfig = IngestionConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._store = store
        self._embeddings = embeddings
        self._config = config
        self._id_factory = id_factory
        self.metrics_hook = metrics_hook

    async def ingest_chunks(self, chunks: Sequence[Chunk]) -> IngestionReport:
        if not chunks:
            logger.debug("No chunks to ingest")
            return IngestionReport(success_count=0, error_count=0)

        start = monotonic()
        batches = list(_batch_iter(chunks, self._config.batch_size))
        logger.info("Ingesting %d chunks in %d batches", len(chunks), len(batches))

        success_count = 0
        error_count = 0
        for number, batch in enumerate(batches, start=1):
            logger.debug("Processing batch %d/%d", number, len(batches))
            try:
                await self._ingest_batch(batch)
            except Exception:
                logger.error(
                    "Batch %d/%d failed (%d chunks)",
                    number,
                    len(batches),
                    len(batch),
                    exc_info=True,
                )
                error_count += len(batch)
                self.metrics_hook.increment(names.INGESTION_ERRORS_TOTAL, len(batch))
            else:
                success_count += len(batch)
                self.metrics_hook.increment(names.INGESTION_SEGMENTS_TOTAL, len(batch))
            self.metrics_hook.increment(names.INGESTION_BATCHES_TOTAL)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.INGESTION_DURATION, elapsed_ms)
        logger.info(
            "Ingestion complete: %d succeeded, %d failed", success_count, error_count
        )
        return IngestionReport(success_count=success_count, error_count=error_count)

    async def count(self) -> int:
        return await self._store.count()

    async def clear_all(self) -> None:
        logger.info("Clearing existing segments")
        await self._store.clear()

    async def _ingest_batch(self, batch: list[Chunk]) -> None:
        segments = [PolicySegment.from_chunk(chunk) for chunk in batch]
        embeddings = await self._embeddings.embed([s.content for s in segments])
        if len(embeddings) != len(segments):
            raise ValueError(
                f"expected {len(segments)} embeddings, got {len(embeddings)}"
            )

        items = [
            VectorItem(
                id=self._id_factory(),
                vector=embedding.vector,
                payload=segment.model_dump(),
            )
            for segment, embedding in zip(segments, embeddings, strict=True)
        ]

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._config.max_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
            retry=(
                retry_if_exception_type(RETRYABLE_ERRORS)
                | retry_if_exception(_is_server_error)
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                await self._store.upsert(items=items)


def _batch_iter(items: Sequence[Chunk], batch_size: int) -> Iterable[list[Chunk]]:
    for i in range(0, len(items), batch_size):
        yield list(items[i : i + batch_size])
