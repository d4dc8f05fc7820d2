import itertools
from unittest.mock import AsyncMock, Mock

import httpx
import pytest
from qdrant_client.http.exceptions import (
    ResponseHandlingException,
    UnexpectedResponse,
)

from policy_probe.chunking.models import Chunk, ChunkMetadata
from policy_probe.embeddings.base import Embedding
from policy_probe.ingestion.config import IngestionConfig
from policy_probe.ingestion.service import IngestionReport, IngestionService
from policy_probe.observability import names


def _chunk(i: int) -> Chunk:
    return Chunk(
        content=f"Chunk number {i} carries enough text.",
        metadata=ChunkMetadata(
            parent_heading="Leave",
            top_level_section="Policy",
            section_path=f"1.{i}",
            source_page=1,
        ),
    )


def _embeddings_client() -> AsyncMock:
    client = AsyncMock()
    client.embed.side_effect = lambda texts: [
        Embedding(vector=[0.1, 0.2, 0.3]) for _ in texts
    ]
    return client


def _unexpected_response(status_code: int) -> UnexpectedResponse:
    return UnexpectedResponse(
        status_code=status_code,
        reason_phrase="error",
        content=b"",
        headers=httpx.Headers(),
    )


def _service(
    store: AsyncMock,
    embeddings: AsyncMock | None = None,
    batch_size: int = 100,
    metrics_hook: Mock | None = None,
) -> IngestionService:
    counter = itertools.count(1)
    kwargs = {"metrics_hook": metrics_hook} if metrics_hook else {}
    return IngestionService(
        store=store,
        embeddings=embeddings or _embeddings_client(),
        config=IngestionConfig(batch_size=batch_size),
        id_factory=lambda: f"id-{next(counter)}",
        **kwargs,
    )


@pytest.mark.asyncio
async def test_ingest_respects_batch_size() -> None:
    store = AsyncMock()
    service = _service(store, batch_size=2)

    report = await service.ingest_chunks([_chunk(i) for i in range(5)])

    assert report == IngestionReport(success_count=5, error_count=0)
    calls = store.upsert.call_args_list
    assert [len(call.kwargs["items"]) for call in calls] == [2, 2, 1]


@pytest.mark.asyncio
async def test_ingest_writes_segment_payload() -> None:
    store = AsyncMock()
    service = _service(store)

    await service.ingest_chunks([_chunk(1)])

    (item,) = store.upsert.call_args.kwargs["items"]
    assert item.id == "id-1"
    assert item.vector == [0.1, 0.2, 0.3]
    assert dict(item.payload) == {
        "content": "Chunk number 1 carries enough text.",
        "parent_heading": "Leave",
        "top_level_section": "Policy",
        "section_path": "1.1",
        "source_page": 1,
    }


@pytest.mark.asyncio
async def test_only_content_is_embedded() -> None:
    store = AsyncMock()
    embeddings = _embeddings_client()
    service = _service(store, embeddings)

    await service.ingest_chunks([_chunk(1), _chunk(2)])

    embeddings.embed.assert_awaited_once_with(
        [
            "Chunk number 1 carries enough text.",
            "Chunk number 2 carries enough text.",
        ]
    )


@pytest.mark.asyncio
async def test_ids_are_unique_per_chunk() -> None:
    store = AsyncMock()
    service = IngestionService(store=store, embeddings=_embeddings_client())

    await service.ingest_chunks([_chunk(i) for i in range(3)])

    ids = [item.id for item in store.upsert.call_args.kwargs["items"]]
    assert len(set(ids)) == 3


@pytest.mark.asyncio
async def test_failed_batch_is_counted_and_others_continue() -> None:
    store = AsyncMock()
    store.upsert.side_effect = [RuntimeError("boom"), None]
    metrics_hook = Mock()
    service = _service(store, batch_size=2, metrics_hook=metrics_hook)

    report = await service.ingest_chunks([_chunk(i) for i in range(4)])

    assert report == IngestionReport(success_count=2, error_count=2)
    assert store.upsert.await_count == 2
    metrics_hook.increment.assert_any_call(names.INGESTION_ERRORS_TOTAL, 2)


@pytest.mark.asyncio
async def test_transport_errors_are_retried() -> None:
    store = AsyncMock()
    store.upsert.side_effect = [
        ResponseHandlingException(ConnectionError("refused")),
        None,
    ]
    service = _service(store)

    report = await service.ingest_chunks([_chunk(1)])

    assert report.success_count == 1
    assert store.upsert.await_count == 2


@pytest.mark.asyncio
async def test_server_errors_are_retried() -> None:
    store = AsyncMock()
    store.upsert.side_effect = [_unexpected_response(503), None]
    service = _service(store)

    report = await service.ingest_chunks([_chunk(1)])

    assert report.success_count == 1
    assert store.upsert.await_count == 2


@pytest.mark.asyncio
async def test_client_errors_are_not_retried() -> None:
    store = AsyncMock()
    store.upsert.side_effect = _unexpected_response(400)
    service = _service(store)

    report = await service.ingest_chunks([_chunk(1)])

    assert report == IngestionReport(success_count=0, error_count=1)
    assert store.upsert.await_count == 1


@pytest.mark.asyncio
async def test_embedding_count_mismatch_fails_batch() -> None:
    store = AsyncMock()
    embeddings = AsyncMock()
    embeddings.embed.return_value = [Embedding(vector=[0.1])]
    service = _service(store, embeddings)

    report = await service.ingest_chunks([_chunk(1), _chunk(2)])

    assert report == IngestionReport(success_count=0, error_count=2)
    store.upsert.assert_not_called()


@pytest.mark.asyncio
async def test_empty_input_does_nothing() -> None:
    store = AsyncMock()
    embeddings = _embeddings_client()
    service = _service(store, embeddings)

    report = await service.ingest_chunks([])

    assert report.total == 0
    embeddings.embed.assert_not_called()
    store.upsert.assert_not_called()


@pytest.mark.asyncio
async def test_count_and_clear_delegate_to_store() -> None:
    store = AsyncMock()
    store.count.return_value = 42
    service = _service(store)

    assert await service.count() == 42
    await service.clear_all()

    store.clear.assert_awaited_once()


class TestIngestionConfig:
    def test_raises_on_zero_batch_size(self) -> None:
        with pytest.raises(ValueError, match="batch_size must be > 0"):
            IngestionConfig(batch_size=0)

    def test_raises_on_zero_attempts(self) -> None:
        with pytest.raises(ValueError, match="max_attempts must be >= 1"):
            IngestionConfig(max_attempts=0)
