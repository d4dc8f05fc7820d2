# tests/unit/vectorstores/test_qdrant_segment_store.py

import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio

from policy_probe.vectorstores import (
    QdrantSegmentStore,
    StoreConfig,
    VectorItem,
    create_segment_store,
)


def make_id(name: str) -> str:
    """Deterministic UUID so local Qdrant accepts the point id."""
    return str(uuid.uuid5(uuid.NAMESPACE_DNS, name))


def _item(name: str, vector: list[float] | None = None) -> VectorItem:
    return VectorItem(
        id=make_id(name),
        vector=vector or [1.0, 0.0, 0.0],
        payload={
            "content": f"Segment {name} has enough content.",
            "parent_heading": "Leave",
            "top_level_section": "Policy",
            "section_path": "1.1",
            "source_page": 1,
        },
    )


@pytest_asyncio.fixture
async def store() -> AsyncGenerator[QdrantSegmentStore, None]:
    store = QdrantSegmentStore(collection_name="test_segments", vector_size=3)
    yield store
    await store.close()


class TestQdrantSegmentStore:
    @pytest.mark.asyncio
    async def test_count_is_zero_before_first_write(
        self, store: QdrantSegmentStore
    ) -> None:
        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_upsert_then_count(self, store: QdrantSegmentStore) -> None:
        await store.upsert(items=[_item("a"), _item("b"), _item("c")])

        assert await store.count() == 3

    @pytest.mark.asyncio
    async def test_upsert_same_id_replaces(self, store: QdrantSegmentStore) -> None:
        await store.upsert(items=[_item("a")])
        await store.upsert(items=[_item("a", vector=[0.0, 1.0, 0.0])])

        assert await store.count() == 1

    @pytest.mark.asyncio
    async def test_payload_is_stored(self, store: QdrantSegmentStore) -> None:
        await store.upsert(items=[_item("a")])

        points = await store._client.retrieve(
            collection_name=store.collection_name,
            ids=[make_id("a")],
            with_payload=True,
        )

        assert points[0].payload == dict(_item("a").payload)

    @pytest.mark.asyncio
    async def test_clear_drops_everything(self, store: QdrantSegmentStore) -> None:
        await store.upsert(items=[_item("a"), _item("b")])

        await store.clear()

        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_collection_is_recreated_after_clear(
        self, store: QdrantSegmentStore
    ) -> None:
        await store.upsert(items=[_item("a")])
        await store.clear()

        await store.upsert(items=[_item("b")])

        assert await store.count() == 1

    @pytest.mark.asyncio
    async def test_clear_without_collection_is_noop(
        self, store: QdrantSegmentStore
    ) -> None:
        await store.clear()

        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_empty_upsert_creates_nothing(self, store: QdrantSegmentStore) -> None:
        await store.upsert(items=[])

        assert not await store._client.collection_exists(store.collection_name)

    @pytest.mark.asyncio
    async def test_rejects_wrong_vector_size(self, store: QdrantSegmentStore) -> None:
        with pytest.raises(ValueError, match="expected 3"):
            await store.upsert(items=[_item("a", vector=[1.0, 0.0])])


class TestCreateSegmentStore:
    @pytest.mark.asyncio
    async def test_creates_in_memory_store(self) -> None:
        store = create_segment_store(StoreConfig(vector_size=3))

        assert isinstance(store, QdrantSegmentStore)
        assert store.collection_name == "PolicySegment"
        await store.close()

    def test_raises_on_bad_vector_size(self) -> None:
        with pytest.raises(ValueError, match="vector_size must be > 0"):
            create_segment_store(StoreConfig(vector_size=0))

    def test_raises_on_unknown_distance(self) -> None:
        with pytest.raises(ValueError, match="Unknown distance"):
            create_segment_store(StoreConfig(vector_size=3, distance="manhattan"))  # type: ignore[arg-type]
