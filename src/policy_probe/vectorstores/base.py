from collections.abc import Iterable
from typing import Protocol

from policy_probe.observability.base import MetricsHook

from .types import VectorItem


class SegmentStore(Protocol):
    """Index holding policy segments and their content vectors."""

    metrics_hook: MetricsHook

    async def upsert(self, *, items: Iterable[VectorItem]) -> None: ...

    async def count(self) -> int:
        """Number of stored segments; 0 when the index does not exist yet."""
        ...

    async def clear(self) -> None:
        """
        Drop every stored segment.
        The index is recreated with the same schema on next write.
        """
        ...

    async def close(self) -> None: ...
