from dataclasses import dataclass
from typing import Protocol

from policy_probe.observability.base import MetricsHook


@dataclass(frozen=True)
class Embedding:
    vector: list[float]


class EmbeddingsClient(Protocol):
    """Computes one vector per input text, in input order.

    policy-probe ships no implementation; ingestion only embeds chunk
    ``content``, never the heading or path fields.
    """

    metrics_hook: MetricsHook

    async def embed(self, texts: list[str]) -> list[Embedding]: ...
