# src/policy_probe/vectorstores/config.py

from dataclasses import dataclass
from typing import Literal

POLICY_SEGMENT_COLLECTION = "PolicySegment"

Distance = Literal["cosine", "dot", "euclid"]


@dataclass(frozen=True)
class StoreConfig:
    """Where segments live.

    Immutable. Explicit. No magic defaults from environment.
    With neither ``url`` nor ``path`` the store runs in memory.
    """

    vector_size: int
    collection_name: str = POLICY_SEGMENT_COLLECTION
    url: str | None = None
    path: str | None = None
    api_key: str | None = None  # only used with url
    distance: Distance = "cosine"
    on_disk: bool = False
