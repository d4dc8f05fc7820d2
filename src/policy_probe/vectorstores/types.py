from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class VectorItem:
    id: str
    vector: list[float]
    payload: Mapping[str, Any]
