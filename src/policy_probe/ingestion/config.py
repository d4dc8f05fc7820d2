# src/policy_probe/ingestion/config.py

from dataclasses import dataclass


@dataclass(frozen=True)
class IngestionConfig:
    batch_size: int = 100
    max_attempts: int = 3  # per batch, transport errors only

    def __post_init__(self) -> None:
        if self.batch_size <= 0:
            raise ValueError("batch_size must be > 0")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
