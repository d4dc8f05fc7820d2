# src/policy_probe/upload/config.py

from dataclasses import dataclass

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB


@dataclass(frozen=True)
class UploadConfig:
    max_file_size: int = MAX_FILE_SIZE
    allowed_extensions: tuple[str, ...] = (".txt", ".md", ".markdown", ".pdf")
    allowed_mime_types: tuple[str, ...] = (
        "text/plain",
        "text/markdown",
        "application/pdf",
        "application/octet-stream",
    )
    source_page: int = 1
