import logging
from dataclasses import dataclass
from pathlib import Path
from time import monotonic

from policy_probe.chunking import chunk_document
from policy_probe.ingestion.service import IngestionService
from policy_probe.observability import names
from policy_probe.observability.base import MetricsHook, NoOpMetricsHook
from policy_probe.parsers import extractor_for

from .config import UploadConfig

logger = logging.getLogger(__name__)


class FileValidationError(ValueError):
    pass


@dataclass(frozen=True)
class UploadResult:
    success: bool
    total_chunks: int
    message: str
    error_count: int = 0


class UploadService:
    """Turns an uploaded file into stored policy segments.

    Flow: optional clear, text extraction, chunking, ingestion. The uploaded
    file is removed once processing ends, successful or not.
    """

    def __init__(
        self,
        *,
        ingestion: IngestionService,
        config: UploadConfig = UploadConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._ingestion = ingestion
        self._config = config
        self.metrics_hook = metrics_hook

    def validate_file(self, *, filename: str, size: int, mime_type: str) -> None:
        """Reject oversized files and unsupported types.

        A file passes the type check if either its MIME type or its extension
        is allowed; browsers often send ``application/octet-stream``.

        Raises:
            FileValidationError: If the file should not be processed.
        """
        if size > self._config.max_file_size:
            self.metrics_hook.increment(
                names.UPLOADS_REJECTED_TOTAL, labels={"reason": "size"}
            )
            limit_mb = self._config.max_file_size // (1024 * 1024)
            raise FileValidationError(f"file size exceeds {limit_mb}MB limit")

        has_valid_mime_type = mime_type in self._config.allowed_mime_types
        has_valid_extension = filename.lower().endswith(
            self._config.allowed_extensions
        )
        if not has_valid_mime_type and not has_valid_extension:
            self.metrics_hook.increment(
                names.UPLOADS_REJECTED_TOTAL, labels={"reason": "type"}
            )
            supported = ", ".join(self._config.allowed_extensions)
            raise FileValidationError(
                f"invalid file type, only {supported} files are supported"
            )

    def read_file_content(self, path: str | Path, original_name: str) -> str:
        extracted = extractor_for(original_name).extract(path)
        logger.info(
            "Extracted %.2f KB of %s text from %s",
            len(extracted.text) / 1024,
            extracted.source_type,
            original_name,
        )
        self.metrics_hook.record_gauge(names.UPLOAD_TEXT_SIZE, len(extracted.text))
        return extracted.text

    async def process_upload(
        self,
        path: str | Path,
        original_name: str,
        *,
        clear_existing: bool = False,
    ) -> UploadResult:
        start = monotonic()
        logger.info("Processing uploaded file: %s", original_name)
        try:
            if clear_existing:
                await self._ingestion.clear_all()

            content = self.read_file_content(path, original_name)
            chunks = chunk_document(
                content,
                source_page=self._config.source_page,
                metrics_hook=self.metrics_hook,
            )
            if not chunks:
                logger.warning("No chunks produced from %s", original_name)
                result = UploadResult(
                    success=False,
                    total_chunks=0,
                    message="No content could be chunked from document",
                )
            else:
                report = await self._ingestion.ingest_chunks(chunks)
                result = UploadResult(
                    success=report.error_count == 0,
                    total_chunks=len(chunks),
                    message=(
                        f"Successfully ingested {report.success_count} "
                        f"of {len(chunks)} chunks from document"
                    ),
                    error_count=report.error_count,
                )
        finally:
            Path(path).unlink(missing_ok=True)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.UPLOAD_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.UPLOADS_TOTAL, labels={"success": str(result.success).lower()}
        )
        logger.info("Upload complete: %s", result.message)
        return result
