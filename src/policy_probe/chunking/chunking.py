import logging
from time import monotonic

from policy_probe.observability import names
from policy_probe.observability.base import MetricsHook, NoOpMetricsHook

from .models import Chunk, Section
from .parser import parse_sections
from .segmenter import segment_flat, segment_sections

logger = logging.getLogger(__name__)


def chunk_document(
    text: str,
    source_page: int = 1,
    *,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[Chunk]:
    """Chunk a whole document, structurally when it has headings.

    Falls back to paragraph chunking when the parser finds no headings in
    non-blank text. Never raises for a string input; blank text yields [].
    """
    start = monotonic()
    sections = parse_sections(text)
    logger.debug("Found %d top-level sections", len(sections))

    if sections:
        chunks = segment_sections(sections, source_page=source_page)
        path = "structural"
    elif text.strip():
        logger.info("No structured sections found, using paragraph-based chunking")
        chunks = segment_flat(text, source_page=source_page)
        path = "fallback"
        metrics_hook.increment(names.CHUNKING_FALLBACK_TOTAL)
    else:
        chunks = []
        path = "empty"

    logger.info("Created %d chunks (%s)", len(chunks), path)

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(
        names.CHUNKING_DURATION, elapsed_ms, labels={"path": path}
    )
    metrics_hook.record_gauge(
        names.CHUNKING_SECTIONS_PARSED, _count_sections(sections)
    )
    metrics_hook.increment(names.CHUNKING_CHUNKS_CREATED, len(chunks))
    return chunks


def _count_sections(sections: list[Section]) -> int:
    return sum(1 + _count_sections(s.children) for s in sections)
