# src/policy_probe/observability/names.py

"""Standard metric names for policy-probe observability.

Use these constants instead of hardcoded strings so dashboards and tests
agree on spelling.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Chunking Metrics
# ============================================================================

# Duration
CHUNKING_DURATION = "chunking_duration"

# Counters (chunks accumulate over time)
CHUNKING_CHUNKS_CREATED = "chunking_chunks_created"
CHUNKING_FALLBACK_TOTAL = "chunking_fallback_total"

# Gauges
CHUNKING_SECTIONS_PARSED = "chunking_sections_parsed"


# ============================================================================
# Ingestion Metrics
# ============================================================================

# Duration
INGESTION_DURATION = "ingestion_duration"

# Counters
INGESTION_BATCHES_TOTAL = "ingestion_batches_total"
INGESTION_SEGMENTS_TOTAL = "ingestion_segments_total"
INGESTION_ERRORS_TOTAL = "ingestion_errors_total"


# ============================================================================
# Segment Store Metrics (Qdrant)
# ============================================================================

# Duration
QDRANT_UPSERT_DURATION = "qdrant_upsert_duration"
QDRANT_COUNT_DURATION = "qdrant_count_duration"
QDRANT_CLEAR_DURATION = "qdrant_clear_duration"

# Counters
QDRANT_OPERATIONS_TOTAL = "qdrant_operations_total"


# ============================================================================
# Upload Metrics
# ============================================================================

# Duration
UPLOAD_DURATION = "upload_duration"

# Counters
UPLOADS_TOTAL = "uploads_total"
UPLOADS_REJECTED_TOTAL = "uploads_rejected_total"

# Gauges
UPLOAD_TEXT_SIZE = "upload_text_size"
