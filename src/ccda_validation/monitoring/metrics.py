"""Custom Prometheus metrics for the C-CDA validation service.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- validation_requests_total{outcome="service_error"} (validator infrastructure failing)
- stage_duration_seconds (a stalled validator blocks its worker thread)
"""

from prometheus_client import Counter, Histogram

# === Request Metrics ===

validation_requests_total = Counter(
    "ccda_validation_requests_total",
    "Total validation requests by request shape and outcome",
    ["shape", "outcome"],
)
"""
Validation requests counter.

Labels:
- shape: run_all, selective
- outcome: valid, invalid, service_error, document_error
"""

# === Stage Metrics ===

stage_executions_total = Counter(
    "ccda_stage_executions_total",
    "Total validator stage executions by stage and result",
    ["stage", "result"],
)
"""
Stage executions counter.

Labels:
- stage: document, schema, vocabulary, content
- result: ok, io, parse, type_mismatch, unclassified
"""

stage_duration_seconds = Histogram(
    "ccda_stage_duration_seconds",
    "Pipeline step duration in seconds",
    ["stage"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)
"""
Step duration histogram.

Labels:
- stage: document, schema, vocabulary, content, aggregate, filter

Alert thresholds:
- WARN: p95 > 10s for any validator stage
"""
