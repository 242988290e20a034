"""Monitoring and metrics instrumentation for the C-CDA validation service.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from ccda_validation.monitoring.metrics import (
    stage_duration_seconds,
    stage_executions_total,
    validation_requests_total,
)

__all__ = [
    "validation_requests_total",
    "stage_executions_total",
    "stage_duration_seconds",
]
