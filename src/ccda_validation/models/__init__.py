"""
Pydantic data models for the C-CDA validation service.

Includes:
- Enums (ValidationResultType, SeverityLevel, StageName, RequestShape, FailurePolicy, FailureKind)
- Finding (single validator observation)
- Result models (ResultMetadata, ValidationOutcome)
- ValidationRequest (per-request pipeline configuration)
"""

from ccda_validation.models.enums import (
    FailureKind,
    FailurePolicy,
    RequestShape,
    SeverityLevel,
    StageName,
    ValidationResultType,
)
from ccda_validation.models.findings import Finding
from ccda_validation.models.request import ValidationRequest
from ccda_validation.models.results import ResultMetadata, ValidationOutcome

__all__ = [
    # Enums
    "ValidationResultType",
    "SeverityLevel",
    "StageName",
    "RequestShape",
    "FailurePolicy",
    "FailureKind",
    # Findings and results
    "Finding",
    "ResultMetadata",
    "ValidationOutcome",
    # Request
    "ValidationRequest",
]
