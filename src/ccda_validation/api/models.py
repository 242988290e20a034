"""
API-specific request and response models for FastAPI endpoints.

Validation responses are the core ValidationOutcome; these models cover
the path-based request body and service status endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class FileValidationRequest(BaseModel):
    """Request to validate a document already present in the shared document cache."""

    validation_objective: str = Field(
        description="Validation objective naming the rule-set profile",
        examples=["170.315_b1_ToC_Amb", "C-CDA_IG_Only"],
    )
    reference_file_name: str = Field(
        default="",
        description="Reference file name passed through to the validators",
    )
    ccda_reference_file_name: str = Field(
        description="Path of the C-CDA document, relative to the shared document cache",
        min_length=1,
    )
    severity_level: Optional[str] = Field(
        default=None,
        description="Severity hint passed to the validators",
        examples=["Error", "Warning"],
    )


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(
        description="Overall health status",
        examples=["healthy", "degraded"]
    )
    version: str = Field(
        description="Service version",
        examples=["0.1.0"]
    )
    stages: dict[str, str] = Field(
        description="Validator configuration per stage",
        examples=[{"schema": "configured", "vocabulary": "configured", "content": "not_configured"}]
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Health check timestamp (UTC)"
    )


class ErrorResponse(BaseModel):
    """Standard error response format for transport-level failures."""

    error: str = Field(
        description="Error code or type",
        examples=["invalid_request", "internal_error"]
    )
    message: str = Field(
        description="Human-readable error message"
    )
    details: Optional[list] = Field(
        default=None,
        description="Additional error details (e.g., request field errors)"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Error timestamp (UTC)"
    )
