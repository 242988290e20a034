"""
Result models returned by the validation pipeline.

ResultMetadata is built once per request, filled in during aggregation and
validity evaluation, and then wrapped in a ValidationOutcome for the caller.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ccda_validation.models.enums import ValidationResultType
from ccda_validation.models.findings import Finding


class ResultMetadata(BaseModel):
    """Aggregate view over the findings of one validation request."""

    ccda_document_type: Optional[str] = Field(
        default=None,
        description="Validation objective echoed back to the caller",
    )
    service_error: bool = Field(
        default=False,
        description="True only when the service itself failed",
    )
    service_error_message: Optional[str] = Field(
        default=None,
        description="Present only when service_error is True",
    )
    valid: bool = Field(default=False, description="Overall document validity")
    cda_schema_validation_error_message: Optional[str] = Field(
        default=None,
        description="Structural failure message when the document could not be processed",
    )
    ccda_file_name: Optional[str] = Field(default=None)
    ccda_file_contents: Optional[str] = Field(default=None)
    result_counts: dict[str, int] = Field(
        default_factory=dict,
        description="Finding type pretty name -> occurrence count",
    )

    def add_count(self, result_type: ValidationResultType) -> None:
        name = result_type.pretty_name
        self.result_counts[name] = self.result_counts.get(name, 0) + 1


class ValidationOutcome(BaseModel):
    """Top-level response: metadata plus the (possibly filtered) findings."""

    model_config = ConfigDict(frozen=True)

    results_metadata: ResultMetadata
    ccda_validation_results: list[Finding] = Field(default_factory=list)
