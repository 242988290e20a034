"""
Finding model: a single observation reported by a validator stage.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ccda_validation.models.enums import ValidationResultType


class Finding(BaseModel):
    """
    One issue or observation reported by a validation stage.

    Immutable once produced; the pipeline only reorders, counts and filters
    findings, it never edits them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: ValidationResultType = Field(..., description="Finding classification")
    description: str = Field(..., description="Human-readable finding message")
    is_schema_error: bool = Field(
        default=False,
        description="True if the finding comes from a schema-structural failure",
    )
    xpath: Optional[str] = Field(default=None, description="Location of the finding in the document")
    document_line_number: Optional[str] = Field(default=None)
    expected_value: Optional[str] = Field(default=None)
    actual_value: Optional[str] = Field(default=None)

    @property
    def pretty_name(self) -> str:
        """Human-readable type label used for severity matching."""
        return self.type.pretty_name
