"""
Validation request configuration.

A single ValidationRequest drives the pipeline for both request shapes:
which stages to attempt, the severity token, and how failures surface.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ccda_validation.models.enums import FailurePolicy, RequestShape, StageName


class ValidationRequest(BaseModel):
    """Per-request pipeline configuration."""

    model_config = ConfigDict(frozen=True)

    validation_objective: str = Field(..., description="Objective naming the rule-set profile")
    reference_file_name: str = Field(
        default="",
        description="Opaque reference name passed through to the stages",
    )
    severity_level: Optional[str] = Field(
        default=None,
        description="Severity hint for stages and, in the selective shape, the filter threshold",
    )
    shape: RequestShape = RequestShape.RUN_ALL
    run_schema: bool = True
    run_vocabulary: bool = True
    run_content: bool = True
    failure_policy: FailurePolicy = FailurePolicy.SERVICE_FAULT

    @classmethod
    def run_everything(
        cls,
        validation_objective: str,
        reference_file_name: str = "",
        severity_level: Optional[str] = None,
    ) -> "ValidationRequest":
        """Every stage the objective allows; failures are service faults."""
        return cls(
            validation_objective=validation_objective,
            reference_file_name=reference_file_name,
            severity_level=severity_level,
            shape=RequestShape.RUN_ALL,
            failure_policy=FailurePolicy.SERVICE_FAULT,
        )

    @classmethod
    def selective(
        cls,
        validation_objective: str,
        reference_file_name: str = "",
        severity_level: Optional[str] = None,
        run_schema: bool = True,
        run_vocabulary: bool = True,
        run_content: bool = True,
    ) -> "ValidationRequest":
        """Caller-selected stages with severity filtering; failures mark the document invalid."""
        return cls(
            validation_objective=validation_objective,
            reference_file_name=reference_file_name,
            severity_level=severity_level,
            shape=RequestShape.SELECTIVE,
            run_schema=run_schema,
            run_vocabulary=run_vocabulary,
            run_content=run_content,
            failure_policy=FailurePolicy.DOCUMENT_INVALID,
        )

    @property
    def applies_severity_filter(self) -> bool:
        return self.shape is RequestShape.SELECTIVE

    def requests_stage(self, stage: StageName) -> bool:
        if self.shape is RequestShape.RUN_ALL:
            return True
        return {
            StageName.SCHEMA: self.run_schema,
            StageName.VOCABULARY: self.run_vocabulary,
            StageName.CONTENT: self.run_content,
        }[stage]
