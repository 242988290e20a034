"""
Validator stage contract and stage outcomes.

The schema, vocabulary and content validators live outside this service.
The pipeline only depends on the ValidationStage protocol below; concrete
validators are injected, or loaded from "module:attribute" import paths in
settings.

Instances are shared across concurrent requests and must not keep
per-request state.
"""

import importlib
from dataclasses import dataclass
from typing import Optional, Protocol, Union

import structlog

from ccda_validation.models.enums import FailureKind, StageName
from ccda_validation.models.findings import Finding
from ccda_validation.validation.exceptions import StageUnavailableError

logger = structlog.get_logger(__name__)


class ValidationStage(Protocol):
    """A single pluggable validation capability."""

    def validate_file(
        self,
        validation_objective: str,
        reference_file_name: str,
        ccda_file_contents: str,
        severity_level: Optional[str],
    ) -> Optional[list[Finding]]:
        """
        Validate document text and report findings.

        Returning None is treated the same as returning no findings.
        May raise; the pipeline classifies and translates the failure.
        """
        ...


class UnavailableStage:
    """Placeholder for a stage with no configured validator. Always fails."""

    def __init__(self, stage: StageName):
        self.stage = stage

    def validate_file(
        self,
        validation_objective: str,
        reference_file_name: str,
        ccda_file_contents: str,
        severity_level: Optional[str],
    ) -> list[Finding]:
        raise StageUnavailableError(self.stage.value)


@dataclass(frozen=True)
class StageSucceeded:
    """A step that completed; findings are in the order the stage produced them."""

    stage: StageName
    findings: list[Finding]

    @property
    def has_schema_error(self) -> bool:
        return any(finding.is_schema_error for finding in self.findings)


@dataclass(frozen=True)
class StageFailed:
    """
    A step that raised.

    stage is None when the failure happened while reading the document.
    """

    stage: Optional[StageName]
    kind: FailureKind
    error: BaseException

    @property
    def step(self) -> str:
        return self.stage.value if self.stage is not None else "document"


StageOutcome = Union[StageSucceeded, StageFailed]


def load_stage(import_path: Optional[str], stage: StageName) -> ValidationStage:
    """
    Instantiate a validator from a "module:attribute" import path.

    Args:
        import_path: Import path of a class or zero-argument factory
        stage: Stage the validator will serve (for logging / placeholder)

    Returns:
        Validator instance, or an UnavailableStage if no path is configured
    """
    if not import_path:
        logger.warning("No validator configured, stage will fail when invoked", stage=stage.value)
        return UnavailableStage(stage)

    module_name, _, attribute = import_path.partition(":")
    if not attribute:
        raise ValueError(f"Validator import path must look like 'module:attribute', got {import_path!r}")

    factory = getattr(importlib.import_module(module_name), attribute)
    validator = factory()
    logger.info("Validator loaded", stage=stage.value, validator=import_path)
    return validator
