"""
Multi-stage validation pipeline (3 stages + result normalization).

- pipeline.py: Orchestrator for document acquisition and all validator stages
- stages.py: Validator stage protocol, stage outcomes, validator loading
- gate.py: Stage eligibility by objective and request shape
- aggregator.py: Merge findings and count them by type
- validity.py: Document validity from per-type counts
- severity.py: Severity whitelist filter on returned findings
- translator.py: Failure classification and translation into outcomes
"""

from .exceptions import (
    CCDAValidationError,
    DocumentParseError,
    DocumentTypeMismatchError,
    StageUnavailableError,
)
from .gate import StageGate, StagePlan
from .pipeline import ValidationPipeline
from .stages import StageFailed, StageOutcome, StageSucceeded, ValidationStage

__all__ = [
    # Main pipeline
    "ValidationPipeline",
    "StageGate",
    "StagePlan",
    # Stage contract
    "ValidationStage",
    "StageOutcome",
    "StageSucceeded",
    "StageFailed",
    # Exceptions (raised by sources and validator stages)
    "CCDAValidationError",
    "DocumentParseError",
    "DocumentTypeMismatchError",
    "StageUnavailableError",
]
