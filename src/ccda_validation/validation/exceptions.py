"""
Exceptions raised by validator stages.

The pipeline never lets these escape to the caller: each one is classified
and translated into a structured ValidationOutcome. Stages may raise the
parse and type-mismatch errors below to pick the matching message prefix.
"""

from typing import Any


class CCDAValidationError(Exception):
    """
    Base exception for all C-CDA validation errors.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize validation error.

        Args:
            message: Human-readable error description
            details: Structured error data for logging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class DocumentParseError(CCDAValidationError):
    """
    The document is not well-formed XML or violates required schema expectations.
    """


class DocumentTypeMismatchError(CCDAValidationError):
    """
    The document content does not match the expected structural type.

    Typically a missing or wrong HL7 v3 root namespace.
    """


class StageUnavailableError(CCDAValidationError):
    """
    A stage was invoked but no validator implementation is configured for it.
    """

    def __init__(self, stage: str):
        super().__init__(
            f"No {stage} validator is configured for this service",
            details={"stage": stage},
        )
        self.stage = stage
