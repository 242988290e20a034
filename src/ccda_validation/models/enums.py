"""
Enumerations for the C-CDA validation data models.

ValidationResultType is a closed taxonomy: validator stages may only report
findings classified by one of these types.
"""

from enum import Enum
from typing import Optional


class ValidationResultType(str, Enum):
    """
    Classification of a single validator finding.

    The enum value is the human-readable "pretty name" used in responses,
    per-type counts and severity filtering.
    """

    CCDA_MDHT_CONFORMANCE_ERROR = "C-CDA MDHT Conformance Error"
    CCDA_MDHT_CONFORMANCE_WARN = "C-CDA MDHT Conformance Warning"
    CCDA_MDHT_CONFORMANCE_INFO = "C-CDA MDHT Conformance Info"
    VOCABULARY_CONFORMANCE_ERROR = "ONC 2015 S&CC Vocabulary Validation Conformance Error"
    VOCABULARY_CONFORMANCE_WARN = "ONC 2015 S&CC Vocabulary Validation Conformance Warning"
    VOCABULARY_CONFORMANCE_INFO = "ONC 2015 S&CC Vocabulary Validation Conformance Info"
    REF_CCDA_ERROR = "ONC 2015 S&CC Reference C-CDA Validation Error"
    REF_CCDA_WARN = "ONC 2015 S&CC Reference C-CDA Validation Warning"
    REF_CCDA_INFO = "ONC 2015 S&CC Reference C-CDA Validation Info"

    @property
    def pretty_name(self) -> str:
        return self.value


class SeverityLevel(str, Enum):
    """
    Severity threshold requested by a caller.

    Anything that is not one of these (including no value at all) means
    "do not filter".
    """

    ERROR = "Error"
    WARNING = "Warning"

    @classmethod
    def from_token(cls, token: Optional[str]) -> Optional["SeverityLevel"]:
        """Match a request token case-insensitively; None if unrecognized."""
        if not token:
            return None
        for level in cls:
            if token.lower() == level.value.lower():
                return level
        return None


class StageName(str, Enum):
    """Validator stages, in execution order."""

    SCHEMA = "schema"
    VOCABULARY = "vocabulary"
    CONTENT = "content"


class RequestShape(str, Enum):
    """
    Supported request shapes.

    RUN_ALL runs every stage the objective allows and never filters.
    SELECTIVE honours per-stage flags and filters by severity.
    """

    RUN_ALL = "run_all"
    SELECTIVE = "selective"


class FailurePolicy(str, Enum):
    """How a failed request is surfaced to the caller."""

    SERVICE_FAULT = "service_fault"
    DOCUMENT_INVALID = "document_invalid"


class FailureKind(str, Enum):
    """Failure taxonomy used to pick the user-facing message prefix."""

    IO = "io"
    PARSE = "parse"
    TYPE_MISMATCH = "type_mismatch"
    UNCLASSIFIED = "unclassified"
