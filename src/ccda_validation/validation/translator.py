"""
Exception translation: turn a failed step into a structured outcome.

Failures never propagate out of the pipeline. How a failure is surfaced
depends on the request's FailurePolicy:

- SERVICE_FAULT: service_error is set and service_error_message carries a
  category-specific prefix plus the failure detail.
- DOCUMENT_INVALID: service_error stays False, the document is marked
  invalid and the bare failure detail goes to
  cda_schema_validation_error_message.

Both policies stamp the objective onto ccda_document_type so a failed
response can be matched to its request.
"""

import traceback
from xml.etree.ElementTree import ParseError as ElementTreeParseError
from xml.parsers.expat import ExpatError
from xml.sax import SAXException

import structlog

from ccda_validation.models.enums import FailureKind, FailurePolicy
from ccda_validation.models.results import ResultMetadata
from ccda_validation.sources.exceptions import DocumentAcquisitionError
from ccda_validation.validation.exceptions import (
    DocumentParseError,
    DocumentTypeMismatchError,
)
from ccda_validation.validation.stages import StageFailed

logger = structlog.get_logger(__name__)

ERROR_GENERAL_PREFIX = "The service has encountered "
ERROR_PARSING_PREFIX = ERROR_GENERAL_PREFIX + "an error parsing the document. "
ERROR_FOLLOWING_ERROR_POSTFIX = "the following error: "
ERROR_IO_EXCEPTION = ERROR_GENERAL_PREFIX + "the following input/output error: "
ERROR_TYPE_MISMATCH = (
    ERROR_PARSING_PREFIX
    + "Please verify the document is valid against schema and "
    + "contains a v3 namespace definition: "
)
ERROR_PARSE_EXCEPTION = (
    ERROR_PARSING_PREFIX
    + "Please verify the document does not contain in-line XSL styling and/or address "
    + ERROR_FOLLOWING_ERROR_POSTFIX
)
ERROR_GENERIC_EXCEPTION = ERROR_GENERAL_PREFIX + ERROR_FOLLOWING_ERROR_POSTFIX

PREFIXES: dict[FailureKind, str] = {
    FailureKind.IO: ERROR_IO_EXCEPTION,
    FailureKind.PARSE: ERROR_PARSE_EXCEPTION,
    FailureKind.TYPE_MISMATCH: ERROR_TYPE_MISMATCH,
    FailureKind.UNCLASSIFIED: ERROR_GENERIC_EXCEPTION,
}


def classify_failure(error: BaseException) -> FailureKind:
    """Map an exception onto the failure taxonomy."""
    if isinstance(error, (DocumentAcquisitionError, OSError)):
        return FailureKind.IO
    if isinstance(error, (DocumentParseError, SAXException, ElementTreeParseError, ExpatError)):
        return FailureKind.PARSE
    if isinstance(error, (DocumentTypeMismatchError, TypeError)):
        return FailureKind.TYPE_MISMATCH
    return FailureKind.UNCLASSIFIED


def describe_failure(error: BaseException) -> str:
    """The exception's own message, or a full traceback dump if it has none."""
    message = str(error)
    if message:
        return message
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


class ExceptionTranslator:
    """Applies a failed step to the request's ResultMetadata."""

    def translate(
        self,
        metadata: ResultMetadata,
        failure: StageFailed,
        validation_objective: str,
        policy: FailurePolicy,
    ) -> ResultMetadata:
        """
        Record a failure on the metadata according to policy.

        Args:
            metadata: Metadata for the current request (mutated in place)
            failure: The failed step
            validation_objective: Objective of the current request
            policy: How the failure should read to the caller

        Returns:
            The same metadata instance
        """
        detail = describe_failure(failure.error)
        error_details = getattr(failure.error, "details", None) or None

        if policy is FailurePolicy.SERVICE_FAULT:
            full_error = PREFIXES[failure.kind] + detail
            logger.error(
                full_error,
                step=failure.step,
                failure_kind=failure.kind.value,
                error_type=type(failure.error).__name__,
                details=error_details,
            )
            metadata.service_error = True
            metadata.service_error_message = full_error
        else:
            logger.warning(
                "Document could not be validated",
                step=failure.step,
                failure_kind=failure.kind.value,
                error_type=type(failure.error).__name__,
                error=detail,
                details=error_details,
            )
            metadata.service_error = False
            metadata.service_error_message = None
            metadata.valid = False
            metadata.cda_schema_validation_error_message = detail

        metadata.ccda_document_type = validation_objective
        return metadata
