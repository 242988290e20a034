"""
Document validity: a document is invalid iff any error-type finding was counted.
"""

from ccda_validation.models.results import ResultMetadata

ERROR = "Error"


def is_document_valid(metadata: ResultMetadata) -> bool:
    """
    Evaluate validity from per-type counts.

    Any count entry whose type name contains "error" (any case) with a
    count above zero makes the document invalid. Counts are taken before
    severity filtering, so validity does not depend on what is displayed.
    """
    for result_type, count in metadata.result_counts.items():
        if ERROR.lower() in result_type.lower() and count > 0:
            return False
    return True


def set_document_validity(metadata: ResultMetadata) -> ResultMetadata:
    metadata.valid = is_document_valid(metadata)
    return metadata
