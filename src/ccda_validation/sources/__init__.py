"""
Document acquisition.

- document_source.py: upload, cached-path and zip archive sources
- exceptions.py: DocumentAcquisitionError
"""

from ccda_validation.sources.exceptions import DocumentAcquisitionError
from ccda_validation.sources.document_source import (
    DocumentSource,
    PathDocument,
    UploadedDocument,
    ZipDocument,
    decode_document,
    from_upload,
)

__all__ = [
    "DocumentAcquisitionError",
    "DocumentSource",
    "UploadedDocument",
    "ZipDocument",
    "PathDocument",
    "decode_document",
    "from_upload",
]
