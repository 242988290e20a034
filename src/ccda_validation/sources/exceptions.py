"""
Exceptions raised while acquiring a document.
"""


class DocumentAcquisitionError(Exception):
    """
    The document bytes could not be read.

    Wraps every low-level failure raised while reading an upload, a cached
    file or a zip archive.
    """

    def __init__(self, message: str, cause: BaseException | None = None, source_name: str | None = None):
        """
        Initialize acquisition error.

        Args:
            message: Error description
            cause: Original low-level exception
            source_name: Name of the document being read
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details: dict[str, str] = {}
        if cause is not None:
            self.details["cause_type"] = type(cause).__name__
        if source_name:
            self.details["source_name"] = source_name
